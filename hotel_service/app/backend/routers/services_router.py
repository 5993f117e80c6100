from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.catalog import ServiceOut, ServicePayload
from ..dependencies import require_admin
from ..services import catalog_service
from ..services.actor import Actor

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=List[ServiceOut])
def get_services(db: Session = Depends(get_db)):
    return catalog_service.list_services(db)


@router.post("", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServicePayload, db: Session = Depends(get_db), admin: Actor = Depends(require_admin)):
    return catalog_service.create_service(db, payload.name, payload.price, payload.description)


@router.get("/{service_id}", response_model=ServiceOut)
def get_service(service_id: int, db: Session = Depends(get_db)):
    return catalog_service.get_service(db, service_id)


@router.put("/{service_id}", response_model=ServiceOut)
def update_service(
    service_id: int,
    payload: ServicePayload,
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    return catalog_service.update_service(db, service_id, payload.name, payload.price, payload.description)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: int, db: Session = Depends(get_db), admin: Actor = Depends(require_admin)):
    catalog_service.delete_service(db, service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
