from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.user import UserOut
from hotel_service.app.backend.dependencies import require_admin
from ..repositories.user_repository import get_all_users, get_user_by_id

router = APIRouter(tags=["users"])


# повний список з контактами лише для адміністратора
@router.get("/users", response_model=List[UserOut], dependencies=[Depends(require_admin)])
def get_users(db: Session = Depends(get_db)):
    return get_all_users(db)


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    # цей ендпоінт використовує довідник гостей Hotel Service
    user = get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
