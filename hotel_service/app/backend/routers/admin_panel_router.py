from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from common.db.database import get_db
from common.pydantic.admin_action import AdminActionOut, AdminActionPage
from ..dependencies import require_admin
from ..services import admin_log
from ..services.actor import Actor

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/actions", response_model=AdminActionPage)
def get_admin_actions(
    admin_id: Optional[int] = Query(None),
    action_type: Optional[str] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    admin: Actor = Depends(require_admin),
):
    actions, pagination = admin_log.list_admin_actions(
        db,
        admin_id=admin_id,
        action_type=action_type,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )
    return AdminActionPage(
        actions=[AdminActionOut.model_validate(action) for action in actions],
        pagination=pagination,
    )
