import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from common.pydantic.admin_action import Pagination
from ..models.AdminAction import AdminAction
from ..repositories import admin_action_repository

logger = logging.getLogger(__name__)


def log_admin_action(db: Session, admin_id: int, action_type: str, detail: Optional[str]) -> Optional[AdminAction]:
    """
    Дописує запис у журнал дій адміністратора окремою транзакцією.

    Викликається після коміту основної операції. Помилка запису журналу
    логується і не піднімається далі, тож вже збережена зміна бронювання
    чи номера лишається в силі.
    """
    try:
        action = admin_action_repository.add_admin_action(db, admin_id, action_type, detail)
        db.commit()
        return action
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not write admin action %r for admin %s", action_type, admin_id)
        return None


def list_admin_actions(
    db: Session,
    admin_id: Optional[int] = None,
    action_type: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[List[AdminAction], Pagination]:
    actions, total = admin_action_repository.get_admin_actions(
        db,
        admin_id=admin_id,
        action_type=action_type,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )
    pagination = Pagination(
        total=total,
        limit=limit,
        offset=offset,
        page=offset // limit + 1,
        total_pages=(total + limit - 1) // limit,
    )
    return actions, pagination
