from sqlalchemy.orm import Session
from sqlalchemy import desc
from typing import List, Optional, Tuple
from datetime import datetime
from ..models.AdminAction import AdminAction


def add_admin_action(db: Session, admin_id: int, action_type: str, action_detail: Optional[str]) -> AdminAction:
    action = AdminAction(admin_id=admin_id, action_type=action_type, action_detail=action_detail)
    db.add(action)
    db.flush()
    return action


def get_admin_actions(
    db: Session,
    admin_id: Optional[int] = None,
    action_type: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    limit: int = 100,
    offset: int = 0
) -> Tuple[List[AdminAction], int]:
    """Повертає (сторінку дій, загальну кількість за фільтрами)."""
    query = db.query(AdminAction)
    if admin_id is not None:
        query = query.filter(AdminAction.admin_id == admin_id)
    if action_type:
        query = query.filter(AdminAction.action_type == action_type)
    if date_from:
        query = query.filter(AdminAction.action_timestamp >= date_from)
    if date_to:
        query = query.filter(AdminAction.action_timestamp <= date_to)

    total = query.count()
    actions = query.order_by(desc(AdminAction.action_timestamp), desc(AdminAction.id))\
        .offset(offset).limit(limit).all()
    return actions, total
