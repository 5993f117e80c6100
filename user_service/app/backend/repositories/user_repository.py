from sqlalchemy.orm import Session
from ..models.User import User
from typing import List, Optional

def get_all_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()

def get_user_by_id(db: Session, id: int) -> Optional[User]:
    return db.query(User).filter(User.id == id).first()
