from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AdminActionOut(BaseModel):
    id: int
    admin_id: int
    action_type: str
    action_detail: Optional[str] = None
    action_timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    page: int
    total_pages: int


class AdminActionPage(BaseModel):
    actions: List[AdminActionOut]
    pagination: Pagination
