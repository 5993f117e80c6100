from pydantic import BaseModel, ConfigDict
from typing import Optional

class UserOut(BaseModel):
    id: int
    login: str
    fullname: Optional[str] = None
    role: str
    email: Optional[str] = None
    phone_number: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
