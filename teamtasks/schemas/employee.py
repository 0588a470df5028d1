from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class EmployeeCreate(BaseModel):
    # email of an identity that already registered with the admin's code
    email: EmailStr
    department: str
    position: str


class EmployeeUpdate(BaseModel):
    department: str
    position: str


class EmployeeOut(BaseModel):
    id: int
    name: str
    email: str
    department: str
    position: str
    user_id: Optional[int] = None
    admin_id: int
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
