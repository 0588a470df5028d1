from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime

from teamtasks.models.user import UserRole
from teamtasks.schemas.employee import EmployeeOut


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: EmailStr
    password: str
    role: UserRole = UserRole.EMPLOYEE
    # the join code of the admin whose tenant an employee registers into
    admin_code: Optional[str] = Field(default=None, alias="adminCode")

    model_config = ConfigDict(populate_by_name=True)


class UserLogin(BaseModel):
    username: str
    password: str


class AuthOut(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    admin_code: Optional[str] = Field(default=None, alias="adminCode")
    tenant_id: int
    token: str
    token_type: str = "bearer"

    model_config = ConfigDict(populate_by_name=True)


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    role: UserRole
    admin_code: Optional[str] = None
    admin_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MeOut(UserOut):
    # only filled for employees, and only once an admin has onboarded them
    employee: Optional[EmployeeOut] = None
