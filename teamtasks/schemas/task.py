# teamtasks/schemas/task.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from teamtasks.models.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    employee_id: int
    due_date: Optional[date] = None


class TaskUpdate(BaseModel):
    # full replacement, so every editable field is required
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    employee_id: int
    due_date: Optional[date] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    employee_id: int
    employee_name: Optional[str] = None
    admin_id: int
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
