from pydantic import BaseModel
from typing import List, Optional

from teamtasks.schemas.task import TaskOut


class EmployeeTaskCount(BaseModel):
    employee_id: int
    name: str
    task_count: int
    completed: int


class DashboardOut(BaseModel):
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    pending_tasks: int
    high_priority_tasks: int
    medium_priority_tasks: int
    low_priority_tasks: int
    completion_rate: float
    total_employees: int
    tasks_by_employee: List[EmployeeTaskCount] = []
    recent_tasks: List[TaskOut] = []

    # employee callers only
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None
    employee_department: Optional[str] = None
