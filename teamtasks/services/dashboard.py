# teamtasks/services/dashboard.py
from typing import Any, Dict, List

from sqlalchemy import and_, case, func
from sqlalchemy.orm import joinedload

from teamtasks.models.employee import Employee
from teamtasks.models.task import Task, TaskPriority, TaskStatus
from teamtasks.services.scope import ScopedService
from teamtasks.utils.permissions import Action

TOP_EMPLOYEES = 5
RECENT_TASKS = 5


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks rounded to 2 decimals, 0 when there are none"""
    if not total:
        return 0.0
    return round(completed / total * 100, 2)


def empty_summary() -> Dict[str, Any]:
    return {
        "total_tasks": 0,
        "completed_tasks": 0,
        "in_progress_tasks": 0,
        "pending_tasks": 0,
        "high_priority_tasks": 0,
        "medium_priority_tasks": 0,
        "low_priority_tasks": 0,
        "completion_rate": 0.0,
        "total_employees": 0,
        "tasks_by_employee": [],
        "recent_tasks": [],
        "employee_name": None,
        "employee_email": None,
        "employee_department": None,
    }


class DashboardService(ScopedService):
    """Task statistics for the caller's tenant, or for an employee's own tasks"""

    def summary(self) -> Dict[str, Any]:
        self.scope.authorize(Action.READ_DASHBOARD)
        tenant_id = self.scope.tenant_id
        result = empty_summary()

        if self.scope.is_admin:
            task_filter = [Task.admin_id == tenant_id]
            employee_filter = [Employee.admin_id == tenant_id]
        else:
            employee = self.scope.own_employee
            if employee is None:
                # registered but not onboarded: zero state instead of an error
                result["employee_name"] = self.scope.claims.username
                result["employee_email"] = self.scope.claims.email
                return result
            task_filter = [Task.admin_id == tenant_id, Task.employee_id == employee.id]
            employee_filter = [Employee.admin_id == tenant_id, Employee.id == employee.id]
            result["employee_name"] = employee.name
            result["employee_email"] = employee.email
            result["employee_department"] = employee.department

        by_status = dict(
            self.db.query(Task.status, func.count(Task.id)).filter(*task_filter).group_by(Task.status).all()
        )
        by_priority = dict(
            self.db.query(Task.priority, func.count(Task.id)).filter(*task_filter).group_by(Task.priority).all()
        )
        total = sum(by_status.values())
        completed = by_status.get(TaskStatus.COMPLETED, 0)

        result.update(
            total_tasks=total,
            completed_tasks=completed,
            in_progress_tasks=by_status.get(TaskStatus.IN_PROGRESS, 0),
            pending_tasks=by_status.get(TaskStatus.PENDING, 0),
            high_priority_tasks=by_priority.get(TaskPriority.HIGH, 0),
            medium_priority_tasks=by_priority.get(TaskPriority.MEDIUM, 0),
            low_priority_tasks=by_priority.get(TaskPriority.LOW, 0),
            completion_rate=completion_rate(completed, total),
            total_employees=self.db.query(func.count(Employee.id)).filter(*employee_filter).scalar() or 0,
            tasks_by_employee=self._tasks_by_employee(employee_filter),
            recent_tasks=(
                self.db.query(Task)
                .options(joinedload(Task.employee))
                .filter(*task_filter)
                .order_by(Task.created_at.desc(), Task.id.desc())
                .limit(RECENT_TASKS)
                .all()
            ),
        )
        return result

    def _tasks_by_employee(self, employee_filter) -> List[Dict[str, Any]]:
        task_count = func.count(Task.id).label("task_count")
        completed = func.coalesce(
            func.sum(case((Task.status == TaskStatus.COMPLETED, 1), else_=0)), 0
        ).label("completed")

        rows = (
            self.db.query(Employee.id, Employee.name, task_count, completed)
            .outerjoin(Task, and_(Task.employee_id == Employee.id, Task.admin_id == Employee.admin_id))
            .filter(*employee_filter)
            .group_by(Employee.id, Employee.name)
            .order_by(task_count.desc(), Employee.name, Employee.id)
            .limit(TOP_EMPLOYEES)
            .all()
        )
        return [
            {"employee_id": row.id, "name": row.name, "task_count": row.task_count, "completed": int(row.completed)}
            for row in rows
        ]
