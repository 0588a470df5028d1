# teamtasks/services/tasks.py
import logging
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from teamtasks.models.employee import Employee
from teamtasks.models.task import Task, TaskPriority, TaskStatus
from teamtasks.services.scope import ScopedService
from teamtasks.utils.exceptions import Forbidden, InvalidInput, NotFound
from teamtasks.utils.permissions import Action, Resource

logger = logging.getLogger(__name__)

CROSS_TENANT_ASSIGNMENT = "You can only assign tasks to your own employees"


class TaskService(ScopedService):
    """Tasks of one tenant. Only the owning admin creates, edits or deletes them;
    employees read and move the status of tasks on their own Employee record."""

    def _tenant_query(self):
        return self.db.query(Task).filter(Task.admin_id == self.scope.tenant_id)

    def _fetch(self, task_id: int) -> Optional[Task]:
        return (
            self._tenant_query()
            .options(joinedload(Task.employee))
            .filter(Task.id == task_id)
            .first()
        )

    def _resolve_employee(self, employee_id: int) -> int:
        found = (
            self.db.query(Employee.id)
            .filter(Employee.id == employee_id, Employee.admin_id == self.scope.tenant_id)
            .first()
        )
        if found is None:
            logger.warning("Admin %s tried to assign a task to employee %s", self.scope.tenant_id, employee_id)
            raise Forbidden(CROSS_TENANT_ASSIGNMENT)
        return found.id

    @contextmanager
    def _assignment(self):
        """Run a task write and commit it.

        fk_tasks_employee_tenant rejects an employee that vanished or belongs
        elsewhere, either when the statement runs or at commit.
        """
        try:
            yield
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Forbidden(CROSS_TENANT_ASSIGNMENT)

    def list(
        self,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        employee_id: Optional[int] = None,
    ) -> List[Task]:
        self.scope.authorize(Action.LIST_TASKS)
        query = self._tenant_query().options(joinedload(Task.employee))

        if not self.scope.is_admin:
            own_id = self.scope.own_employee_id
            if own_id is None:
                # registered but not onboarded yet
                return []
            query = query.filter(Task.employee_id == own_id)

        if status is not None:
            query = query.filter(Task.status == status)
        if priority is not None:
            query = query.filter(Task.priority == priority)
        if employee_id is not None:
            query = query.filter(Task.employee_id == employee_id)

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def get(self, task_id: int) -> Task:
        self.scope.authorize(Action.READ_TASK)
        task = self._fetch(task_id)
        if task is None:
            raise NotFound("Task not found")
        self.scope.authorize(Action.READ_TASK, Resource(task.admin_id, task.employee_id))
        return task

    def create(
        self,
        title: str,
        employee_id: int,
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Task:
        self.scope.authorize(Action.CREATE_TASK)
        title = (title or "").strip()
        if not title:
            raise InvalidInput("Title is required")

        task = Task(
            title=title,
            description=description or None,
            status=status,
            priority=priority,
            employee_id=self._resolve_employee(employee_id),
            admin_id=self.scope.tenant_id,
            due_date=due_date,
        )
        with self._assignment():
            self.db.add(task)

        logger.info("Admin %s created task %s for employee %s", self.scope.tenant_id, task.id, employee_id)
        return self._fetch(task.id)

    def update(
        self,
        task_id: int,
        title: str,
        employee_id: int,
        status: TaskStatus,
        priority: TaskPriority,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
    ) -> Task:
        """Full replacement of an existing task's editable fields"""
        self.scope.authorize(Action.UPDATE_TASK)
        title = (title or "").strip()
        if not title:
            raise InvalidInput("Title is required")
        employee_id = self._resolve_employee(employee_id)

        with self._assignment():
            updated = (
                self._tenant_query()
                .filter(Task.id == task_id)
                .update(
                    {
                        Task.title: title,
                        Task.description: description or None,
                        Task.status: status,
                        Task.priority: priority,
                        Task.employee_id: employee_id,
                        Task.due_date: due_date,
                    },
                    synchronize_session=False,
                )
            )
            if not updated:
                self.db.rollback()
                raise NotFound("Task not found")
        return self._fetch(task_id)

    def update_status(self, task_id: int, status: TaskStatus) -> Task:
        self.scope.authorize(Action.UPDATE_TASK_STATUS)
        task = self._tenant_query().filter(Task.id == task_id).first()
        if task is None:
            raise NotFound("Task not found")
        self.scope.authorize(Action.UPDATE_TASK_STATUS, Resource(task.admin_id, task.employee_id))

        # ownership is part of the UPDATE itself, so a reassignment in between cannot slip through
        query = self._tenant_query().filter(Task.id == task_id)
        if not self.scope.is_admin:
            query = query.filter(Task.employee_id == self.scope.own_employee_id)
        updated = query.update({Task.status: status}, synchronize_session=False)
        if not updated:
            self.db.rollback()
            raise Forbidden("You can only update your own tasks")
        self.db.commit()

        logger.info("User %s moved task %s to %s", self.scope.claims.id, task_id, status.value)
        return self._fetch(task_id)

    def delete(self, task_id: int) -> None:
        self.scope.authorize(Action.DELETE_TASK)
        deleted = self._tenant_query().filter(Task.id == task_id).delete(synchronize_session=False)
        if not deleted:
            self.db.rollback()
            raise NotFound("Task not found")
        self.db.commit()
