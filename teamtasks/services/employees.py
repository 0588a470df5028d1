# teamtasks/services/employees.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from teamtasks.models.employee import Employee
from teamtasks.models.user import User, UserRole
from teamtasks.services.scope import ScopedService
from teamtasks.utils.exceptions import Conflict, InvalidInput, NotFound
from teamtasks.utils.permissions import Action, Resource

logger = logging.getLogger(__name__)


def _require(value: str, message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInput(message)
    return value


class EmployeeService(ScopedService):
    """Employee roster of one tenant"""

    def _tenant_query(self):
        return self.db.query(Employee).filter(Employee.admin_id == self.scope.tenant_id)

    def list(self) -> List[Employee]:
        self.scope.authorize(Action.LIST_EMPLOYEES)
        query = self._tenant_query()
        if not self.scope.is_admin:
            # employees only ever see their own record
            query = query.filter(Employee.user_id == self.scope.claims.id)
        return query.order_by(Employee.name, Employee.id).all()

    def get(self, employee_id: int) -> Employee:
        self.scope.authorize(Action.READ_EMPLOYEE)
        employee = self._tenant_query().filter(Employee.id == employee_id).first()
        if employee is None:
            raise NotFound("Employee not found")
        self.scope.authorize(Action.READ_EMPLOYEE, Resource(employee.admin_id, employee.id))
        return employee

    def create(self, email: str, department: str, position: str) -> Employee:
        """Promote an already registered identity of this tenant into an Employee"""
        self.scope.authorize(Action.CREATE_EMPLOYEE)
        email = _require(email, "Email, department, and position are required").lower()
        department = _require(department, "Email, department, and position are required")
        position = _require(position, "Email, department, and position are required")

        user = (
            self.db.query(User)
            .filter(
                User.email == email,
                User.admin_id == self.scope.tenant_id,
                User.role == UserRole.EMPLOYEE,
            )
            .first()
        )
        if user is None:
            raise NotFound("User not found. User must register with your admin code first.")

        if self.db.query(Employee.id).filter(Employee.user_id == user.id).first() is not None:
            raise Conflict("This user is already added as an employee")

        employee = Employee(
            name=user.username,
            email=user.email,
            department=department,
            position=position,
            user_id=user.id,
            admin_id=self.scope.tenant_id,
        )
        self.db.add(employee)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent request linked the same identity first
            self.db.rollback()
            raise Conflict("This user is already added as an employee")
        self.db.refresh(employee)

        logger.info("Admin %s onboarded user %s as employee %s", self.scope.tenant_id, user.id, employee.id)
        return employee

    def update(self, employee_id: int, department: str, position: str) -> Employee:
        """Only department and position are editable; name, email and linkage are fixed"""
        self.scope.authorize(Action.UPDATE_EMPLOYEE)
        department = _require(department, "Department and position are required")
        position = _require(position, "Department and position are required")

        updated = (
            self._tenant_query()
            .filter(Employee.id == employee_id)
            .update({Employee.department: department, Employee.position: position}, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            raise NotFound("Employee not found")
        self.db.commit()
        return self.get(employee_id)

    def delete(self, employee_id: int) -> None:
        """Delete an employee; its tasks go with it through the foreign key cascade"""
        self.scope.authorize(Action.DELETE_EMPLOYEE)
        deleted = self._tenant_query().filter(Employee.id == employee_id).delete(synchronize_session=False)
        if not deleted:
            self.db.rollback()
            raise NotFound("Employee not found")
        self.db.commit()
        logger.info("Admin %s deleted employee %s", self.scope.tenant_id, employee_id)
