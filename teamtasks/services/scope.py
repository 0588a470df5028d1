# teamtasks/services/scope.py
from typing import Optional

from sqlalchemy.orm import Session

from teamtasks.models.employee import Employee
from teamtasks.models.user import UserRole
from teamtasks.utils.claims import Claims
from teamtasks.utils.permissions import Action, Resource, authorize


class TenantScope:
    """Caller context shared by the tenant-scoped services.

    Every query a service issues is filtered by ``tenant_id`` on top of the
    policy check, so a mistake in one layer does not leak another tenant's rows.
    """

    _UNRESOLVED = object()

    def __init__(self, db: Session, claims: Claims):
        self.db = db
        self.claims = claims
        self.tenant_id = claims.tenant_id
        self._own_employee = self._UNRESOLVED

    @property
    def is_admin(self) -> bool:
        return self.claims.role is UserRole.ADMIN

    @property
    def own_employee(self) -> Optional[Employee]:
        """Employee record linked to an employee caller (None until an admin onboards them)"""
        if self._own_employee is self._UNRESOLVED:
            if self.is_admin:
                self._own_employee = None
            else:
                self._own_employee = (
                    self.db.query(Employee)
                    .filter(Employee.user_id == self.claims.id, Employee.admin_id == self.tenant_id)
                    .first()
                )
        return self._own_employee

    @property
    def own_employee_id(self) -> Optional[int]:
        employee = self.own_employee
        return employee.id if employee else None

    def authorize(self, action: Action, resource: Optional[Resource] = None) -> None:
        employee_id = None if self.is_admin or resource is None else self.own_employee_id
        authorize(self.claims, action, resource, employee_id=employee_id)


class ScopedService:
    def __init__(self, scope: TenantScope):
        self.scope = scope
        self.db = scope.db

    @classmethod
    def for_claims(cls, db: Session, claims: Claims):
        return cls(TenantScope(db, claims))
