# teamtasks/utils/permissions.py
"""Per-operation access policy.

Every request passes through here before it reaches the tenant-scoped
services, and the services call it again once the target row is loaded.

    Action                  Admin               Employee
    ----------------------  ------------------  ------------------------------
    list/read employees     own tenant          own Employee record only
    create/update/delete    own tenant          denied
      employee
    list/read tasks         own tenant          tasks on own Employee only
    create/update/delete    own tenant          denied
      task
    update task status      own tenant          tasks on own Employee only
    read dashboard          tenant aggregate    own aggregate
"""
import enum
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from teamtasks.models.user import UserRole
from teamtasks.utils.claims import Claims
from teamtasks.utils.exceptions import Forbidden

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    LIST_EMPLOYEES = "employees:list"
    READ_EMPLOYEE = "employees:read"
    CREATE_EMPLOYEE = "employees:create"
    UPDATE_EMPLOYEE = "employees:update"
    DELETE_EMPLOYEE = "employees:delete"
    LIST_TASKS = "tasks:list"
    READ_TASK = "tasks:read"
    CREATE_TASK = "tasks:create"
    UPDATE_TASK = "tasks:update"
    DELETE_TASK = "tasks:delete"
    UPDATE_TASK_STATUS = "tasks:update_status"
    READ_DASHBOARD = "dashboard:read"


@dataclass(frozen=True)
class Resource:
    """The tenant and owning Employee of a concrete row"""

    tenant_id: int
    employee_id: Optional[int] = None


POLICY: Dict[UserRole, FrozenSet[Action]] = {
    UserRole.ADMIN: frozenset(Action),
    UserRole.EMPLOYEE: frozenset({
        Action.LIST_EMPLOYEES,
        Action.READ_EMPLOYEE,
        Action.LIST_TASKS,
        Action.READ_TASK,
        Action.UPDATE_TASK_STATUS,
        Action.READ_DASHBOARD,
    }),
}

DENIAL_MESSAGES = {
    Action.READ_EMPLOYEE: "You can only view your own employee record",
    Action.READ_TASK: "You can only view your own tasks",
    Action.UPDATE_TASK_STATUS: "You can only update your own tasks",
}


def is_allowed(
    claims: Claims,
    action: Action,
    resource: Optional[Resource] = None,
    employee_id: Optional[int] = None,
) -> bool:
    """Decide whether the caller may perform ``action``.

    ``resource`` is the row being acted on, if any. ``employee_id`` is the
    caller's own linked Employee (None for admins and for employees who have
    not been onboarded yet).
    """
    if action not in POLICY.get(claims.role, frozenset()):
        return False
    if resource is None:
        return True
    if resource.tenant_id != claims.tenant_id:
        return False
    if claims.role is UserRole.EMPLOYEE:
        return employee_id is not None and resource.employee_id == employee_id
    return True


def authorize(
    claims: Claims,
    action: Action,
    resource: Optional[Resource] = None,
    employee_id: Optional[int] = None,
) -> None:
    """Raise Forbidden unless ``is_allowed``"""
    if is_allowed(claims, action, resource, employee_id):
        return

    logger.warning(
        "Denied %s for user %s (role=%s, tenant=%s) on %s",
        action.value, claims.id, claims.role.value, claims.tenant_id, resource,
    )
    if action not in POLICY.get(claims.role, frozenset()):
        raise Forbidden("Admin access required")
    raise Forbidden(DENIAL_MESSAGES.get(action, "You do not have permission for this resource"))
