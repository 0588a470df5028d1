import pytest

from teamtasks.utils.claims import AdminClaims, EmployeeClaims
from teamtasks.utils.exceptions import Forbidden
from teamtasks.utils.permissions import Action, Resource, authorize, is_allowed

ADMIN = AdminClaims(id=1, username="boss", email="boss@example.com")
OTHER_ADMIN = AdminClaims(id=2, username="rival", email="rival@example.com")
EMPLOYEE = EmployeeClaims(id=10, username="worker", email="worker@example.com", admin_id=1)

EMPLOYEE_ALLOWED = {
    Action.LIST_EMPLOYEES,
    Action.READ_EMPLOYEE,
    Action.LIST_TASKS,
    Action.READ_TASK,
    Action.UPDATE_TASK_STATUS,
    Action.READ_DASHBOARD,
}


@pytest.mark.parametrize("action", list(Action))
def test_admin_may_do_everything_in_own_tenant(action):
    assert is_allowed(ADMIN, action)
    assert is_allowed(ADMIN, action, Resource(tenant_id=1, employee_id=5))


@pytest.mark.parametrize("action", list(Action))
def test_admin_is_denied_other_tenants_rows(action):
    assert not is_allowed(OTHER_ADMIN, action, Resource(tenant_id=1, employee_id=5))


@pytest.mark.parametrize("action", list(Action))
def test_employee_role_level_policy(action):
    assert is_allowed(EMPLOYEE, action) is (action in EMPLOYEE_ALLOWED)


@pytest.mark.parametrize("action", [Action.READ_EMPLOYEE, Action.READ_TASK, Action.UPDATE_TASK_STATUS])
def test_employee_limited_to_own_employee_record(action):
    own = Resource(tenant_id=1, employee_id=5)
    colleague = Resource(tenant_id=1, employee_id=6)

    assert is_allowed(EMPLOYEE, action, own, employee_id=5)
    assert not is_allowed(EMPLOYEE, action, colleague, employee_id=5)
    # not onboarded yet: nothing is "own"
    assert not is_allowed(EMPLOYEE, action, own, employee_id=None)


def test_employee_denied_foreign_tenant_even_with_matching_employee_id():
    assert not is_allowed(EMPLOYEE, Action.READ_TASK, Resource(tenant_id=2, employee_id=5), employee_id=5)


def test_authorize_raises_forbidden_with_reason():
    with pytest.raises(Forbidden) as exc_info:
        authorize(EMPLOYEE, Action.CREATE_TASK)
    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "Admin access required"

    with pytest.raises(Forbidden) as exc_info:
        authorize(EMPLOYEE, Action.UPDATE_TASK_STATUS, Resource(tenant_id=1, employee_id=6), employee_id=5)
    assert exc_info.value.detail == "You can only update your own tasks"
