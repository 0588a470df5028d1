import pytest

from conftest import API, auth
from teamtasks.services.dashboard import completion_rate


@pytest.mark.parametrize("completed, total, expected", [
    (0, 0, 0.0),
    (1, 3, 33.33),
    (2, 3, 66.67),
    (4, 4, 100.0),
])
def test_completion_rate(completed, total, expected):
    assert completion_rate(completed, total) == expected


def test_empty_tenant_dashboard(api, client):
    admin = api.admin("boss")
    body = client.get(f"{API}/dashboard", headers=auth(admin)).json()

    assert body["total_tasks"] == 0
    assert body["completion_rate"] == 0
    assert body["total_employees"] == 0
    assert body["tasks_by_employee"] == []
    assert body["recent_tasks"] == []


def test_admin_dashboard_counts(tenant, api, client):
    admin = tenant["admin"]
    api.task(admin, tenant["employee"], status="completed", priority="high")
    api.task(admin, tenant["employee"], status="in-progress", priority="high")
    api.task(admin, tenant["employee"], status="pending", priority="low")

    body = client.get(f"{API}/dashboard", headers=auth(admin)).json()

    assert body["total_tasks"] == 3
    assert body["completed_tasks"] == 1
    assert body["in_progress_tasks"] == 1
    assert body["pending_tasks"] == 1
    assert body["high_priority_tasks"] == 2
    assert body["medium_priority_tasks"] == 0
    assert body["low_priority_tasks"] == 1
    assert body["completion_rate"] == 33.33
    assert body["total_employees"] == 1
    assert body["tasks_by_employee"] == [
        {"employee_id": tenant["employee"]["id"], "name": "worker", "task_count": 3, "completed": 1}
    ]
    assert body["employee_name"] is None


def test_top_employees_ranked_by_task_count(api, client):
    admin = api.admin("boss")
    names = ("ann", "bob", "cat", "dan", "eve", "fay")
    employees = {name: api.onboard(admin, api.employee(name, admin)) for name in names}
    counts = {"ann": 1, "bob": 3, "cat": 0, "dan": 2, "eve": 2, "fay": 1}
    for name, count in counts.items():
        for i in range(count):
            api.task(admin, employees[name], title=f"{name}-{i}")

    body = client.get(f"{API}/dashboard", headers=auth(admin)).json()

    # ties broken by name, zero-task employees still count towards the roster
    assert [row["name"] for row in body["tasks_by_employee"]] == ["bob", "dan", "eve", "ann", "fay"]
    assert body["total_employees"] == 6
    assert len(body["recent_tasks"]) == 5
    assert body["recent_tasks"][0]["title"] == "fay-0"


def test_dashboard_is_tenant_scoped(tenant, api, client):
    api.task(tenant["admin"], tenant["employee"])
    rival = api.admin("rival")

    body = client.get(f"{API}/dashboard", headers=auth(rival)).json()
    assert body["total_tasks"] == 0
    assert body["total_employees"] == 0


def test_employee_dashboard_covers_own_tasks(tenant, api, client):
    admin = tenant["admin"]
    colleague = api.onboard(admin, api.employee("colleague", admin))
    api.task(admin, tenant["employee"], status="completed")
    api.task(admin, tenant["employee"])
    api.task(admin, colleague, status="completed")

    body = client.get(f"{API}/dashboard", headers=auth(tenant["user"])).json()

    assert body["total_tasks"] == 2
    assert body["completed_tasks"] == 1
    assert body["completion_rate"] == 50.0
    assert body["total_employees"] == 1
    assert body["employee_name"] == "worker"
    assert body["employee_email"] == "worker@example.com"
    assert body["employee_department"] == "Engineering"
    assert [row["employee_id"] for row in body["tasks_by_employee"]] == [tenant["employee"]["id"]]


def test_unlinked_employee_gets_zero_dashboard(api, client):
    admin = api.admin("boss")
    user = api.employee("worker", admin)

    response = client.get(f"{API}/dashboard", headers=auth(user))

    assert response.status_code == 200
    body = response.json()
    assert body["total_tasks"] == 0
    assert body["completion_rate"] == 0
    assert body["employee_name"] == "worker"
    assert body["employee_department"] is None


def test_dashboard_requires_authentication(client):
    assert client.get(f"{API}/dashboard").status_code == 401
