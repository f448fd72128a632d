from __future__ import annotations

import pytest

from projectboard.models.project import Project
from projectboard.models.task import Task


def _create_project(client, **overrides) -> dict:
    payload = {
        "project_number": "804512",
        "name": "Mobile Command Unit",
        "percent_complete": 50,
        "start_date": "2024-01-01",
        "estimated_completion_date": "2024-01-11",
    }
    payload.update(overrides)
    response = client.post("/api/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_project_normalizes_date_values(client):
    project = _create_project(client, ship_date="tbd", delivery_date="2024-02-01")

    assert project["status"] == "active"
    assert project["ship_date"] == {"kind": "pending", "value": None}
    assert project["delivery_date"] == {"kind": "known", "value": "2024-02-01"}
    assert project["show_paint_phase"] is True

    response = client.get(f"/api/projects/{project['id']}")
    assert response.status_code == 200
    assert response.json()["ship_date"]["kind"] == "pending"


def test_create_project_rejects_duplicates_and_bad_values(client):
    _create_project(client)

    duplicate = client.post("/api/projects", json={"project_number": "804512", "name": "Copy"})
    bad_date = client.post("/api/projects", json={"project_number": "1", "name": "Bad", "ship_date": "soon"})
    bad_status = client.post("/api/projects", json={"project_number": "2", "name": "Bad", "status": "lost"})

    assert duplicate.status_code == 409
    assert bad_date.status_code == 422
    assert bad_status.status_code == 422


def test_get_missing_project_returns_404(client):
    response = client.get("/api/projects/999/health")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_list_projects_with_rollups(client, db_session):
    alpha = Project(project_number="A-1", name="Alpha", percent_complete=0)
    beta = Project(project_number="B-1", name="Beta", percent_complete=0)
    db_session.add_all([alpha, beta])
    db_session.flush()
    db_session.add_all(
        [
            Task(project_id=beta.id, name="Weld frame", is_completed=True),
            Task(project_id=beta.id, name="Paint", is_completed=True),
            Task(project_id=alpha.id, name="Order chassis", is_completed=False),
        ]
    )
    db_session.commit()

    response = client.get("/api/projects")

    assert response.status_code == 200
    payload = response.json()
    assert payload["total"] == 2
    assert [item["name"] for item in payload["items"]] == ["Alpha", "Beta"]
    assert payload["items"][1]["progress"] == 100
    assert payload["items"][1]["health_score"] == 70

    by_health = client.get("/api/projects", params={"sort": "-health"}).json()
    assert [item["name"] for item in by_health["items"]] == ["Beta", "Alpha"]

    filtered = client.get("/api/projects", params={"q": "b-1"}).json()
    assert filtered["total"] == 1
    assert filtered["items"][0]["name"] == "Beta"

    paged = client.get("/api/projects", params={"page": 2, "page_size": 1}).json()
    assert paged["total"] == 2
    assert [item["name"] for item in paged["items"]] == ["Beta"]


def test_project_health_endpoint(client):
    project = _create_project(client)
    for name in ("Frame", "Wiring"):
        response = client.post(f"/api/projects/{project['id']}/tasks", json={"name": name, "is_completed": True})
        assert response.status_code == 201

    response = client.get(f"/api/projects/{project['id']}/health", params={"as_of": "2024-01-06"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["score"] == 70
    assert payload["change"] == 5
    assert payload["change_is_placeholder"] is True
    assert payload["breakdown"] == {
        "task_completion": 100,
        "billing_progress": 0,
        "timeline_adherence": 100,
        "expected_progress": 50.0,
        "overall_risk": "Low",
    }


def test_project_metrics_endpoint(client):
    project = _create_project(client, ship_date="2024-01-20")
    client.post(
        f"/api/projects/{project['id']}/billing-milestones",
        json={"name": "Deposit", "amount": "1000.00", "status": "paid"},
    )
    client.post(
        f"/api/projects/{project['id']}/billing-milestones",
        json={"name": "Final", "amount": "3000.00"},
    )

    response = client.get(f"/api/projects/{project['id']}/metrics", params={"as_of": "2024-01-06"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["project_id"] == project["id"]
    assert payload["total_billing_value"] == 4000.0
    assert payload["paid_billing_value"] == 1000.0
    assert payload["billing_completion_rate"] == 50
    assert payload["manufacturing_status"] == "Not Scheduled"
    assert payload["timeline_status"] == "Due Soon"
    assert payload["days_remaining"] == 5
    assert payload["overall_progress"] == 50
    assert payload["is_on_track"] is True
    assert payload["days_until_ship"] == 14


def test_department_percentages_redistribute_hidden_phases(client):
    project = _create_project(client, show_paint_phase=False)

    response = client.get(f"/api/projects/{project['id']}/department-percentages")

    assert response.status_code == 200
    payload = response.json()
    assert payload["raw"]["paint"] == 7.0
    assert payload["visibility"]["paint"] is False
    assert payload["redistributed"] == {
        "fabrication": 29.03,
        "paint": 0.0,
        "assembly": 48.39,
        "it": 7.53,
        "ntc_testing": 7.53,
        "qc": 7.53,
    }
    assert payload["visible_total"] == 100.01


def test_update_project_changes_only_sent_fields(client):
    project = _create_project(client, team="Chevron")

    response = client.patch(
        f"/api/projects/{project['id']}",
        json={"ship_date": "n/a", "show_qc_phase": False},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["ship_date"] == {"kind": "not_applicable", "value": None}
    assert payload["show_qc_phase"] is False
    assert payload["team"] == "Chevron"


def test_task_lifecycle(client):
    project = _create_project(client)
    milestone = client.post(f"/api/projects/{project['id']}/milestones", json={"name": "Chassis"}).json()
    task = client.post(
        f"/api/projects/{project['id']}/tasks",
        json={"name": "Order chassis", "milestone_id": milestone["id"]},
    ).json()
    assert task["completed_date"] is None

    completed = client.patch(f"/api/tasks/{task['id']}", json={"is_completed": True, "completed_date": "2024-01-03"})
    assert completed.status_code == 200
    assert completed.json()["completed_date"] == "2024-01-03"

    reopened = client.patch(f"/api/tasks/{task['id']}", json={"is_completed": False})
    assert reopened.json()["is_completed"] is False
    assert reopened.json()["completed_date"] is None

    by_milestone = client.get(f"/api/projects/{project['id']}/tasks", params={"milestone_id": milestone["id"]})
    assert len(by_milestone.json()) == 1

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_task_rejects_milestone_from_other_project(client):
    first = _create_project(client)
    second = _create_project(client, project_number="804513")
    milestone = client.post(f"/api/projects/{first['id']}/milestones", json={"name": "Chassis"}).json()

    response = client.post(
        f"/api/projects/{second['id']}/tasks",
        json={"name": "Order chassis", "milestone_id": milestone["id"]},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Milestone not found"


def test_billing_milestone_update(client):
    project = _create_project(client)
    milestone = client.post(
        f"/api/projects/{project['id']}/billing-milestones",
        json={"name": "Deposit", "amount": "2500.50"},
    ).json()
    assert float(milestone["amount"]) == 2500.5

    response = client.patch(f"/api/billing-milestones/{milestone['id']}", json={"status": "paid"})

    assert response.status_code == 200
    assert response.json()["status"] == "paid"
    assert client.patch(f"/api/billing-milestones/{milestone['id']}", json={"status": "lost"}).status_code == 422


def test_bay_utilization_endpoint(client):
    project = _create_project(client)
    chevron_bay = client.post("/api/manufacturing-bays", json={"bay_number": 1, "name": "Bay 1", "team": "Chevron"})
    libby_bay = client.post("/api/manufacturing-bays", json={"bay_number": 2, "name": "Bay 2", "team": "LIBBY"})
    assert chevron_bay.status_code == 201
    assert client.post("/api/manufacturing-bays", json={"bay_number": 1, "name": "Dup"}).status_code == 409

    for bay in (chevron_bay.json(), libby_bay.json()):
        schedule = client.post(
            "/api/manufacturing-schedules",
            json={
                "bay_id": bay["id"],
                "project_id": project["id"],
                "start_date": "2024-03-04",
                "end_date": "2024-04-13",
            },
        )
        assert schedule.status_code == 201

    response = client.get("/api/manufacturing-schedules/utilization", params={"start": "2024-03-20", "weeks": 2})

    assert response.status_code == 200
    rows = response.json()
    assert [row["week_key"] for row in rows] == ["2024-03-18", "2024-03-25"]
    assert {row["bay_name"] for row in rows} == {"Bay 1"}
    assert rows[0]["utilization_percentage"] == 50
    assert rows[0]["aligned_phases"][0]["phase"] == "PRODUCTION"


def test_schedule_validation(client):
    project = _create_project(client)
    bay = client.post("/api/manufacturing-bays", json={"bay_number": 1, "name": "Bay 1"}).json()

    reversed_dates = client.post(
        "/api/manufacturing-schedules",
        json={"bay_id": bay["id"], "project_id": project["id"], "start_date": "2024-03-10", "end_date": "2024-03-01"},
    )
    missing_bay = client.post(
        "/api/manufacturing-schedules",
        json={"bay_id": 99, "project_id": project["id"], "start_date": "2024-03-01", "end_date": "2024-03-10"},
    )

    assert reversed_dates.status_code == 422
    assert missing_bay.status_code == 404
    assert client.get("/api/manufacturing-schedules", params={"bay_id": bay["id"]}).json() == []


@pytest.mark.parametrize(
    "field_name",
    ["name", "status", "percent_complete", "fabrication_percent", "show_paint_phase"],
)
def test_update_project_rejects_null_for_required_fields(client, field_name):
    project = _create_project(client)

    response = client.patch(f"/api/projects/{project['id']}", json={field_name: None})

    assert response.status_code == 422
    assert client.get(f"/api/projects/{project['id']}").json()[field_name] is not None


def test_update_project_allows_clearing_optional_fields(client):
    project = _create_project(client, team="Chevron", ship_date="PENDING")

    response = client.patch(f"/api/projects/{project['id']}", json={"team": None, "ship_date": None})

    assert response.status_code == 200
    assert response.json()["team"] is None
    assert response.json()["ship_date"] is None


@pytest.mark.parametrize("payload", [{"name": None}, {"is_completed": None}])
def test_update_task_rejects_null_for_required_fields(client, payload):
    project = _create_project(client)
    task = client.post(f"/api/projects/{project['id']}/tasks", json={"name": "Order chassis"}).json()

    response = client.patch(f"/api/tasks/{task['id']}", json=payload)

    assert response.status_code == 422


@pytest.mark.parametrize("payload", [{"name": None}, {"amount": None}, {"status": None}])
def test_update_billing_milestone_rejects_null_for_required_fields(client, payload):
    project = _create_project(client)
    milestone = client.post(
        f"/api/projects/{project['id']}/billing-milestones",
        json={"name": "Deposit", "amount": "2500.50"},
    ).json()

    response = client.patch(f"/api/billing-milestones/{milestone['id']}", json=payload)

    assert response.status_code == 422
