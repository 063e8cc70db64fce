"""HTTP-level tests of the interview and report routes."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from hr_scheduler.api.v1.dependencies import (
    get_current_member_id,
    get_orchestrator,
    get_report_aggregator,
)
from hr_scheduler.core.config import settings
from hr_scheduler.core.logging import setup_logging
from hr_scheduler.core.security import member_id_from_token
from hr_scheduler.main import app
from hr_scheduler.services.report_aggregator import ReportAggregator
from hr_scheduler.services.schedule_orchestrator import ScheduleOrchestrator

BASE = "/api/v1/interviews"

PAYLOAD = {
    "interview_date": "2025-01-10",
    "from_time": "10:00",
    "duration_minutes": 30,
    "event_timezone": "Asia/Kolkata",
    "interviewer_id": 100,
    "scheduled_by_id": 200,
}


@pytest.fixture
async def client(session_factory, seed):
    await seed.candidate(1, "Asha")
    await seed.candidate(2, "Bilal")
    await seed.member(100, "Alice")
    await seed.member(200, "Rita")

    app.dependency_overrides[get_orchestrator] = lambda: ScheduleOrchestrator(session_factory)
    app.dependency_overrides[get_report_aggregator] = lambda: ReportAggregator(session_factory)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def as_member():
    app.dependency_overrides[get_current_member_id] = lambda: 7
    yield
    app.dependency_overrides.pop(get_current_member_id, None)


def token_for(subject: str) -> str:
    return jwt.encode({"sub": subject}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_create_and_fetch_interview(client, as_member):
    created = await client.post(f"{BASE}/1", json=PAYLOAD)
    assert created.status_code == 201
    body = created.json()
    assert body["round_number"] == 1
    assert body["from_time_utc"].startswith("2025-01-10T04:30")

    fetched = await client.get(f"{BASE}/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["candidate_id"] == 1

    listed = await client.get(f"{BASE}/candidate/1")
    assert [i["id"] for i in listed.json()] == [body["id"]]


async def test_conflict_maps_to_409(client, as_member):
    await client.post(f"{BASE}/1", json=PAYLOAD)
    response = await client.post(f"{BASE}/2", json={**PAYLOAD, "from_time": "10:15"})

    assert response.status_code == 409
    body = response.json()
    assert body["error_code"] == "INTERVIEWER_CONFLICT"
    assert body["details"]["entity_id"] == 100


async def test_missing_interview_maps_to_404(client, as_member):
    response = await client.get(f"{BASE}/9999")
    assert response.status_code == 404
    assert response.json()["error_code"] == "INTERVIEW_NOT_FOUND"


async def test_next_round_without_history_maps_to_422(client, as_member):
    response = await client.post(f"{BASE}/1/rounds", json=PAYLOAD)
    assert response.status_code == 422
    assert response.json()["error_code"] == "NO_PRIOR_INTERVIEW"


async def test_partial_time_update_maps_to_400(client, as_member):
    created = (await client.post(f"{BASE}/1", json=PAYLOAD)).json()

    response = await client.patch(f"{BASE}/{created['id']}", json={"from_time": "11:00"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_TIME_UPDATE"


async def test_finalize_and_delete(client, as_member):
    created = (await client.post(f"{BASE}/1", json=PAYLOAD)).json()

    final = await client.put(f"{BASE}/{created['id']}/finalize", json={"result": "Selected"})
    assert final.status_code == 200
    assert final.json()["result"] == "Selected"

    deleted = await client.delete(f"{BASE}/{created['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["id"] == created["id"]
    assert (await client.get(f"{BASE}/{created['id']}")).status_code == 404


async def test_finalize_rejects_unknown_result(client, as_member):
    created = (await client.post(f"{BASE}/1", json=PAYLOAD)).json()
    response = await client.put(f"{BASE}/{created['id']}/finalize", json={"result": "maybe"})
    assert response.status_code == 422


async def test_duration_bounds_are_enforced(client, as_member):
    response = await client.post(f"{BASE}/1", json={**PAYLOAD, "duration_minutes": 5})
    assert response.status_code == 422


async def test_requests_without_token_are_rejected(client):
    assert (await client.get(f"{BASE}/candidate/1")).status_code == 401
    assert (await client.get(f"{BASE}/report/overall")).status_code == 401


async def test_requests_with_valid_token_are_accepted(client):
    response = await client.get(
        f"{BASE}/candidate/1", headers={"Authorization": f"Bearer {token_for('7')}"})
    assert response.status_code == 200
    assert response.json() == []


async def test_custom_range_without_end_date_maps_to_400(client, as_member):
    response = await client.get(
        f"{BASE}/report/workload", params={"range": "custom", "start_date": "2025-01-01"})
    assert response.status_code == 400
    assert response.json()["details"]["missing_fields"] == ["end_date"]


async def test_report_routes(client, as_member):
    await client.post(f"{BASE}/1", json=PAYLOAD)
    january = {"range": "custom", "start_date": "2025-01-01", "end_date": "2025-01-31"}

    workload = await client.get(f"{BASE}/report/workload", params=january)
    assert workload.json()["interviewers"][0]["interviewer_name"] == "Alice"

    tracker = await client.get(f"{BASE}/report/tracker", params={**january, "result": "PENDING"})
    assert [row["result"] for row in tracker.json()] == ["Pending"]

    daily = await client.get(f"{BASE}/report/daily", params={"date": "2025-01-10"})
    assert daily.json()["summary"]["total"] == 1

    monthly = await client.get(
        f"{BASE}/report/monthly", params={"start_date": "2025-01-01", "end_date": "2025-01-31"})
    assert monthly.json()["interview_dates"] == ["2025-01-10"]

    overall = await client.get(f"{BASE}/report/overall")
    assert overall.json()["summary"]["pending"] == 1


def test_member_id_from_token():
    assert member_id_from_token(token_for("42")) == 42
    assert member_id_from_token(token_for("not-a-number")) is None
    assert member_id_from_token("garbage") is None


def test_setup_logging_does_not_stack_handlers(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    setup_logging(log_file)
    setup_logging(log_file)

    ours = [h for h in logging.getLogger().handlers if h.get_name() == "hr_scheduler"]
    assert len(ours) == 2
    assert log_file.exists()
    for handler in ours:
        logging.getLogger().removeHandler(handler)
        handler.close()


async def test_finalize_with_null_result_is_rejected(client, as_member):
    created = (await client.post(f"{BASE}/1", json=PAYLOAD)).json()

    response = await client.put(
        f"{BASE}/{created['id']}/finalize", json={"result": None, "recruiter_notes": "ok"})

    assert response.status_code == 422
    assert (await client.get(f"{BASE}/{created['id']}")).json()["result"] == "pending"
