"""API tests for the ingestion and query endpoints."""
import pytest
from fastapi.testclient import TestClient

from jobfeed.infrastructure.store.entity_store import get_entity_store
from jobfeed.main import app
from jobfeed.presentation.routers.server_entry_router import get_expiry_seconds

client = TestClient(app)


@pytest.fixture(autouse=True)
def isolated_store(store):
    """Route every request to a fresh store with a 600s TTL."""
    app.dependency_overrides[get_entity_store] = lambda: store
    app.dependency_overrides[get_expiry_seconds] = lambda: 600
    yield store
    app.dependency_overrides.clear()


@pytest.mark.unit
class TestReceive:
    """Tests for POST /receive."""

    def test_single_record(self):
        """Test one record object is stored."""
        response = client.post("/receive", json={
            "serverName": "Alpha",
            "moneyPerSec": 4500000,
            "players": "7/8",
            "author": "notifier",
            "jobId": "job-1",
            "id": "100",
        })

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "count": 1}

    def test_list_of_records(self):
        """Test an array body is applied in order."""
        response = client.post("/receive", json=[
            {"serverName": "Alpha", "jobId": "job-1"},
            {"serverName": "Beta", "jobId": "job-2"},
            {"players": "3/8", "jobId": "job-1"},
        ])

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "count": 2}

    def test_same_job_id_merges(self, isolated_store):
        """Test repeated job ids update a single entity."""
        client.post("/receive", json={"serverName": "Alpha", "jobId": "job-1", "id": "1"})
        response = client.post("/receive", json={"players": "12/50", "jobId": "job-1", "id": "2"})

        assert response.json()["count"] == 1
        entry = isolated_store.get("job:job-1")
        assert entry.server_name == "Alpha"
        assert entry.players == "12/50"
        assert entry.id == "2"

    def test_numeric_message_id_accepted(self, isolated_store):
        """Test snowflake ids sent as numbers are normalised to strings."""
        response = client.post("/receive", json={"serverName": "Alpha", "id": 1200000000000000001})

        assert response.status_code == 200
        assert isolated_store.get("msg:1200000000000000001") is not None

    def test_empty_object_accepted(self):
        """Test a record with no fields still gets stored under a fresh key."""
        response = client.post("/receive", json={})

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_invalid_money_rejected(self):
        """Test a non-numeric moneyPerSec is a 400."""
        response = client.post("/receive", json={"serverName": "Alpha", "moneyPerSec": "lots"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request"
        assert body["errors"]

    def test_negative_money_rejected(self):
        """Test negative moneyPerSec is a 400."""
        response = client.post("/receive", json={"serverName": "Alpha", "moneyPerSec": -1})

        assert response.status_code == 400

    def test_malformed_json_rejected(self):
        """Test an unparsable body is a 400."""
        response = client.post(
            "/receive",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"


@pytest.mark.unit
class TestListMessages:
    """Tests for GET /messages."""

    def test_empty_store(self):
        """Test the query endpoint succeeds with no data."""
        response = client.get("/messages")

        assert response.status_code == 200
        assert response.json() == []

    def test_returns_fresh_entries_newest_first(self, clock):
        """Test TTL filtering and ordering."""
        client.post("/receive", json={"serverName": "Stale", "jobId": "job-0"})
        clock.advance(601)
        client.post("/receive", json={"serverName": "Alpha", "jobId": "job-1"})
        clock.advance(5)
        client.post("/receive", json={"serverName": "Beta", "jobId": "job-2"})

        response = client.get("/messages")

        assert response.status_code == 200
        names = [item["serverName"] for item in response.json()]
        assert names == ["Beta", "Alpha"]

    def test_entry_shape(self, clock):
        """Test every documented field is present."""
        client.post("/receive", json={
            "serverName": "Alpha", "moneyPerSec": 10, "players": "1/8",
            "author": "bot", "jobId": "job-1", "id": "9",
        })

        item = client.get("/messages").json()[0]

        assert item == {
            "serverName": "Alpha",
            "moneyPerSec": 10,
            "players": "1/8",
            "author": "bot",
            "jobId": "job-1",
            "firstSeen": clock.now,
            "lastSeen": clock.now,
            "id": "9",
        }


@pytest.mark.unit
def test_health_endpoint():
    """Test that health endpoint returns correct response."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
