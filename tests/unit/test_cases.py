"""
Case Tests (Unit Tests)
Case types, cases and case events
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.unit


class TestCaseTypes:
    """Test /api/v1/case-types"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, employee_client: AsyncClient):
        response = await employee_client.post("/api/v1/case-types", json={"name": "Labour", "description": "Work law"})
        assert response.status_code == 201

        listing = await employee_client.get("/api/v1/case-types")
        assert [t["name"] for t in listing.json()] == ["Labour"]

    @pytest.mark.asyncio
    async def test_duplicate_name(self, client: AsyncClient, test_case_type):
        response = await client.post("/api/v1/case-types", json={"name": test_case_type.name})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, employee_client: AsyncClient, test_case_type):
        response = await employee_client.delete(f"/api/v1/case-types/{test_case_type.id}")
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_in_use(self, client: AsyncClient, test_case):
        response = await client.delete(f"/api/v1/case-types/{test_case.case_type_id}")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_unused(self, client: AsyncClient, test_case_type):
        response = await client.delete(f"/api/v1/case-types/{test_case_type.id}")
        assert response.status_code == 204


class TestCases:
    """Test /api/v1/cases"""

    @pytest.mark.asyncio
    async def test_create_case(self, client: AsyncClient, admin_user, test_client_record, test_file, test_case_type):
        response = await client.post(
            "/api/v1/cases",
            json={
                "client_id": str(test_client_record.id),
                "file_id": str(test_file.id),
                "case_type_id": str(test_case_type.id),
                "title": "Recovery action",
                "court_name": "Tribunal de première instance",
                "court_lat": 36.8,
                "court_lng": 10.18,
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "open"
        assert data["priority"] == "medium"
        assert data["case_type_name"] == test_case_type.name
        assert data["created_by"] == str(admin_user.id)
        assert data["court_lat"] == pytest.approx(36.8)

    @pytest.mark.asyncio
    async def test_create_case_file_of_other_client(
        self, client: AsyncClient, other_client_record, test_file
    ):
        response = await client.post(
            "/api/v1/cases",
            json={"client_id": str(other_client_record.id), "file_id": str(test_file.id), "title": "Mismatch"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_case_requires_title(self, client: AsyncClient, test_client_record, test_file):
        response = await client.post(
            "/api/v1/cases",
            json={"client_id": str(test_client_record.id), "file_id": str(test_file.id)},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_cases_by_client(self, client: AsyncClient, test_client_record, test_case):
        response = await client.get(f"/api/v1/cases/client/{test_client_record.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["cases"][0]["case_type_name"] == "Commercial"

    @pytest.mark.asyncio
    async def test_get_case(self, client: AsyncClient, test_case):
        response = await client.get(f"/api/v1/cases/{test_case.id}")
        assert response.status_code == 200
        assert response.json()["case_number"] == "2025/117"

    @pytest.mark.asyncio
    async def test_get_missing_case(self, client: AsyncClient):
        response = await client.get(f"/api/v1/cases/{uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_partial_update(self, client: AsyncClient, test_case):
        response = await client.put(f"/api/v1/cases/{test_case.id}", json={"status": "on_hold", "priority": "urgent"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "on_hold"
        assert data["priority"] == "urgent"
        assert data["title"] == test_case.title

    @pytest.mark.asyncio
    async def test_update_without_fields(self, client: AsyncClient, test_case):
        response = await client.put(f"/api/v1/cases/{test_case.id}", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "No fields to update"


class TestCaseEvents:
    """Test /api/v1/case-events"""

    @pytest.mark.asyncio
    async def test_create_event_defaults(self, client: AsyncClient, admin_user, test_case):
        response = await client.post(
            "/api/v1/case-events",
            json={"case_id": str(test_case.id), "title": "First hearing", "event_date": "2025-04-02"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["reminder_days"] == 7
        assert data["reminder_sent"] is False
        assert data["event_type"] == "hearing"
        assert data["created_by"] == str(admin_user.id)

    @pytest.mark.asyncio
    async def test_create_event_rejects_oversized_lead_time(self, client: AsyncClient, test_case):
        response = await client.post(
            "/api/v1/case-events",
            json={"case_id": str(test_case.id), "title": "Far", "event_date": "2025-04-02", "reminder_days": 366},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_event_unknown_case(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/case-events",
            json={"case_id": str(uuid4()), "title": "Nowhere", "event_date": "2025-04-02"},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_events_ordered_by_date_then_time(self, client: AsyncClient, test_case):
        for title, event_date, event_time in (
            ("afternoon", "2025-04-02", "14:00:00"),
            ("later day", "2025-04-05", "08:00:00"),
            ("morning", "2025-04-02", "09:30:00"),
        ):
            await client.post(
                "/api/v1/case-events",
                json={"case_id": str(test_case.id), "title": title, "event_date": event_date, "event_time": event_time},
            )

        response = await client.get(f"/api/v1/case-events/case/{test_case.id}")
        assert [e["title"] for e in response.json()["events"]] == ["morning", "afternoon", "later day"]

    @pytest.mark.asyncio
    async def test_delete_event(self, client: AsyncClient, test_case):
        created = await client.post(
            "/api/v1/case-events",
            json={"case_id": str(test_case.id), "title": "Cancelled", "event_date": "2025-04-02"},
        )

        response = await client.delete(f"/api/v1/case-events/{created.json()['id']}")
        assert response.status_code == 204

        listing = await client.get(f"/api/v1/case-events/case/{test_case.id}")
        assert listing.json()["total"] == 0
