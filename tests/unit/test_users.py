"""
Staff User Management Tests (Unit Tests)
Admin-only CRUD with generated passwords
"""

import pytest
from httpx import AsyncClient

from app.utils.credentials import PASSWORD_ALPHABET
from tests.fixtures import TEST_EMPLOYEE_EMAIL

pytestmark = pytest.mark.unit


class TestUserCrud:
    """Test /api/v1/users"""

    @pytest.mark.asyncio
    async def test_create_user_returns_generated_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users",
            json={"name": "New Employee", "email": "new@office-test.com", "role": "employee", "language": "ar"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new@office-test.com"
        assert data["role"] == "employee"
        assert len(data["password"]) == 12
        assert all(ch in PASSWORD_ALPHABET for ch in data["password"])
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_created_user_can_log_in(self, client: AsyncClient):
        created = await client.post("/api/v1/users", json={"name": "Login Check", "email": "login@office-test.com"})
        password = created.json()["password"]

        response = await client.post("/api/v1/auth/login", data={"username": "login@office-test.com", "password": password})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_create_user_duplicate_email(self, client: AsyncClient, employee_user):
        response = await client.post("/api/v1/users", json={"name": "Duplicate", "email": TEST_EMPLOYEE_EMAIL})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_list_users(self, client: AsyncClient, employee_user):
        response = await client.get("/api/v1/users")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert {u["role"] for u in data["users"]} == {"admin", "employee"}

    @pytest.mark.asyncio
    async def test_update_user(self, client: AsyncClient, employee_user):
        response = await client.put(
            f"/api/v1/users/{employee_user.id}",
            json={"name": "Renamed", "role": "admin", "is_active": False},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["role"] == "admin"
        assert data["is_active"] is False

    @pytest.mark.asyncio
    async def test_update_user_email_taken(self, client: AsyncClient, admin_user, employee_user):
        response = await client.put(f"/api/v1/users/{employee_user.id}", json={"email": admin_user.email})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete_user(self, client: AsyncClient, employee_user):
        response = await client.delete(f"/api/v1/users/{employee_user.id}")
        assert response.status_code == 204

        listing = await client.get("/api/v1/users")
        assert listing.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, client: AsyncClient, admin_user):
        response = await client.delete(f"/api/v1/users/{admin_user.id}")
        assert response.status_code == 400
