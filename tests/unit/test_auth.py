"""
Authentication Tests (Unit Tests)
Staff login, token refresh, role checks, and client-portal login

Staff tokens go through fastapi-users; client tokens use their own audience and
must never authenticate the other side.
"""

import pytest
from httpx import AsyncClient

from tests.fixtures import TEST_ADMIN_EMAIL, TEST_CLIENT_LOGIN, TEST_CLIENT_PASSWORD, TEST_USER_PASSWORD

pytestmark = pytest.mark.unit


async def login(client: AsyncClient, email: str, password: str) -> str:
    response = await client.post("/api/v1/auth/login", data={"username": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


class TestHealthCheck:
    """Test health check endpoints"""

    @pytest.mark.asyncio
    async def test_health_check(self, anon_client: AsyncClient):
        """Test health check returns correct status"""
        response = await anon_client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "office-api"
        assert "version" in data

    @pytest.mark.asyncio
    async def test_status_endpoint(self, anon_client: AsyncClient):
        response = await anon_client.get("/api/v1/status")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestStaffLogin:
    """Test staff login endpoint (fastapi-users)"""

    @pytest.mark.asyncio
    async def test_login_success(self, anon_client: AsyncClient, admin_user):
        """Test successful login returns JWT token"""
        response = await anon_client.post(
            "/api/v1/auth/login",
            data={"username": TEST_ADMIN_EMAIL, "password": TEST_USER_PASSWORD},  # Form data, not JSON
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert len(data["access_token"]) > 50

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, anon_client: AsyncClient, admin_user):
        """Test login with wrong password"""
        response = await anon_client.post(
            "/api/v1/auth/login",
            data={"username": TEST_ADMIN_EMAIL, "password": "WrongPassword456!"},
        )
        assert response.status_code == 400  # fastapi-users returns 400, not 401
        assert response.json()["detail"] == "LOGIN_BAD_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_me_with_token(self, anon_client: AsyncClient, admin_user):
        token = await login(anon_client, TEST_ADMIN_EMAIL, TEST_USER_PASSWORD)

        response = await anon_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == TEST_ADMIN_EMAIL
        assert data["role"] == "admin"
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_me_without_token(self, anon_client: AsyncClient):
        response = await anon_client.get("/api/v1/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_returns_working_token(self, anon_client: AsyncClient, admin_user):
        token = await login(anon_client, TEST_ADMIN_EMAIL, TEST_USER_PASSWORD)

        response = await anon_client.post("/api/v1/auth/refresh", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        data = response.json()
        assert data["expires_in"] > 0

        me = await anon_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["id"] == str(admin_user.id)


class TestRoles:
    """Test role-based access"""

    @pytest.mark.asyncio
    async def test_employee_cannot_list_users(self, employee_client: AsyncClient):
        response = await employee_client.get("/api/v1/users")
        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied: insufficient permissions"

    @pytest.mark.asyncio
    async def test_employee_can_list_clients(self, employee_client: AsyncClient):
        response = await employee_client.get("/api/v1/clients")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_unauthenticated_request_rejected(self, anon_client: AsyncClient):
        response = await anon_client.get("/api/v1/clients")
        assert response.status_code == 401


class TestClientLogin:
    """Test client-portal login"""

    @pytest.mark.asyncio
    async def test_client_login_success(self, anon_client: AsyncClient, test_client_record):
        response = await anon_client.post(
            "/api/v1/auth/client-login",
            json={"login": TEST_CLIENT_LOGIN, "password": TEST_CLIENT_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["client"]["id"] == str(test_client_record.id)
        assert data["client"]["login"] == TEST_CLIENT_LOGIN

        me = await anon_client.get("/api/v1/portal/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["name"] == test_client_record.name

    @pytest.mark.asyncio
    async def test_client_login_wrong_password(self, anon_client: AsyncClient, test_client_record):
        response = await anon_client.post(
            "/api/v1/auth/client-login",
            json={"login": TEST_CLIENT_LOGIN, "password": "not-the-password"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_client_login_unknown_login(self, anon_client: AsyncClient):
        response = await anon_client.post(
            "/api/v1/auth/client-login",
            json={"login": "nobody.0000", "password": "whatever"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_client_token_rejected_by_staff_endpoints(self, anon_client: AsyncClient, test_client_record):
        response = await anon_client.post(
            "/api/v1/auth/client-login",
            json={"login": TEST_CLIENT_LOGIN, "password": TEST_CLIENT_PASSWORD},
        )
        token = response.json()["access_token"]

        staff = await anon_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert staff.status_code == 401

    @pytest.mark.asyncio
    async def test_staff_token_rejected_by_portal(self, anon_client: AsyncClient, admin_user):
        token = await login(anon_client, TEST_ADMIN_EMAIL, TEST_USER_PASSWORD)

        response = await anon_client.get("/api/v1/portal/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Could not validate credentials"

    @pytest.mark.asyncio
    async def test_portal_without_token(self, anon_client: AsyncClient):
        response = await anon_client.get("/api/v1/portal/me")
        assert response.status_code == 401
