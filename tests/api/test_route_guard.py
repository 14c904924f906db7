"""
API tests for the page route guard.
"""

import pytest
from fastapi import status


class TestRouteGuard:
    @pytest.mark.asyncio
    async def test_dashboard_requires_cookie(self, client):
        response = await client.get("/dashboard/projects", follow_redirects=False)

        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"] == "/login?callbackUrl=%2Fdashboard%2Fprojects"

    @pytest.mark.asyncio
    async def test_dashboard_root(self, client):
        response = await client.get("/dashboard", follow_redirects=False)

        assert response.headers["location"] == "/login?callbackUrl=%2Fdashboard"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/login", "/register"])
    async def test_auth_pages_redirect_signed_in_users(self, authenticated_client, path):
        response = await authenticated_client.get(path, follow_redirects=False)

        assert response.status_code == status.HTTP_307_TEMPORARY_REDIRECT
        assert response.headers["location"] == "/dashboard"

    @pytest.mark.asyncio
    async def test_anonymous_login_page_passes_through(self, client):
        response = await client.get("/login", follow_redirects=False)

        # No page is served here; the guard just lets the request through
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_dashboard_with_cookie_passes_through(self, authenticated_client):
        response = await authenticated_client.get("/dashboard", follow_redirects=False)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_similar_prefix_not_guarded(self, client):
        response = await client.get("/dashboards", follow_redirects=False)

        assert response.status_code == status.HTTP_404_NOT_FOUND
