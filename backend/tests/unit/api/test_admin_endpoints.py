"""Endpoint tests for account administration."""

from uuid import UUID

import pytest

from presida.core.exceptions import ExternalServiceError


class TestDeleteUserEndpoint:
    def test_deletes_user(self, client, fake_identity_provider):
        response = client.post("/admin/delete-user", json={"user_id": "user-1"})

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert fake_identity_provider.deleted == ["user-1"]

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_other_methods_not_allowed(self, client, method, fake_identity_provider):
        response = client.request(method.upper(), "/admin/delete-user")

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert fake_identity_provider.deleted == []

    def test_missing_user_id(self, client):
        response = client.post("/admin/delete-user", json={})

        assert response.status_code == 400
        assert response.json() == {"message": "user_id is required"}

    def test_empty_body(self, client):
        response = client.post("/admin/delete-user")

        assert response.status_code == 400
        assert response.json() == {"message": "user_id is required"}

    def test_invalid_json(self, client):
        response = client.post(
            "/admin/delete-user",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid request body"}

    @pytest.mark.parametrize(
        "payload", [{"user_id": 123}, {"user_id": ["user-1"]}], ids=["int", "list"]
    )
    def test_malformed_user_id(self, client, payload, fake_identity_provider):
        response = client.post("/admin/delete-user", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid request body"}
        assert fake_identity_provider.deleted == []

    def test_provider_failure(self, client, fake_identity_provider):
        fake_identity_provider._should_raise = ExternalServiceError("Supabase", "User not found")

        response = client.post("/admin/delete-user", json={"user_id": "user-1"})

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to delete user", "error": "User not found"}


class TestForceLogoutEndpoint:
    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_other_methods_not_allowed(
        self, client, method, fake_profile_repo, fake_identity_provider
    ):
        fake_profile_repo.seed(UUID(int=1))

        response = client.request(method.upper(), "/admin/force-logout")

        assert response.status_code == 405
        assert fake_identity_provider.call_count("sign_out_user") == 0

    def test_preflight(self, client):
        response = client.options("/admin/force-logout")

        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "POST, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "*"

    def test_all_signed_out(self, client, fake_profile_repo, fake_identity_provider):
        ids = [UUID(int=1), UUID(int=2)]
        for user_id in ids:
            fake_profile_repo.seed(user_id)

        response = client.post("/admin/force-logout")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        body = response.json()
        assert body["success"] is True
        assert (body["total"], body["succeeded"], body["failed"]) == (2, 2, 0)
        assert sorted(fake_identity_provider.signed_out) == [str(u) for u in ids]

    def test_partial_failure_is_500(self, client, fake_profile_repo, fake_identity_provider):
        fake_profile_repo.seed(UUID(int=1))
        fake_profile_repo.seed(UUID(int=2))
        fake_identity_provider.fail_sign_out(str(UUID(int=2)), "boom")

        response = client.post("/admin/force-logout")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["failed"] == 1
        assert {"user_id": str(UUID(int=2)), "success": False, "error": "boom"} in body["results"]

    def test_listing_failure(self, client, fake_profile_repo, fake_identity_provider):
        fake_profile_repo._list_error = RuntimeError("relation does not exist")

        response = client.post("/admin/force-logout")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Failed to force logout: relation does not exist"
        assert fake_identity_provider.call_count("sign_out_user") == 0
