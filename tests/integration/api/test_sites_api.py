# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""End-to-end tests for the Sites API."""

import uuid

import pytest

pytestmark = pytest.mark.integration

UNKNOWN_SITE_ID = str(uuid.UUID(int=42))


class TestCreateSite:
    """POST /api/v1/sites."""

    def test_returns_created_site_without_secret(self, client):
        response = client.post(
            "/api/v1/sites",
            json={
                "name": "Field Notes",
                "subdomain": "notes",
                "access_secret": "s3cret-pass",
                "description": "Team notebook",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["domain"] == "notes.sites.example.com"
        assert body["slug"] == "field-notes"
        assert body["access_user"] == "viewer"
        assert body["access_enabled"] is True
        assert body["tls_enabled"] is False
        assert body["container_port"] is None
        assert "s3cret-pass" not in response.text
        assert "access_secret" not in body

    def test_duplicate_subdomain_is_conflict(self, client, created_site):
        response = client.post(
            "/api/v1/sites",
            json={"name": "Other", "subdomain": "notes", "access_secret": "another-pass"},
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "DOMAIN_CONFLICT"
        assert created_site["domain"] in response.json()["detail"]["message"]

    def test_invalid_subdomain_is_bad_request(self, client):
        response = client.post(
            "/api/v1/sites",
            json={"name": "Broken", "subdomain": "bad_sub!", "access_secret": "s3cret-pass"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_SITE"

    def test_short_secret_is_validation_error(self, client):
        response = client.post(
            "/api/v1/sites",
            json={"name": "Short", "subdomain": "short", "access_secret": "123"},
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "VALIDATION_ERROR"
        assert detail["message"].startswith("access_secret")

    def test_unknown_tenant_is_not_found(self, client):
        response = client.post(
            "/api/v1/sites",
            json={
                "name": "Orphan",
                "subdomain": "orphan",
                "access_secret": "s3cret-pass",
                "tenant_id": str(uuid.UUID(int=7)),
            },
        )

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "TENANT_NOT_FOUND"

    def test_correlation_id_is_echoed_in_errors(self, client):
        response = client.post(
            "/api/v1/sites",
            json={"name": "Broken", "subdomain": "bad_sub!", "access_secret": "s3cret-pass"},
            headers={"X-Correlation-Id": "req-123"},
        )

        assert response.json()["detail"]["correlation_id"] == "req-123"


class TestGetSite:
    """GET /api/v1/sites/{site_id}."""

    def test_returns_site(self, client, created_site):
        response = client.get(f"/api/v1/sites/{created_site['site_id']}")

        assert response.status_code == 200
        assert response.json() == created_site

    def test_unknown_site_is_not_found(self, client):
        response = client.get(f"/api/v1/sites/{UNKNOWN_SITE_ID}")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "SITE_NOT_FOUND"

    @pytest.mark.parametrize("site_id", ["not-a-uuid", "1234", "ABCDEF"])
    def test_malformed_site_id_is_bad_request(self, client, site_id):
        response = client.get(f"/api/v1/sites/{site_id}")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_SITE_ID"


class TestSiteLifecycle:
    """Start, stop and delete."""

    def test_start_before_deploy_is_conflict(self, client, created_site):
        response = client.post(f"/api/v1/sites/{created_site['site_id']}/start")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "INVALID_SITE_STATE"

    def test_stop_then_start_deployed_site(self, client, created_site, app_archive, run_worker):
        site_id = created_site["site_id"]
        with open(app_archive, "rb") as handle:
            client.post(
                f"/api/v1/sites/{site_id}/deployments",
                files={"file": ("app.zip", handle, "application/zip")},
            )
        assert run_worker() is True

        stopped = client.post(f"/api/v1/sites/{site_id}/stop")
        assert stopped.status_code == 200
        assert stopped.json()["container_status"] == "stopped"

        started = client.post(f"/api/v1/sites/{site_id}/start")
        assert started.status_code == 200
        assert started.json()["container_status"] == "running"

    def test_delete_removes_site(self, client, created_site):
        site_id = created_site["site_id"]

        response = client.delete(f"/api/v1/sites/{site_id}")

        assert response.status_code == 204
        assert client.get(f"/api/v1/sites/{site_id}").status_code == 404

    def test_delete_deployed_site_removes_containers(
        self, client, created_site, app_archive, run_worker, fake_runtime
    ):
        site_id = created_site["site_id"]
        with open(app_archive, "rb") as handle:
            client.post(
                f"/api/v1/sites/{site_id}/deployments",
                files={"file": ("app.zip", handle, "application/zip")},
            )
        run_worker()
        assert fake_runtime.containers

        response = client.delete(f"/api/v1/sites/{site_id}")

        assert response.status_code == 204
        assert not fake_runtime.containers
        assert not fake_runtime.networks
        assert not fake_runtime.images

    def test_delete_unknown_site_is_not_found(self, client):
        response = client.delete(f"/api/v1/sites/{UNKNOWN_SITE_ID}")

        assert response.status_code == 404


class TestHealth:
    """GET /health."""

    def test_reports_idle_worker(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "worker_running": False,
            "current_job_id": None,
        }
