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

"""End-to-end tests for the Tenants API."""

import pytest

pytestmark = pytest.mark.integration

TENANT = {
    "name": "Acme",
    "domain": "acme.example.org",
    "email": "owner@acme.example.org",
    "password": "correct-horse",
}


class TestCreateTenant:
    """POST /api/v1/tenants."""

    def test_registers_tenant(self, client):
        response = client.post("/api/v1/tenants", json=TENANT)

        assert response.status_code == 201
        body = response.json()
        assert body["domain"] == "acme.example.org"
        assert body["active"] is True
        assert "password" not in body
        assert "correct-horse" not in response.text

    def test_duplicate_email_is_conflict(self, client):
        client.post("/api/v1/tenants", json=TENANT)

        response = client.post(
            "/api/v1/tenants", json={**TENANT, "domain": "other.example.org"}
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "TENANT_CONFLICT"

    def test_duplicate_domain_is_conflict(self, client):
        client.post("/api/v1/tenants", json=TENANT)

        response = client.post(
            "/api/v1/tenants", json={**TENANT, "email": "second@acme.example.org"}
        )

        assert response.status_code == 409

    def test_malformed_domain_is_bad_request(self, client):
        response = client.post("/api/v1/tenants", json={**TENANT, "domain": "not a domain"})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "INVALID_TENANT"

    def test_site_under_tenant_uses_its_domain(self, client):
        tenant_id = client.post("/api/v1/tenants", json=TENANT).json()["tenant_id"]

        response = client.post(
            "/api/v1/sites",
            json={
                "name": "Shop",
                "subdomain": "shop",
                "access_secret": "s3cret-pass",
                "tenant_id": tenant_id,
            },
        )

        assert response.status_code == 201
        assert response.json()["domain"] == "shop.acme.example.org"
        assert response.json()["tenant_id"] == tenant_id
