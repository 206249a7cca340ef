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

"""Unit tests for SiteRegistrationService."""

import pytest

from core.sites.entities import Tenant
from core.sites.exceptions import DomainConflictError, InvalidSiteInputError
from core.sites.services import SiteRegistrationService
from core.sites.value_objects import Domain
from infra.repositories import InMemorySiteRepository
from tests.mocks.site_builders import OTHER_SITE_ID, make_site


@pytest.fixture
def site_repo() -> InMemorySiteRepository:
    return InMemorySiteRepository()


@pytest.fixture
def service(site_repo) -> SiteRegistrationService:
    return SiteRegistrationService(site_repo, default_base_domain="sites.example.com")


class TestUniqueSlug:
    """Slug collision handling."""

    def test_free_slug_used_as_is(self, service) -> None:
        assert service.unique_slug("Demo Shop") == "demo-shop"

    def test_collisions_get_numeric_suffix(self, service, site_repo) -> None:
        site_repo.save(make_site(slug="demo-shop"))
        site_repo.save(make_site(OTHER_SITE_ID, slug="demo-shop-1", domain="other.sites.example.com"))

        assert service.unique_slug("Demo Shop") == "demo-shop-2"

    def test_name_without_slug_characters(self, service) -> None:
        with pytest.raises(InvalidSiteInputError):
            service.unique_slug("***")


class TestBuildDomain:
    """Domain composition from subdomain and base."""

    def test_default_base_domain(self, service) -> None:
        assert service.build_domain("Shop").value == "shop.sites.example.com"

    def test_tenant_base_domain(self, service) -> None:
        tenant = Tenant(
            tenant_id="t-1",
            name="Acme",
            domain="acme.io",
            email="ops@acme.io",
            password_hash="x",
        )
        assert service.build_domain("shop", tenant).value == "shop.acme.io"

    @pytest.mark.parametrize("subdomain", ["", "bad_label", "-shop", "shop..x", "sh op"])
    def test_rejects_bad_subdomain(self, service, subdomain) -> None:
        with pytest.raises(InvalidSiteInputError):
            service.build_domain(subdomain)


class TestEnsureDomainAvailable:
    """Uniqueness check against registered sites."""

    def test_available(self, service) -> None:
        service.ensure_domain_available(Domain("free.sites.example.com"))

    def test_conflict(self, service, site_repo) -> None:
        site_repo.save(make_site(domain="shop.sites.example.com"))

        with pytest.raises(DomainConflictError) as exc_info:
            service.ensure_domain_available(Domain("SHOP.sites.example.com"))

        assert exc_info.value.domain == "shop.sites.example.com"
