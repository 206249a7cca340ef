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

"""Unit tests for CreateTenantUseCase."""

# pylint: disable=redefined-outer-name

import pytest

from core.sites.exceptions import InvalidSiteInputError, TenantConflictError
from infra.id_generator import UUIDv4Generator
from infra.repositories.in_memory import InMemoryTenantRepository
from infra.security.hashers import Pbkdf2PasswordHasher
from orchestrator.tenants.commands import CreateTenantCommand
from orchestrator.tenants.use_cases import CreateTenantUseCase

PASSWORD = "s3cret-tenant-pw"


@pytest.fixture
def tenant_repo():
    return InMemoryTenantRepository()


@pytest.fixture
def hasher():
    return Pbkdf2PasswordHasher(iterations=1000)


@pytest.fixture
def use_case(tenant_repo, hasher):
    return CreateTenantUseCase(tenant_repo, hasher, UUIDv4Generator())


def _command(**overrides) -> CreateTenantCommand:
    values = {
        "name": "Acme",
        "domain": "Acme.Example.org",
        "email": "IT@acme.example.org",
        "password": PASSWORD,
    }
    values.update(overrides)
    return CreateTenantCommand(**values)


class TestCreateTenant:
    """Tenant registration."""

    def test_creates_tenant(self, use_case, tenant_repo, hasher) -> None:
        response = use_case.execute(_command())

        stored = tenant_repo.find_by_id(response.tenant_id)
        assert response.domain == "acme.example.org"
        assert response.email == "it@acme.example.org"
        assert stored.password_hash != PASSWORD
        assert hasher.verify(stored.password_hash, PASSWORD)
        assert not hasattr(response, "password_hash")

    def test_duplicate_email(self, use_case) -> None:
        use_case.execute(_command())

        with pytest.raises(TenantConflictError) as exc_info:
            use_case.execute(_command(domain="other.example.org"))

        assert exc_info.value.field_name == "email"

    def test_duplicate_domain(self, use_case) -> None:
        use_case.execute(_command())

        with pytest.raises(TenantConflictError) as exc_info:
            use_case.execute(_command(email="ops@other.example.org"))

        assert exc_info.value.field_name == "domain"

    def test_longest_name_is_accepted(self, use_case) -> None:
        assert use_case.execute(_command(name="t" * 200)).name == "t" * 200

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"name": "t" * 201},
            {"domain": "not a domain"},
            {"email": "nobody"},
            {"password": "short"},
            {"password": "p" * 129},
        ],
    )
    def test_invalid_input(self, use_case, tenant_repo, overrides) -> None:
        with pytest.raises(InvalidSiteInputError):
            use_case.execute(_command(**overrides))

        assert tenant_repo.find_by_email("it@acme.example.org") is None

    def test_command_repr_masks_password(self) -> None:
        assert PASSWORD not in repr(_command())
