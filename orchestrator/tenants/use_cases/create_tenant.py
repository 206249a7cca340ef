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

"""CreateTenant use case implementation."""

import logging
import re

from api.logging_utils import log_secure_info
from core.deployments.repositories import IdentifierGenerator
from core.security.ports import PasswordHasher
from core.sites.entities import Tenant
from core.sites.exceptions import InvalidSiteInputError, TenantConflictError
from core.sites.repositories import TenantRepository
from core.sites.value_objects import Domain

from orchestrator.tenants.commands import CreateTenantCommand
from orchestrator.tenants.dtos import TenantResponse

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]{1,64}@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
MAX_NAME_LENGTH = 200


class CreateTenantUseCase:
    """Use case for registering a tenant.

    Guarantees:
    - Email and base domain are unique across tenants
    - The password is stored only as a hash from the configured hasher

    Attributes:
        tenant_repo: Tenant repository port.
        password_hasher: Configured password hashing strategy.
        uuid_generator: Identifier generator for the tenant id.
    """

    def __init__(
        self,
        tenant_repo: TenantRepository,
        password_hasher: PasswordHasher,
        uuid_generator: IdentifierGenerator,
    ) -> None:
        self._tenant_repo = tenant_repo
        self._password_hasher = password_hasher
        self._uuid_generator = uuid_generator

    def execute(self, command: CreateTenantCommand) -> TenantResponse:
        """Register the tenant.

        Raises:
            InvalidSiteInputError: If any field is malformed.
            TenantConflictError: If the email or domain is already registered.
        """
        name, domain, email = self._validate(command)

        if self._tenant_repo.find_by_email(email) is not None:
            raise TenantConflictError("email", email, correlation_id=command.correlation_id)
        if self._tenant_repo.find_by_domain(domain) is not None:
            raise TenantConflictError("domain", domain, correlation_id=command.correlation_id)

        tenant = Tenant(
            tenant_id=self._uuid_generator.generate(),
            name=name,
            domain=domain,
            email=email,
            password_hash=self._password_hasher.hash(command.password),
        )
        self._tenant_repo.save(tenant)

        log_secure_info("info", "Tenant created", tenant.tenant_id)
        return TenantResponse.from_entity(tenant)

    def _validate(self, command: CreateTenantCommand) -> tuple:
        name = (command.name or "").strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise InvalidSiteInputError(
                "Tenant name is required and must be at most 255 characters",
                correlation_id=command.correlation_id,
            )

        try:
            domain = Domain(command.domain or "").value
        except ValueError as exc:
            raise InvalidSiteInputError(str(exc), correlation_id=command.correlation_id) from exc

        email = (command.email or "").strip().lower()
        if len(email) > 254 or not EMAIL_PATTERN.fullmatch(email):
            raise InvalidSiteInputError(
                "Invalid email address", correlation_id=command.correlation_id
            )

        if not MIN_PASSWORD_LENGTH <= len(command.password or "") <= MAX_PASSWORD_LENGTH:
            raise InvalidSiteInputError(
                f"Password must be {MIN_PASSWORD_LENGTH}-{MAX_PASSWORD_LENGTH} characters",
                correlation_id=command.correlation_id,
            )
        return name, domain, email
