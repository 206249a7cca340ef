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

"""CreateSite use case implementation."""

import logging

from api.logging_utils import log_secure_info
from core.deployments.repositories import IdentifierGenerator
from core.sites.entities import Site
from core.sites.exceptions import InvalidSiteInputError, TenantNotFoundError
from core.sites.repositories import SiteRepository, TenantRepository
from core.sites.services import SiteRegistrationService
from core.sites.value_objects import AccessCredentials

from orchestrator.sites.commands import CreateSiteCommand
from orchestrator.sites.dtos import SiteResponse

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000


class CreateSiteUseCase:
    """Use case for registering a site.

    This use case guarantees:
    - Domain uniqueness is checked before anything is stored
    - The slug is unique, suffixed with -1, -2, ... on collision
    - No container resources exist until the first deployment

    Attributes:
        site_repo: Site repository port.
        tenant_repo: Tenant repository port.
        registration_service: Slug and domain derivation service.
        uuid_generator: Identifier generator for the site id.
        default_access_user: Login name used when the command gives none.
    """

    def __init__(
        self,
        site_repo: SiteRepository,
        tenant_repo: TenantRepository,
        registration_service: SiteRegistrationService,
        uuid_generator: IdentifierGenerator,
        default_access_user: str = "viewer",
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """Initialize use case with repository and service dependencies.

        Args:
            site_repo: Site repository implementation.
            tenant_repo: Tenant repository implementation.
            registration_service: Service deriving slug and domain.
            uuid_generator: UUID generator for identifiers.
            default_access_user: Fallback sidecar login name.
        """
        self._site_repo = site_repo
        self._tenant_repo = tenant_repo
        self._registration_service = registration_service
        self._uuid_generator = uuid_generator
        self._default_access_user = default_access_user

    def execute(self, command: CreateSiteCommand) -> SiteResponse:
        """Register the site.

        Args:
            command: CreateSite command with the site details.

        Returns:
            SiteResponse DTO of the stored site.

        Raises:
            InvalidSiteInputError: If name, subdomain or credentials are malformed.
            TenantNotFoundError: If the tenant does not exist.
            DomainConflictError: If another site already uses the domain.
        """
        name = self._validate_name(command)
        credentials = self._validate_credentials(command)

        tenant = None
        if command.tenant_id:
            tenant = self._tenant_repo.find_by_id(command.tenant_id)
            if tenant is None:
                raise TenantNotFoundError(
                    command.tenant_id, correlation_id=command.correlation_id
                )

        domain = self._registration_service.build_domain(command.subdomain, tenant)
        self._registration_service.ensure_domain_available(domain)
        slug = self._registration_service.unique_slug(name)

        site = Site(
            site_id=self._uuid_generator.generate(),
            name=name,
            domain=domain.value,
            slug=slug,
            access_user=credentials.user,
            access_secret=credentials.secret,
            access_enabled=command.access_enabled,
            tenant_id=command.tenant_id,
            description=command.description,
        )
        self._site_repo.save(site)

        log_secure_info("info", f"Site created for domain {site.domain}", site.site_id)
        return SiteResponse.from_entity(site)

    def _validate_name(self, command: CreateSiteCommand) -> str:
        name = (command.name or "").strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise InvalidSiteInputError(
                f"Site name is required and must be at most {MAX_NAME_LENGTH} characters",
                correlation_id=command.correlation_id,
            )
        if command.description and len(command.description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidSiteInputError(
                f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                correlation_id=command.correlation_id,
            )
        return name

    def _validate_credentials(self, command: CreateSiteCommand) -> AccessCredentials:
        try:
            return AccessCredentials(
                user=command.access_user or self._default_access_user,
                secret=command.access_secret,
            )
        except ValueError as exc:
            raise InvalidSiteInputError(
                str(exc), correlation_id=command.correlation_id
            ) from exc
