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

"""Domain exceptions for sites and tenants."""

from typing import Optional


class SiteDomainError(Exception):
    """Base exception for all site domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize site domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class InvalidSiteInputError(SiteDomainError):
    """Site or tenant input failed validation."""


class SiteNotFoundError(SiteDomainError):
    """Site does not exist."""

    def __init__(self, site_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize site not found error.

        Args:
            site_id: The site identifier that was not found.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(f"Site not found: {site_id}", correlation_id=correlation_id)
        self.site_id = site_id


class DomainConflictError(SiteDomainError):
    """Another site already uses the domain."""

    def __init__(self, domain: str, correlation_id: Optional[str] = None) -> None:
        """Initialize domain conflict error.

        Args:
            domain: The conflicting domain.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(f"Domain already exists: {domain}", correlation_id=correlation_id)
        self.domain = domain


class SiteStateError(SiteDomainError):
    """Operation is not possible in the site's current state."""


class TenantNotFoundError(SiteDomainError):
    """Tenant does not exist."""

    def __init__(self, tenant_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize tenant not found error.

        Args:
            tenant_id: The tenant identifier that was not found.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(f"Tenant not found: {tenant_id}", correlation_id=correlation_id)
        self.tenant_id = tenant_id


class TenantConflictError(SiteDomainError):
    """Another tenant already uses the email or domain."""

    def __init__(
        self,
        field_name: str,
        value: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tenant conflict error.

        Args:
            field_name: Which unique field collided (email or domain).
            value: The conflicting value.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Tenant {field_name} already in use: {value}",
            correlation_id=correlation_id,
        )
        self.field_name = field_name
        self.value = value
