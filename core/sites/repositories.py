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

"""Repository interfaces for sites and tenants."""

from abc import ABC, abstractmethod
from typing import List, Optional

from core.sites.entities import Site, Tenant


class SiteRepository(ABC):
    """Persistence for site records."""

    @abstractmethod
    def save(self, site: Site) -> None:
        """Insert or update a site.

        Raises:
            DomainConflictError: If another site already holds the domain.
        """
        ...

    @abstractmethod
    def find_by_id(self, site_id: str) -> Optional[Site]:
        """Return the site or None."""
        ...

    @abstractmethod
    def find_by_domain(self, domain: str) -> Optional[Site]:
        """Return the site holding the domain or None."""
        ...

    @abstractmethod
    def slug_exists(self, slug: str) -> bool:
        """Whether any site already uses the slug."""
        ...

    @abstractmethod
    def list_all(self) -> List[Site]:
        """Return every site, newest first."""
        ...

    @abstractmethod
    def delete(self, site_id: str) -> bool:
        """Delete the site record. Returns False if it did not exist."""
        ...


class TenantRepository(ABC):
    """Persistence for tenant records."""

    @abstractmethod
    def save(self, tenant: Tenant) -> None:
        """Insert or update a tenant."""
        ...

    @abstractmethod
    def find_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Return the tenant or None."""
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Tenant]:
        """Return the tenant registered with the email or None."""
        ...

    @abstractmethod
    def find_by_domain(self, domain: str) -> Optional[Tenant]:
        """Return the tenant owning the base domain or None."""
        ...
