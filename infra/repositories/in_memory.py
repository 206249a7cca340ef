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

"""In-memory implementations of the site, tenant, job and queue repositories.
    Used in testing and development."""

import copy
import itertools
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from core.deployments.entities import DeploymentJob
from core.deployments.repositories import (
    DeploymentJobRepository,
    DeploymentQueue,
    QueueEntry,
)
from core.sites.entities import Site, Tenant
from core.sites.exceptions import DomainConflictError
from core.sites.repositories import SiteRepository, TenantRepository


class InMemorySiteRepository(SiteRepository):
    def __init__(self) -> None:
        self._sites: Dict[str, Site] = {}

    def save(self, site: Site) -> None:
        holder = self.find_by_domain(site.domain)
        if holder is not None and holder.site_id != site.site_id:
            raise DomainConflictError(site.domain)
        self._sites[site.site_id] = site

    def find_by_id(self, site_id: str) -> Optional[Site]:
        return self._sites.get(site_id)

    def find_by_domain(self, domain: str) -> Optional[Site]:
        for site in self._sites.values():
            if site.domain == domain.lower():
                return site
        return None

    def slug_exists(self, slug: str) -> bool:
        return any(site.slug == slug for site in self._sites.values())

    def list_all(self) -> List[Site]:
        return sorted(self._sites.values(), key=lambda s: s.created_at, reverse=True)

    def delete(self, site_id: str) -> bool:
        return self._sites.pop(site_id, None) is not None


class InMemoryTenantRepository(TenantRepository):
    def __init__(self) -> None:
        self._tenants: Dict[str, Tenant] = {}

    def save(self, tenant: Tenant) -> None:
        self._tenants[tenant.tenant_id] = tenant

    def find_by_id(self, tenant_id: str) -> Optional[Tenant]:
        return self._tenants.get(tenant_id)

    def find_by_email(self, email: str) -> Optional[Tenant]:
        for tenant in self._tenants.values():
            if tenant.email == email:
                return tenant
        return None

    def find_by_domain(self, domain: str) -> Optional[Tenant]:
        for tenant in self._tenants.values():
            if tenant.domain == domain:
                return tenant
        return None


class InMemoryDeploymentJobRepository(DeploymentJobRepository):
    def __init__(self) -> None:
        self._jobs: Dict[str, DeploymentJob] = {}

    def save(self, job: DeploymentJob) -> None:
        self._jobs[job.job_id] = job

    def find_by_id(self, job_id: str) -> Optional[DeploymentJob]:
        return self._jobs.get(job_id)

    def list_for_site(self, site_id: str, limit: int = 100) -> List[DeploymentJob]:
        jobs = [job for job in self._jobs.values() if job.site_id == site_id]
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return jobs[:limit]


class InMemoryDeploymentQueue(DeploymentQueue):
    def __init__(self) -> None:
        self._entries: List[QueueEntry] = []
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def enqueue(self, entry: QueueEntry) -> QueueEntry:
        with self._lock:
            stored = copy.copy(entry)
            stored.sequence = next(self._sequence)
            self._entries.append(stored)
            return copy.copy(stored)

    def claim_next(self) -> Optional[QueueEntry]:
        with self._lock:
            for entry in self._entries:
                if entry.claimed_at is None:
                    entry.claimed_at = datetime.now(timezone.utc)
                    return copy.copy(entry)
            return None

    def ack(self, job_id: str) -> None:
        with self._lock:
            self._entries = [e for e in self._entries if e.job_id != job_id]

    def list_claimed(self) -> List[QueueEntry]:
        with self._lock:
            return [copy.copy(e) for e in self._entries if e.claimed_at is not None]
