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

"""SQL repository implementations for SiteDock persistence.

These implement the repository ports defined in core/sites/repositories.py
and core/deployments/repositories.py using SQLAlchemy ORM.

Each call opens its own session scope, so a log line appended by the
worker is committed and visible to API readers immediately.
"""

from datetime import datetime, timezone
from typing import Callable, ContextManager, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.deployments.entities import DeploymentJob
from core.deployments.repositories import (
    DeploymentJobRepository,
    DeploymentQueue,
    QueueEntry,
)
from core.sites.entities import Site, Tenant
from core.sites.exceptions import DomainConflictError, TenantConflictError
from core.sites.repositories import SiteRepository, TenantRepository
from .mappers import DeploymentJobMapper, QueueEntryMapper, SiteMapper, TenantMapper
from .models import DeploymentJobModel, DeploymentQueueModel, SiteModel, TenantModel
from .session import get_db_session

SessionScope = Callable[[], ContextManager[Session]]


class SqlSiteRepository(SiteRepository):
    """SQL implementation of SiteRepository."""

    def __init__(self, session_scope: SessionScope = get_db_session) -> None:
        """Initialize repository.

        Args:
            session_scope: Context manager factory yielding a committed session.
        """
        self.session_scope = session_scope

    def save(self, site: Site) -> None:
        """Insert or update a site.

        Raises:
            DomainConflictError: If the unique domain (or slug) is taken.
        """
        try:
            with self.session_scope() as session:
                existing = session.get(SiteModel, site.site_id)
                if existing is None:
                    session.add(SiteMapper.to_orm(site))
                else:
                    SiteMapper.copy_to_orm(site, existing)
                session.flush()
        except IntegrityError as exc:
            raise DomainConflictError(site.domain) from exc

    def find_by_id(self, site_id: str) -> Optional[Site]:
        with self.session_scope() as session:
            model = session.get(SiteModel, site_id)
            return SiteMapper.to_domain(model) if model is not None else None

    def find_by_domain(self, domain: str) -> Optional[Site]:
        with self.session_scope() as session:
            model = session.execute(
                select(SiteModel).where(SiteModel.domain == domain.lower())
            ).scalar_one_or_none()
            return SiteMapper.to_domain(model) if model is not None else None

    def slug_exists(self, slug: str) -> bool:
        with self.session_scope() as session:
            found = session.execute(
                select(SiteModel.site_id).where(SiteModel.slug == slug)
            ).first()
            return found is not None

    def list_all(self) -> List[Site]:
        with self.session_scope() as session:
            models = session.execute(
                select(SiteModel).order_by(SiteModel.created_at.desc())
            ).scalars().all()
            return [SiteMapper.to_domain(m) for m in models]

    def delete(self, site_id: str) -> bool:
        with self.session_scope() as session:
            result = session.execute(delete(SiteModel).where(SiteModel.site_id == site_id))
            return result.rowcount > 0


class SqlTenantRepository(TenantRepository):
    """SQL implementation of TenantRepository."""

    def __init__(self, session_scope: SessionScope = get_db_session) -> None:
        self.session_scope = session_scope

    def save(self, tenant: Tenant) -> None:
        """Insert or update a tenant.

        Raises:
            TenantConflictError: If email or domain is already registered.
        """
        try:
            with self.session_scope() as session:
                session.merge(TenantMapper.to_orm(tenant))
                session.flush()
        except IntegrityError as exc:
            raise TenantConflictError("email or domain", tenant.email) from exc

    def find_by_id(self, tenant_id: str) -> Optional[Tenant]:
        with self.session_scope() as session:
            model = session.get(TenantModel, tenant_id)
            return TenantMapper.to_domain(model) if model is not None else None

    def find_by_email(self, email: str) -> Optional[Tenant]:
        with self.session_scope() as session:
            model = session.execute(
                select(TenantModel).where(TenantModel.email == email)
            ).scalar_one_or_none()
            return TenantMapper.to_domain(model) if model is not None else None

    def find_by_domain(self, domain: str) -> Optional[Tenant]:
        with self.session_scope() as session:
            model = session.execute(
                select(TenantModel).where(TenantModel.domain == domain)
            ).scalar_one_or_none()
            return TenantMapper.to_domain(model) if model is not None else None


class SqlDeploymentJobRepository(DeploymentJobRepository):
    """SQL implementation of DeploymentJobRepository."""

    def __init__(self, session_scope: SessionScope = get_db_session) -> None:
        self.session_scope = session_scope

    def save(self, job: DeploymentJob) -> None:
        with self.session_scope() as session:
            session.merge(DeploymentJobMapper.to_orm(job))

    def find_by_id(self, job_id: str) -> Optional[DeploymentJob]:
        with self.session_scope() as session:
            model = session.get(DeploymentJobModel, job_id)
            return DeploymentJobMapper.to_domain(model) if model is not None else None

    def list_for_site(self, site_id: str, limit: int = 100) -> List[DeploymentJob]:
        with self.session_scope() as session:
            models = session.execute(
                select(DeploymentJobModel)
                .where(DeploymentJobModel.site_id == site_id)
                .order_by(DeploymentJobModel.created_at.desc())
                .limit(limit)
            ).scalars().all()
            return [DeploymentJobMapper.to_domain(m) for m in models]


class SqlDeploymentQueue(DeploymentQueue):
    """Durable FIFO backed by the deployment_queue table.

    Claiming locks the oldest unclaimed row (SKIP LOCKED where the backend
    supports it) so several API processes can share one table.
    """

    def __init__(self, session_scope: SessionScope = get_db_session) -> None:
        self.session_scope = session_scope

    def enqueue(self, entry: QueueEntry) -> QueueEntry:
        with self.session_scope() as session:
            model = QueueEntryMapper.to_orm(entry)
            session.add(model)
            session.flush()
            return QueueEntryMapper.to_domain(model)

    def claim_next(self) -> Optional[QueueEntry]:
        with self.session_scope() as session:
            model = session.execute(
                select(DeploymentQueueModel)
                .where(DeploymentQueueModel.claimed_at.is_(None))
                .order_by(DeploymentQueueModel.sequence)
                .limit(1)
                .with_for_update(skip_locked=True)
            ).scalar_one_or_none()
            if model is None:
                return None
            model.claimed_at = datetime.now(timezone.utc)
            session.flush()
            return QueueEntryMapper.to_domain(model)

    def ack(self, job_id: str) -> None:
        with self.session_scope() as session:
            session.execute(
                delete(DeploymentQueueModel).where(DeploymentQueueModel.job_id == job_id)
            )

    def list_claimed(self) -> List[QueueEntry]:
        with self.session_scope() as session:
            models = session.execute(
                select(DeploymentQueueModel)
                .where(DeploymentQueueModel.claimed_at.is_not(None))
                .order_by(DeploymentQueueModel.sequence)
            ).scalars().all()
            return [QueueEntryMapper.to_domain(m) for m in models]
