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

"""Mappers for domain <-> ORM model conversion.

Explicit mapping between domain entities and ORM models.
No domain logic lives here, only data transformation.
"""

from datetime import datetime, timezone
from typing import Optional

from core.deployments.entities import DeploymentJob
from core.deployments.repositories import QueueEntry
from core.deployments.value_objects import JobStatus
from core.sites.entities import Site, Tenant
from core.sites.value_objects import ContainerStatus
from .models import DeploymentJobModel, DeploymentQueueModel, SiteModel, TenantModel


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes returned by backends without tz support."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TenantMapper:
    """Mapper for Tenant entity <-> TenantModel ORM."""

    @staticmethod
    def to_orm(tenant: Tenant) -> TenantModel:
        return TenantModel(
            tenant_id=tenant.tenant_id,
            name=tenant.name,
            domain=tenant.domain,
            email=tenant.email,
            password_hash=tenant.password_hash,
            active=tenant.active,
            created_at=tenant.created_at,
        )

    @staticmethod
    def to_domain(model: TenantModel) -> Tenant:
        return Tenant(
            tenant_id=model.tenant_id,
            name=model.name,
            domain=model.domain,
            email=model.email,
            password_hash=model.password_hash,
            active=model.active,
            created_at=_aware(model.created_at),
        )


class SiteMapper:
    """Mapper for Site entity <-> SiteModel ORM."""

    @staticmethod
    def to_orm(site: Site) -> SiteModel:
        """Convert Site domain entity to ORM model."""
        model = SiteModel(site_id=site.site_id)
        SiteMapper.copy_to_orm(site, model)
        return model

    @staticmethod
    def copy_to_orm(site: Site, model: SiteModel) -> None:
        """Copy every mutable attribute of site onto an existing model."""
        model.name = site.name
        model.domain = site.domain
        model.slug = site.slug
        model.tenant_id = site.tenant_id
        model.description = site.description
        model.custom_logo_path = site.custom_logo_path
        model.access_user = site.access_user
        model.access_secret = site.access_secret
        model.access_enabled = site.access_enabled
        model.runtime_tag = site.runtime_tag
        model.container_name = site.container_name
        model.proxy_container_name = site.proxy_container_name
        model.network_name = site.network_name
        model.image_name = site.image_name
        model.container_port = site.container_port
        model.container_status = site.container_status.value if site.container_status else None
        model.tls_enabled = site.tls_enabled
        model.created_at = site.created_at
        model.updated_at = site.updated_at

    @staticmethod
    def to_domain(model: SiteModel) -> Site:
        """Convert SiteModel ORM to Site domain entity."""
        return Site(
            site_id=model.site_id,
            name=model.name,
            domain=model.domain,
            slug=model.slug,
            tenant_id=model.tenant_id,
            description=model.description,
            custom_logo_path=model.custom_logo_path,
            access_user=model.access_user,
            access_secret=model.access_secret,
            access_enabled=model.access_enabled,
            runtime_tag=model.runtime_tag,
            container_name=model.container_name,
            proxy_container_name=model.proxy_container_name,
            network_name=model.network_name,
            image_name=model.image_name,
            container_port=model.container_port,
            container_status=(
                ContainerStatus(model.container_status) if model.container_status else None
            ),
            tls_enabled=model.tls_enabled,
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )


class DeploymentJobMapper:
    """Mapper for DeploymentJob entity <-> DeploymentJobModel ORM."""

    @staticmethod
    def to_orm(job: DeploymentJob) -> DeploymentJobModel:
        return DeploymentJobModel(
            job_id=job.job_id,
            site_id=job.site_id,
            status=job.status.value,
            message=job.message,
            log=job.log,
            created_at=job.created_at,
            started_at=job.started_at,
            finished_at=job.finished_at,
        )

    @staticmethod
    def to_domain(model: DeploymentJobModel) -> DeploymentJob:
        return DeploymentJob(
            job_id=model.job_id,
            site_id=model.site_id,
            status=JobStatus(model.status),
            message=model.message,
            log=model.log or "",
            created_at=_aware(model.created_at),
            started_at=_aware(model.started_at),
            finished_at=_aware(model.finished_at),
        )


class QueueEntryMapper:
    """Mapper for QueueEntry <-> DeploymentQueueModel ORM."""

    @staticmethod
    def to_orm(entry: QueueEntry) -> DeploymentQueueModel:
        return DeploymentQueueModel(
            job_id=entry.job_id,
            site_id=entry.site_id,
            artifact_path=entry.artifact_path,
            access_user=entry.access_user,
            access_secret=entry.access_secret,
            enqueued_at=entry.enqueued_at,
            claimed_at=entry.claimed_at,
        )

    @staticmethod
    def to_domain(model: DeploymentQueueModel) -> QueueEntry:
        return QueueEntry(
            sequence=model.sequence,
            job_id=model.job_id,
            site_id=model.site_id,
            artifact_path=model.artifact_path,
            access_user=model.access_user,
            access_secret=model.access_secret,
            enqueued_at=_aware(model.enqueued_at),
            claimed_at=_aware(model.claimed_at),
        )
