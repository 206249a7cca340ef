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

"""SQLAlchemy ORM models for SiteDock persistence.

ORM models are infrastructure-only and never exposed outside this layer.
Domain <-> ORM conversion is handled by mappers in mappers.py.
"""

# Third-party imports
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TenantModel(Base):
    """ORM model for tenants table.

    Maps to Tenant domain entity via TenantMapper.
    """

    __tablename__ = "tenants"

    tenant_id = Column(String(36), primary_key=True, nullable=False)
    name = Column(String(200), nullable=False)
    domain = Column(String(253), nullable=False, unique=True)
    email = Column(String(254), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False)


class SiteModel(Base):
    """ORM model for sites table.

    Maps to Site domain entity via SiteMapper.
    """

    __tablename__ = "sites"

    # Primary key
    site_id = Column(String(36), primary_key=True, nullable=False)

    # Business attributes
    name = Column(String(200), nullable=False)
    domain = Column(String(253), nullable=False, unique=True)
    slug = Column(String(100), nullable=False, unique=True)
    tenant_id = Column(
        String(36),
        ForeignKey("tenants.tenant_id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    description = Column(Text, nullable=True)
    custom_logo_path = Column(String(4096), nullable=True)

    # Access control
    access_user = Column(String(64), nullable=False)
    access_secret = Column(String(100), nullable=False)
    access_enabled = Column(Boolean, nullable=False, default=True)

    # Provisioned resources
    runtime_tag = Column(String(32), nullable=True)
    container_name = Column(String(128), nullable=True)
    proxy_container_name = Column(String(128), nullable=True)
    network_name = Column(String(128), nullable=True)
    image_name = Column(String(128), nullable=True)
    container_port = Column(Integer, nullable=True)
    container_status = Column(String(20), nullable=True, index=True)
    tls_enabled = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "container_status IS NULL OR container_status IN "
            "('building', 'running', 'stopped', 'error')",
            name="ck_site_container_status",
        ),
    )


class DeploymentJobModel(Base):
    """ORM model for deployment_jobs table.

    Maps to DeploymentJob domain entity via DeploymentJobMapper.
    Rows are retained after completion as the deployment history.
    """

    __tablename__ = "deployment_jobs"

    job_id = Column(String(36), primary_key=True, nullable=False)
    site_id = Column(String(36), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    message = Column(Text, nullable=True)
    log = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_deployment_jobs_site_created", "site_id", "created_at"),
        CheckConstraint(
            "status IN ('QUEUED', 'RUNNING', 'SUCCESS', 'FAILED')",
            name="ck_deployment_job_status",
        ),
    )


class DeploymentQueueModel(Base):
    """ORM model for deployment_queue table.

    One row per pending or in-flight deployment; deleted on acknowledgement.
    """

    __tablename__ = "deployment_queue"

    sequence = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(String(36), nullable=False, unique=True)
    site_id = Column(String(36), nullable=False)
    artifact_path = Column(String(4096), nullable=False)
    access_user = Column(String(64), nullable=False)
    access_secret = Column(String(100), nullable=False)
    enqueued_at = Column(DateTime(timezone=True), nullable=False)
    claimed_at = Column(DateTime(timezone=True), nullable=True, index=True)
