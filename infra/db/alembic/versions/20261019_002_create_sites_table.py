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

"""Create sites table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sites",
        sa.Column("site_id", sa.String(36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("domain", sa.String(253), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column(
            "tenant_id",
            sa.String(36),
            sa.ForeignKey("tenants.tenant_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("custom_logo_path", sa.String(4096), nullable=True),
        sa.Column("access_user", sa.String(64), nullable=False),
        sa.Column("access_secret", sa.String(100), nullable=False),
        sa.Column("access_enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("runtime_tag", sa.String(32), nullable=True),
        sa.Column("container_name", sa.String(128), nullable=True),
        sa.Column("proxy_container_name", sa.String(128), nullable=True),
        sa.Column("network_name", sa.String(128), nullable=True),
        sa.Column("image_name", sa.String(128), nullable=True),
        sa.Column("container_port", sa.Integer, nullable=True),
        sa.Column("container_status", sa.String(20), nullable=True),
        sa.Column("tls_enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("domain", name="uq_sites_domain"),
        sa.UniqueConstraint("slug", name="uq_sites_slug"),
        sa.CheckConstraint(
            "container_status IS NULL OR container_status IN "
            "('building', 'running', 'stopped', 'error')",
            name="ck_site_container_status",
        ),
    )

    op.create_index("ix_sites_tenant_id", "sites", ["tenant_id"])
    op.create_index("ix_sites_container_status", "sites", ["container_status"])
    op.create_index("ix_sites_created_at", "sites", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_sites_created_at", table_name="sites")
    op.drop_index("ix_sites_container_status", table_name="sites")
    op.drop_index("ix_sites_tenant_id", table_name="sites")
    op.drop_table("sites")
