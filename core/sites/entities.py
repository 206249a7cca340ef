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

"""Domain entities for sites and tenants."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from core.sites.value_objects import ContainerStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
# pylint: disable=too-many-instance-attributes
class Site:
    """A published web application and its isolation resources.

    Resource names, port and runtime tag stay None until the first
    successful deployment. container_status is a cached view of the
    container runtime and is reconciled at startup.
    """

    site_id: str
    name: str
    domain: str
    slug: str
    access_user: str
    access_secret: str
    access_enabled: bool = True
    tenant_id: Optional[str] = None
    description: Optional[str] = None
    custom_logo_path: Optional[str] = None
    runtime_tag: Optional[str] = None
    container_name: Optional[str] = None
    proxy_container_name: Optional[str] = None
    network_name: Optional[str] = None
    image_name: Optional[str] = None
    container_port: Optional[int] = None
    container_status: Optional[ContainerStatus] = None
    tls_enabled: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def is_deployed(self) -> bool:
        """Whether the site has ever been provisioned."""
        return self.container_name is not None

    @property
    def url(self) -> str:
        """Public URL of the site."""
        scheme = "https" if self.tls_enabled else "http"
        return f"{scheme}://{self.domain}"

    def set_status(self, status: Optional[ContainerStatus]) -> None:
        """Update the cached container status."""
        self.container_status = status
        self.updated_at = _utcnow()

    def set_access(self, user: str, secret: str) -> None:
        """Replace the sidecar credentials."""
        self.access_user = user
        self.access_secret = secret
        self.updated_at = _utcnow()

    def mark_tls_enabled(self) -> None:
        """Record that a certificate was issued for the domain."""
        self.tls_enabled = True
        self.updated_at = _utcnow()

    # pylint: disable=too-many-arguments,too-many-positional-arguments
    def record_deployment(
        self,
        runtime_tag: str,
        container_name: str,
        proxy_container_name: str,
        network_name: str,
        image_name: str,
        container_port: int,
        tls_enabled: bool,
    ) -> None:
        """Persist the outcome of a successful deployment."""
        self.runtime_tag = runtime_tag
        self.container_name = container_name
        self.proxy_container_name = proxy_container_name
        self.network_name = network_name
        self.image_name = image_name
        self.container_port = container_port
        self.tls_enabled = tls_enabled
        self.set_status(ContainerStatus.RUNNING)


@dataclass
class Tenant:
    """Owner of a base domain under which its sites are published."""

    tenant_id: str
    name: str
    domain: str
    email: str
    password_hash: str
    active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
