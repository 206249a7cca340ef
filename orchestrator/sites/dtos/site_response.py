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

"""Site response DTO."""

from dataclasses import dataclass
from typing import Optional

from core.sites.entities import Site


@dataclass(frozen=True)
# pylint: disable=too-many-instance-attributes
class SiteResponse:
    """Site as returned to the API layer.

    The access secret is never included.
    """

    site_id: str
    name: str
    domain: str
    slug: str
    url: str
    tenant_id: Optional[str]
    description: Optional[str]
    custom_logo_path: Optional[str]
    access_user: str
    access_enabled: bool
    runtime_tag: Optional[str]
    container_name: Optional[str]
    proxy_container_name: Optional[str]
    network_name: Optional[str]
    image_name: Optional[str]
    container_port: Optional[int]
    container_status: Optional[str]
    tls_enabled: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, site: Site) -> "SiteResponse":
        """Map a site entity to the response DTO."""
        return cls(
            site_id=site.site_id,
            name=site.name,
            domain=site.domain,
            slug=site.slug,
            url=site.url,
            tenant_id=site.tenant_id,
            description=site.description,
            custom_logo_path=site.custom_logo_path,
            access_user=site.access_user,
            access_enabled=site.access_enabled,
            runtime_tag=site.runtime_tag,
            container_name=site.container_name,
            proxy_container_name=site.proxy_container_name,
            network_name=site.network_name,
            image_name=site.image_name,
            container_port=site.container_port,
            container_status=(
                site.container_status.value if site.container_status is not None else None
            ),
            tls_enabled=site.tls_enabled,
            created_at=site.created_at.isoformat(),
            updated_at=site.updated_at.isoformat(),
        )
