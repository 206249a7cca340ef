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

"""Value objects for isolation provisioning."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ResourceNames:
    """Deterministic container runtime resource names for one site.

    Attributes:
        image: Image tag, also the app container name.
        container: App container name.
        proxy_container: Access-control sidecar container name.
        network: Per-site network name.
    """

    image: str
    container: str
    proxy_container: str
    network: str

    @classmethod
    def for_site(cls, site_id: str, prefix: str) -> "ResourceNames":
        """Derive every resource name from the site id."""
        base = f"{prefix}-{site_id}"
        return cls(
            image=base,
            container=base,
            proxy_container=f"{base}-proxy",
            network=f"{base}-net",
        )


@dataclass(frozen=True)
class WorkloadSpec:
    """What the provisioner needs to start a site's containers.

    Attributes:
        site_id: Site identifier.
        site_name: Display name shown by the sidecar login page.
        access_enabled: Whether the sidecar requires a password.
        access_secret: Password enforced by the sidecar.
    """

    site_id: str
    site_name: str
    access_enabled: bool
    access_secret: Optional[str] = None

    def __repr__(self) -> str:
        """Return representation with the secret masked."""
        return (
            f"WorkloadSpec(site_id={self.site_id!r}, site_name={self.site_name!r}, "
            f"access_enabled={self.access_enabled})"
        )


@dataclass(frozen=True)
class ProvisionedWorkload:
    """Resources created by a successful start_workload."""

    names: ResourceNames
    host_port: int
