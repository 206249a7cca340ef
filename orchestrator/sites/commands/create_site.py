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

"""CreateSite command DTO."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
# pylint: disable=too-many-instance-attributes
class CreateSiteCommand:
    """Command to register a site.

    Attributes:
        name: Display name; the slug is derived from it.
        subdomain: Leading label(s) of the public domain.
        access_secret: Password enforced by the access sidecar.
        access_enabled: Whether the sidecar requires the password.
        access_user: Login name; defaults to the configured user.
        tenant_id: Owning tenant, whose base domain is used.
        description: Free-text description.
        correlation_id: Request correlation identifier for tracing.
    """

    name: str
    subdomain: str
    access_secret: str
    access_enabled: bool = True
    access_user: Optional[str] = None
    tenant_id: Optional[str] = None
    description: Optional[str] = None
    correlation_id: Optional[str] = None

    def __repr__(self) -> str:
        """Return representation with the secret masked."""
        return (
            f"CreateSiteCommand(name={self.name!r}, subdomain={self.subdomain!r}, "
            f"tenant_id={self.tenant_id!r}, correlation_id={self.correlation_id!r})"
        )
