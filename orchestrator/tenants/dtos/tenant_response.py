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

"""Tenant response DTO."""

from dataclasses import dataclass

from core.sites.entities import Tenant


@dataclass(frozen=True)
class TenantResponse:
    """Tenant as returned to the API layer. Never carries the password hash."""

    tenant_id: str
    name: str
    domain: str
    email: str
    active: bool
    created_at: str

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantResponse":
        """Map a tenant entity to the response DTO."""
        return cls(
            tenant_id=tenant.tenant_id,
            name=tenant.name,
            domain=tenant.domain,
            email=tenant.email,
            active=tenant.active,
            created_at=tenant.created_at.isoformat(),
        )
