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

"""CreateTenant command DTO."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CreateTenantCommand:
    """Command to register a tenant.

    Attributes:
        name: Display name of the tenant.
        domain: Base domain under which the tenant's sites are published.
        email: Contact and login email, unique across tenants.
        password: Plain-text password; hashed before storage.
        correlation_id: Request correlation identifier for tracing.
    """

    name: str
    domain: str
    email: str
    password: str
    correlation_id: Optional[str] = None

    def __repr__(self) -> str:
        """Return representation with the password masked."""
        return (
            f"CreateTenantCommand(name={self.name!r}, domain={self.domain!r}, "
            f"correlation_id={self.correlation_id!r})"
        )
