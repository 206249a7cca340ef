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

"""Value objects for the sites domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ContainerStatus(str, Enum):
    """Cached lifecycle state of a site's workload.

    BUILDING: A deployment is extracting, building or starting the workload.
    RUNNING: App container and sidecar are up.
    STOPPED: Containers exist but are not running.
    ERROR: The last operation failed or the containers went missing.
    """

    BUILDING = "building"
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass(frozen=True)
class SiteId:
    """Site identifier value object (UUID string).

    Attributes:
        value: The site identifier.

    Raises:
        ValueError: If the value is not a canonical UUID string.
    """

    value: str

    UUID_PATTERN: ClassVar[str] = (
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
    )

    def __post_init__(self) -> None:
        """Validate site identifier format."""
        if not re.fullmatch(self.UUID_PATTERN, self.value or ""):
            raise ValueError(f"Invalid site id: {self.value!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class Slug:
    """URL-safe site slug.

    Attributes:
        value: Lowercase alphanumerics separated by single hyphens.

    Raises:
        ValueError: If the value does not match the slug format.
    """

    value: str

    PATTERN: ClassVar[str] = r"^[a-z0-9]+(-[a-z0-9]+)*$"
    MAX_LENGTH: ClassVar[int] = 100

    def __post_init__(self) -> None:
        """Validate slug format."""
        if not self.value or len(self.value) > self.MAX_LENGTH:
            raise ValueError(f"Slug length must be 1-{self.MAX_LENGTH} characters")
        if not re.fullmatch(self.PATTERN, self.value):
            raise ValueError(f"Invalid slug: {self.value!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class Domain:
    """Fully qualified domain name, stored lowercase.

    Attributes:
        value: The domain name.

    Raises:
        ValueError: If the domain is malformed or too long.
    """

    value: str

    PATTERN: ClassVar[str] = r"^([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,}$"
    MAX_LENGTH: ClassVar[int] = 253
    MAX_LABEL_LENGTH: ClassVar[int] = 63

    def __post_init__(self) -> None:
        """Normalize and validate the domain."""
        normalized = (self.value or "").strip().lower()
        object.__setattr__(self, "value", normalized)
        if not is_valid_domain(normalized):
            raise ValueError(f"Invalid domain format: {normalized!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


def is_valid_domain(domain: str) -> bool:
    """Check RFC 1035 style host name rules."""
    if not re.fullmatch(Domain.PATTERN, domain, re.IGNORECASE):
        return False
    if len(domain) > Domain.MAX_LENGTH:
        return False
    return all(1 <= len(label) <= Domain.MAX_LABEL_LENGTH for label in domain.split("."))


@dataclass(frozen=True)
class AccessCredentials:
    """Basic-auth credentials enforced by the site's sidecar.

    Attributes:
        user: Login name.
        secret: Plain secret handed to the sidecar.

    Raises:
        ValueError: If the user name or secret is malformed.
    """

    user: str
    secret: str

    USER_PATTERN: ClassVar[str] = r"^[A-Za-z0-9._-]{1,64}$"
    MIN_SECRET_LENGTH: ClassVar[int] = 8
    MAX_SECRET_LENGTH: ClassVar[int] = 100

    def __post_init__(self) -> None:
        """Validate user name and secret length."""
        if not re.fullmatch(self.USER_PATTERN, self.user or ""):
            raise ValueError(
                "Access user must be 1-64 characters of letters, digits, '.', '_' or '-'"
            )
        secret_length = len(self.secret or "")
        if not self.MIN_SECRET_LENGTH <= secret_length <= self.MAX_SECRET_LENGTH:
            raise ValueError(
                f"Access secret must be {self.MIN_SECRET_LENGTH}-"
                f"{self.MAX_SECRET_LENGTH} characters"
            )

    def __repr__(self) -> str:
        """Return representation with the secret masked."""
        return f"AccessCredentials(user={self.user!r}, secret='******')"
