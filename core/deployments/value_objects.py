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

"""Value objects for the deployments domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class JobStatus(str, Enum):
    """Deployment job lifecycle state.

    QUEUED: Accepted and waiting for the worker.
    RUNNING: Picked up by the worker.
    SUCCESS: Site published.
    FAILED: Pipeline aborted; message carries the reason.
    """

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in (JobStatus.SUCCESS, JobStatus.FAILED)

    def can_transition_to(self, target: "JobStatus") -> bool:
        """Check whether moving to target is allowed."""
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    JobStatus.QUEUED: frozenset({JobStatus.RUNNING, JobStatus.FAILED}),
    JobStatus.RUNNING: frozenset({JobStatus.SUCCESS, JobStatus.FAILED}),
    JobStatus.SUCCESS: frozenset(),
    JobStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class JobId:
    """Deployment job identifier (UUID string).

    Attributes:
        value: The job identifier.

    Raises:
        ValueError: If the value is not a canonical UUID string.
    """

    value: str

    UUID_PATTERN: ClassVar[str] = (
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"
    )

    def __post_init__(self) -> None:
        """Validate job identifier format."""
        if not re.fullmatch(self.UUID_PATTERN, self.value or ""):
            raise ValueError(f"Invalid job id: {self.value!r}")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value
