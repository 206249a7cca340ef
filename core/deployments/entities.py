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

"""Domain entities for deployment jobs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from core.deployments.exceptions import InvalidStateTransitionError
from core.deployments.value_objects import JobStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DeploymentJob:
    """A single deployment of an uploaded archive to a site.

    The log only grows: append_log is the only way to change it.
    SUCCESS and FAILED are terminal.
    """

    job_id: str
    site_id: str
    status: JobStatus = JobStatus.QUEUED
    message: Optional[str] = None
    log: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def append_log(self, text: str) -> None:
        """Append one timestamped, newline-terminated entry."""
        stamp = _utcnow().strftime("%Y-%m-%dT%H:%M:%SZ")
        self.log += f"[{stamp}] {text.rstrip()}\n"

    def start(self) -> None:
        """Transition QUEUED -> RUNNING."""
        self._transition(JobStatus.RUNNING)
        self.started_at = _utcnow()

    def succeed(self, message: Optional[str] = None) -> None:
        """Transition RUNNING -> SUCCESS."""
        self._transition(JobStatus.SUCCESS)
        self.message = message
        self.finished_at = _utcnow()

    def fail(self, message: str) -> None:
        """Transition QUEUED or RUNNING -> FAILED."""
        self._transition(JobStatus.FAILED)
        self.message = message
        self.finished_at = _utcnow()

    def _transition(self, target: JobStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStateTransitionError(self.job_id, self.status.value, target.value)
        self.status = target
