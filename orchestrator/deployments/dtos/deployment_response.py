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

"""Deployment response DTOs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.deployments.entities import DeploymentJob


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class DeploymentAccepted:
    """Acknowledgement of a queued deployment.

    Attributes:
        job_id: Identifier to poll the log with.
        site_id: Target site.
        status: Always QUEUED at acceptance.
    """

    job_id: str
    site_id: str
    status: str


@dataclass(frozen=True)
class DeploymentLogView:
    """Status, message and full log of a deployment."""

    job_id: str
    site_id: str
    status: str
    message: Optional[str]
    log: str

    @classmethod
    def from_entity(cls, job: DeploymentJob) -> "DeploymentLogView":
        """Map a job entity to the log view."""
        return cls(
            job_id=job.job_id,
            site_id=job.site_id,
            status=job.status.value,
            message=job.message,
            log=job.log,
        )


@dataclass(frozen=True)
class DeploymentSummary:
    """One row of a site's deployment history."""

    job_id: str
    site_id: str
    status: str
    message: Optional[str]
    created_at: str
    started_at: Optional[str]
    finished_at: Optional[str]

    @classmethod
    def from_entity(cls, job: DeploymentJob) -> "DeploymentSummary":
        """Map a job entity to a history row."""
        return cls(
            job_id=job.job_id,
            site_id=job.site_id,
            status=job.status.value,
            message=job.message,
            created_at=job.created_at.isoformat(),
            started_at=_iso(job.started_at),
            finished_at=_iso(job.finished_at),
        )
