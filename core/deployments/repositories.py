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

"""Repository and queue interfaces for deployment jobs."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.deployments.entities import DeploymentJob


class DeploymentJobRepository(ABC):
    """Persistence for deployment jobs."""

    @abstractmethod
    def save(self, job: DeploymentJob) -> None:
        """Insert or update a job."""
        ...

    @abstractmethod
    def find_by_id(self, job_id: str) -> Optional[DeploymentJob]:
        """Return the job or None."""
        ...

    @abstractmethod
    def list_for_site(self, site_id: str, limit: int = 100) -> List[DeploymentJob]:
        """Return the site's most recent jobs, newest first."""
        ...


@dataclass
# pylint: disable=too-many-instance-attributes
class QueueEntry:
    """Work item handed from the API to the deployment worker.

    sequence is assigned by the queue on enqueue and defines FIFO order.
    claimed_at is set when the worker takes the entry.
    """

    job_id: str
    site_id: str
    artifact_path: str
    access_user: str
    access_secret: str
    enqueued_at: datetime
    sequence: Optional[int] = None
    claimed_at: Optional[datetime] = None

    def __repr__(self) -> str:
        """Return representation with the secret masked."""
        return (
            f"QueueEntry(sequence={self.sequence}, job_id={self.job_id!r}, "
            f"site_id={self.site_id!r}, claimed_at={self.claimed_at})"
        )


class DeploymentQueue(ABC):
    """Durable FIFO of pending deployments."""

    @abstractmethod
    def enqueue(self, entry: QueueEntry) -> QueueEntry:
        """Append an entry and return it with its sequence assigned."""
        ...

    @abstractmethod
    def claim_next(self) -> Optional[QueueEntry]:
        """Mark the oldest unclaimed entry as claimed and return it."""
        ...

    @abstractmethod
    def ack(self, job_id: str) -> None:
        """Remove the entry for a job that reached a terminal state."""
        ...

    @abstractmethod
    def list_claimed(self) -> List[QueueEntry]:
        """Return entries claimed but never acknowledged."""
        ...


class IdentifierGenerator(ABC):  # pylint: disable=R0903
    """Generates identifiers for new jobs, sites and tenants."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new unique identifier string."""
        ...
