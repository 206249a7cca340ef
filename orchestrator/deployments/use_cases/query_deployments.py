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

"""Deployment history and log queries."""

from typing import List

from core.deployments.exceptions import JobNotFoundError
from core.deployments.repositories import DeploymentJobRepository
from core.sites.exceptions import SiteNotFoundError
from core.sites.repositories import SiteRepository

from orchestrator.deployments.dtos import DeploymentLogView, DeploymentSummary

HISTORY_LIMIT = 100


class GetDeploymentLogUseCase:
    """Returns status, message and log of one deployment."""

    def __init__(self, job_repo: DeploymentJobRepository) -> None:
        self._job_repo = job_repo

    def execute(self, job_id: str) -> DeploymentLogView:
        """Raises JobNotFoundError when the job does not exist."""
        job = self._job_repo.find_by_id(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return DeploymentLogView.from_entity(job)


class ListDeploymentsUseCase:
    """Returns a site's most recent deployments, newest first."""

    def __init__(self, site_repo: SiteRepository, job_repo: DeploymentJobRepository) -> None:
        self._site_repo = site_repo
        self._job_repo = job_repo

    def execute(self, site_id: str) -> List[DeploymentSummary]:
        if self._site_repo.find_by_id(site_id) is None:
            raise SiteNotFoundError(site_id)
        jobs = self._job_repo.list_for_site(site_id, limit=HISTORY_LIMIT)
        return [DeploymentSummary.from_entity(job) for job in jobs]
