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

"""EnqueueDeployment use case implementation."""

import logging
from datetime import datetime, timezone

from api.logging_utils import create_job_log_file, log_secure_info
from core.archive.services import ArchiveValidator
from core.deployments.entities import DeploymentJob
from core.deployments.exceptions import InvalidDeploymentInputError
from core.deployments.repositories import (
    DeploymentJobRepository,
    DeploymentQueue,
    IdentifierGenerator,
    QueueEntry,
)
from core.sites.entities import Site
from core.sites.exceptions import SiteNotFoundError
from core.sites.repositories import SiteRepository
from core.sites.value_objects import AccessCredentials

from orchestrator.deployments.artifacts import discard_artifact
from orchestrator.deployments.commands import EnqueueDeploymentCommand
from orchestrator.deployments.dtos import DeploymentAccepted

logger = logging.getLogger(__name__)


class EnqueueDeploymentUseCase:
    """Use case for accepting an uploaded archive for deployment.

    Everything that can be checked without touching the host happens here,
    synchronously, so a bad request never produces a job:
    - The site must exist
    - The sidecar credentials must be well formed
    - The upload must be a regular file within the size limit with a zip
      signature

    A rejected upload is deleted immediately. An accepted one is owned by
    the job from then on.

    Attributes:
        site_repo: Site repository port.
        job_repo: Deployment job repository port.
        queue: Durable deployment queue port.
        validator: Pre-extraction archive validator.
        uuid_generator: Identifier generator for job ids.
        max_upload_bytes: Upload size ceiling.
    """

    def __init__(
        self,
        site_repo: SiteRepository,
        job_repo: DeploymentJobRepository,
        queue: DeploymentQueue,
        validator: ArchiveValidator,
        uuid_generator: IdentifierGenerator,
        max_upload_bytes: int,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """Initialize use case with repository and service dependencies.

        Args:
            site_repo: Site repository implementation.
            job_repo: Deployment job repository implementation.
            queue: Deployment queue implementation.
            validator: Archive validator.
            uuid_generator: UUID generator for identifiers.
            max_upload_bytes: Maximum accepted upload size.
        """
        self._site_repo = site_repo
        self._job_repo = job_repo
        self._queue = queue
        self._validator = validator
        self._uuid_generator = uuid_generator
        self._max_upload_bytes = max_upload_bytes

    def execute(self, command: EnqueueDeploymentCommand) -> DeploymentAccepted:
        """Validate the request, create a QUEUED job and push it to the queue.

        Args:
            command: EnqueueDeployment command.

        Returns:
            DeploymentAccepted DTO with the job id.

        Raises:
            SiteNotFoundError: If the site does not exist.
            InvalidDeploymentInputError: If the credentials are malformed.
            ArchiveValidationError: If the upload is not an acceptable archive.
        """
        try:
            site = self._load_site(command)
            credentials = self._validate_credentials(command, site)
            self._validator.require_valid(command.artifact_path, self._max_upload_bytes)
        except Exception:
            discard_artifact(command.artifact_path)
            raise

        job = DeploymentJob(job_id=self._uuid_generator.generate(), site_id=site.site_id)
        job.append_log(f"Deployment queued for site {site.name} ({site.domain})")
        self._job_repo.save(job)
        create_job_log_file(job.job_id)

        try:
            self._queue.enqueue(
                QueueEntry(
                    job_id=job.job_id,
                    site_id=site.site_id,
                    artifact_path=command.artifact_path,
                    access_user=credentials.user,
                    access_secret=credentials.secret,
                    enqueued_at=datetime.now(timezone.utc),
                )
            )
        except Exception:
            job.fail("Deployment could not be queued")
            job.append_log("Deployment could not be queued")
            self._job_repo.save(job)
            discard_artifact(command.artifact_path)
            raise

        log_secure_info(
            "info",
            f"Deployment queued for site {site.site_id}",
            command.correlation_id,
            job_id=job.job_id,
        )
        return DeploymentAccepted(
            job_id=job.job_id,
            site_id=site.site_id,
            status=job.status.value,
        )

    def _load_site(self, command: EnqueueDeploymentCommand) -> Site:
        site = self._site_repo.find_by_id(command.site_id)
        if site is None:
            raise SiteNotFoundError(command.site_id, correlation_id=command.correlation_id)
        return site

    def _validate_credentials(
        self,
        command: EnqueueDeploymentCommand,
        site: Site,
    ) -> AccessCredentials:
        try:
            return AccessCredentials(
                user=command.access_user or site.access_user,
                secret=command.access_secret or site.access_secret,
            )
        except ValueError as exc:
            raise InvalidDeploymentInputError(
                str(exc), correlation_id=command.correlation_id
            ) from exc
