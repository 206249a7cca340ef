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

"""RunDeployment use case: the deployment pipeline."""

import logging
from typing import Callable, Optional

from api.logging_utils import log_secure_info, mask_secret, remove_job_logger
from core.archive.value_objects import UploadLayout
from core.deployments.entities import DeploymentJob
from core.deployments.exceptions import JobNotFoundError
from core.deployments.repositories import DeploymentJobRepository, QueueEntry
from core.edge.services import EdgeConfigurationWriter
from core.privileged.exceptions import PrivilegedBoundaryError
from core.privileged.operations import PrivilegedOperation
from core.privileged.ports import PrivilegedExecutor
from core.provisioning.services import IsolationProvisioner
from core.provisioning.value_objects import ProvisionedWorkload, WorkloadSpec
from core.runtime.services import RuntimeDetector
from core.sites.entities import Site
from core.sites.exceptions import SiteNotFoundError
from core.sites.repositories import SiteRepository
from core.sites.value_objects import ContainerStatus

from orchestrator.deployments.artifacts import discard_artifact

logger = logging.getLogger(__name__)

Report = Callable[[str], None]


class RunDeploymentUseCase:
    """Runs one queued deployment from extraction to publication.

    Stages, in order:
    1. Mark the job RUNNING
    2. Mark the site as building
    3. Extract the archive through the privileged boundary
    4. Detect the entry artifact and runtime
    5. Let the application trust the sidecar (best-effort)
    6. Remove the previous containers and network
    7. Build the image
    8. Start the app container and sidecar
    9. Publish the domain on the reverse proxy and request a certificate
    10. Persist the deployment on the site
    11. Mark the job SUCCESS with a summary

    Every stage appends to the job log and lets errors propagate. The
    top-level handler is the only place that marks the job FAILED; it also
    marks the site as error. Nothing already created is rolled back.
    The uploaded artifact is deleted whatever the outcome.

    Attributes:
        job_repo: Deployment job repository port.
        site_repo: Site repository port.
        executor: Privileged boundary.
        detector: Runtime detector.
        provisioner: Container lifecycle service.
        edge_writer: Reverse proxy and certificate writer.
        upload_layout: Location of extracted content.
    """

    def __init__(
        self,
        job_repo: DeploymentJobRepository,
        site_repo: SiteRepository,
        executor: PrivilegedExecutor,
        detector: RuntimeDetector,
        provisioner: IsolationProvisioner,
        edge_writer: EdgeConfigurationWriter,
        upload_layout: UploadLayout,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self._job_repo = job_repo
        self._site_repo = site_repo
        self._executor = executor
        self._detector = detector
        self._provisioner = provisioner
        self._edge_writer = edge_writer
        self._upload_layout = upload_layout

    async def execute(self, entry: QueueEntry) -> DeploymentJob:
        """Run the pipeline for a claimed queue entry.

        Returns:
            The job in its terminal state.

        Raises:
            JobNotFoundError: If the job record does not exist.
        """
        job = self._job_repo.find_by_id(entry.job_id)
        if job is None:
            discard_artifact(entry.artifact_path)
            raise JobNotFoundError(entry.job_id)

        report = self._reporter(job, entry)
        site: Optional[Site] = None
        try:
            job.start()
            report(f"Deployment started (job {job.job_id})")

            site = self._load_site(entry)
            site.set_status(ContainerStatus.BUILDING)
            self._site_repo.save(site)
            report(f"Deploying site {site.name} to {site.domain}")

            await self._extract(entry, report)
            context = self._upload_layout.extraction_dir(site.site_id)
            location, detection = self._detector.detect(context)
            report(
                f"Detected runtime {detection.tag.value} "
                f"({detection.confidence.value} confidence, source: {detection.source})"
            )
            if location.subdir_offset:
                report(f"Application found in subdirectory {location.subdir_offset}")
            await self._trust_sidecar_auth(site.site_id, location.subdir_offset, report)

            await self._provisioner.cleanup(site.site_id, report)
            await self._provisioner.build_image(
                site.site_id, str(context), detection, location.subdir_offset, report
            )
            workload = await self._provisioner.start_workload(
                WorkloadSpec(
                    site_id=site.site_id,
                    site_name=site.name,
                    access_enabled=site.access_enabled,
                    access_secret=entry.access_secret,
                ),
                report,
            )
            tls_enabled = await self._edge_writer.publish(site.domain, workload.host_port, report)

            self._persist(site, entry, detection.tag.value, workload, tls_enabled)
            report(self._summary(site, workload))
            job.succeed(f"Deployed to {site.url}")
            self._job_repo.save(job)
            log_secure_info(
                "info", "Deployment succeeded", site.site_id, job_id=job.job_id, end_section=True
            )
        except Exception as exc:  # pylint: disable=broad-except
            self._fail(job, site, exc, entry, report)
        finally:
            discard_artifact(entry.artifact_path)
            remove_job_logger(job.job_id)

        return job

    def _reporter(self, job: DeploymentJob, entry: QueueEntry) -> Report:
        def report(line: str) -> None:
            text = mask_secret(line, entry.access_secret)
            job.append_log(text)
            self._job_repo.save(job)
            log_secure_info("info", text, job_id=job.job_id)

        return report

    def _load_site(self, entry: QueueEntry) -> Site:
        site = self._site_repo.find_by_id(entry.site_id)
        if site is None:
            raise SiteNotFoundError(entry.site_id)
        return site

    async def _extract(self, entry: QueueEntry, report: Report) -> None:
        report("Extracting archive")
        output = await self._executor.run(
            PrivilegedOperation.EXTRACT_ARCHIVE, entry.site_id, entry.artifact_path
        )
        for line in output.splitlines():
            if line.strip():
                report(line)

    async def _trust_sidecar_auth(
        self, site_id: str, subdir_offset: Optional[str], report: Report
    ) -> None:
        report("Configuring application settings")
        try:
            output = await self._executor.run(
                PrivilegedOperation.TRUST_SIDECAR_AUTH, site_id, subdir_offset or "."
            )
        except PrivilegedBoundaryError as exc:
            detail = getattr(exc, "output", "") or exc.message
            logger.warning("Could not enable SkipAuthentication for %s: %s", site_id, detail)
            report(f"Warning: could not enable SkipAuthentication: {detail}")
            return
        for line in output.splitlines():
            if line.strip():
                report(line)

    def _persist(
        self,
        site: Site,
        entry: QueueEntry,
        runtime_tag: str,
        workload: ProvisionedWorkload,
        tls_enabled: bool,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        site.set_access(entry.access_user, entry.access_secret)
        site.record_deployment(
            runtime_tag=runtime_tag,
            container_name=workload.names.container,
            proxy_container_name=workload.names.proxy_container,
            network_name=workload.names.network,
            image_name=workload.names.image,
            container_port=workload.host_port,
            tls_enabled=tls_enabled,
        )
        self._site_repo.save(site)

    @staticmethod
    def _summary(site: Site, workload: ProvisionedWorkload) -> str:
        names = workload.names
        return (
            f"Deployment succeeded: {site.url} (port {workload.host_port}, "
            f"container {names.container}, sidecar {names.proxy_container}, "
            f"network {names.network}, image {names.image})"
        )

    def _fail(
        self,
        job: DeploymentJob,
        site: Optional[Site],
        exc: Exception,
        entry: QueueEntry,
        report: Report,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        message = mask_secret(str(exc), entry.access_secret)
        logger.error("Deployment %s failed: %s", job.job_id, message)

        report(f"Deployment failed: {message}")
        output = getattr(exc, "output", None)
        if output:
            report(output)

        if not job.status.is_terminal:
            job.fail(message)
            self._job_repo.save(job)

        if site is not None:
            site.set_status(ContainerStatus.ERROR)
            self._site_repo.save(site)

        log_secure_info(
            "error", "Deployment failed", entry.site_id, job_id=job.job_id, end_section=True
        )
