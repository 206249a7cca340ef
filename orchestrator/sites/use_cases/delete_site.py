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

"""TeardownSite and DeleteSite use case implementations."""

import asyncio
import logging
from typing import List

from api.logging_utils import log_secure_info
from core.edge.services import EdgeConfigurationWriter
from core.privileged.exceptions import PrivilegedBoundaryError
from core.privileged.operations import PrivilegedOperation
from core.privileged.ports import PrivilegedExecutor
from core.provisioning.exceptions import TeardownIncompleteError
from core.provisioning.services import IsolationProvisioner
from core.sites.entities import Site
from core.sites.repositories import SiteRepository
from core.sites.value_objects import ContainerStatus

from orchestrator.sites.commands import SiteCommand
from orchestrator.sites.use_cases.get_site import load_site

logger = logging.getLogger(__name__)


class TeardownSiteUseCase:
    """Removes every host resource a site owns.

    Order: sidecar, app container, network, image, proxy rule,
    certificate, then uploads. Every step is attempted even when an
    earlier one failed, and absent resources count as removed, so running
    it twice is safe.

    Attributes:
        site_repo: Site repository port.
        provisioner: Container lifecycle service.
        edge_writer: Reverse proxy and certificate writer.
        executor: Privileged boundary for upload removal.
        mutation_lock: Serializes host mutations with the deployment worker.
    """

    def __init__(
        self,
        site_repo: SiteRepository,
        provisioner: IsolationProvisioner,
        edge_writer: EdgeConfigurationWriter,
        executor: PrivilegedExecutor,
        mutation_lock: asyncio.Lock,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self._site_repo = site_repo
        self._provisioner = provisioner
        self._edge_writer = edge_writer
        self._executor = executor
        self._mutation_lock = mutation_lock

    async def execute(self, command: SiteCommand, delete_uploads: bool = True) -> List[str]:
        """Tear the site down.

        Returns:
            Progress lines of the steps that removed something.

        Raises:
            SiteNotFoundError: If the site does not exist.
            TeardownIncompleteError: If any step failed; the site is marked
                as error and the remaining steps were still attempted.
        """
        async with self._mutation_lock:
            site = load_site(self._site_repo, command)
            lines: List[str] = []
            failures: List[str] = []

            try:
                await self._provisioner.remove_resources(site.site_id, lines.append)
            except TeardownIncompleteError as exc:
                failures.extend(exc.failures)

            try:
                await self._edge_writer.unpublish(site.domain, lines.append)
            except PrivilegedBoundaryError as exc:
                logger.warning("Failed to unpublish %s: %s", site.domain, exc.message)
                failures.append(f"proxy rule {site.domain}: {exc.message}")

            if delete_uploads:
                await self._remove_uploads(site, lines, failures)

            if failures:
                site.set_status(ContainerStatus.ERROR)
                self._site_repo.save(site)
                log_secure_info("error", "Site teardown incomplete", site.site_id)
                raise TeardownIncompleteError(failures, correlation_id=command.correlation_id)

        log_secure_info("info", "Site teardown complete", site.site_id)
        return lines

    async def _remove_uploads(self, site: Site, lines: List[str], failures: List[str]) -> None:
        try:
            output = await self._executor.run(PrivilegedOperation.REMOVE_UPLOADS, site.site_id)
        except PrivilegedBoundaryError as exc:
            logger.warning("Failed to remove uploads of %s: %s", site.site_id, exc.message)
            failures.append(f"uploads {site.site_id}: {exc.message}")
            return
        lines.extend(line for line in output.splitlines() if line)


class DeleteSiteUseCase:
    """Use case for deleting a site: full teardown, then the record."""

    def __init__(self, site_repo: SiteRepository, teardown: TeardownSiteUseCase) -> None:
        self._site_repo = site_repo
        self._teardown = teardown

    async def execute(self, command: SiteCommand) -> None:
        """Delete the site.

        The record is kept when teardown is incomplete so it can be retried.

        Raises:
            SiteNotFoundError: If the site does not exist.
            TeardownIncompleteError: If any teardown step failed.
        """
        await self._teardown.execute(command, delete_uploads=True)
        self._site_repo.delete(command.site_id)
        log_secure_info("info", "Site deleted", command.site_id)
