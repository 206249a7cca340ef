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

"""StartSite and StopSite use case implementations.

Both act synchronously on the site's containers and are not tracked as
deployment jobs. They hold the host mutation lock so they never
interleave with a running deployment.
"""

import asyncio
import logging

from api.logging_utils import log_secure_info
from core.provisioning.exceptions import ProvisioningError
from core.provisioning.services import IsolationProvisioner
from core.sites.entities import Site
from core.sites.exceptions import SiteStateError
from core.sites.repositories import SiteRepository
from core.sites.value_objects import ContainerStatus

from orchestrator.sites.commands import SiteCommand
from orchestrator.sites.dtos import SiteResponse
from orchestrator.sites.use_cases.get_site import load_site

logger = logging.getLogger(__name__)


class _SiteControlUseCase:
    """Shared flow of start and stop."""

    target_status = ContainerStatus.RUNNING
    verb = "start"

    def __init__(
        self,
        site_repo: SiteRepository,
        provisioner: IsolationProvisioner,
        mutation_lock: asyncio.Lock,
    ) -> None:
        self._site_repo = site_repo
        self._provisioner = provisioner
        self._mutation_lock = mutation_lock

    async def execute(self, command: SiteCommand) -> SiteResponse:
        """Apply the operation and update the cached status.

        Raises:
            SiteNotFoundError: If the site does not exist.
            SiteStateError: If the site was never deployed or is building.
            ProvisioningError: If the container runtime failed; the site is
                marked as error.
        """
        async with self._mutation_lock:
            site = load_site(self._site_repo, command)
            self._check_state(site, command)

            try:
                await self._apply(site)
            except ProvisioningError:
                log_secure_info("error", f"Failed to {self.verb} site", site.site_id)
                site.set_status(ContainerStatus.ERROR)
                self._site_repo.save(site)
                raise

            site.set_status(self.target_status)
            self._site_repo.save(site)

        log_secure_info("info", f"Site {self.verb} complete", site.site_id)
        return SiteResponse.from_entity(site)

    def _check_state(self, site: Site, command: SiteCommand) -> None:
        if not site.is_deployed:
            raise SiteStateError(
                f"Site {site.site_id} has not been deployed",
                correlation_id=command.correlation_id,
            )
        if site.container_status == ContainerStatus.BUILDING:
            raise SiteStateError(
                f"Site {site.site_id} is being deployed",
                correlation_id=command.correlation_id,
            )

    async def _apply(self, site: Site) -> None:
        raise NotImplementedError


class StartSiteUseCase(_SiteControlUseCase):
    """Starts the app container, then the sidecar."""

    target_status = ContainerStatus.RUNNING
    verb = "start"

    async def _apply(self, site: Site) -> None:
        await self._provisioner.start(site.site_id)


class StopSiteUseCase(_SiteControlUseCase):
    """Stops the sidecar, then the app container."""

    target_status = ContainerStatus.STOPPED
    verb = "stop"

    async def _apply(self, site: Site) -> None:
        await self._provisioner.stop(site.site_id)
