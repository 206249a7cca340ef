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

"""ReconcileContainerStatus use case implementation."""

import logging
from typing import Dict, Optional

from core.provisioning.ports import ContainerRuntime
from core.sites.entities import Site
from core.sites.repositories import SiteRepository
from core.sites.value_objects import ContainerStatus

logger = logging.getLogger(__name__)


def status_from_listing(status_text: str) -> ContainerStatus:
    """Map a ``docker ps`` status column to the cached site status."""
    if status_text.startswith("Up"):
        return ContainerStatus.RUNNING
    if status_text.startswith(("Exited", "Created")):
        return ContainerStatus.STOPPED
    return ContainerStatus.ERROR


class ReconcileContainerStatusUseCase:
    """Brings the cached container status of every site in line with live state.

    Runs once at startup, before the deployment worker starts:
    - sites left in ``building`` by an interrupted deployment become ``error``
    - deployed sites whose app container or sidecar is gone become ``error``
    - otherwise the app container's live state is recorded
    Sites that were never deployed are left untouched.
    """

    def __init__(
        self,
        site_repo: SiteRepository,
        runtime: ContainerRuntime,
        resource_prefix: str,
    ) -> None:
        self._site_repo = site_repo
        self._runtime = runtime
        self._resource_prefix = resource_prefix

    async def execute(self) -> int:
        """Reconcile every site. Returns the number of sites whose status changed."""
        listing = await self._runtime.list_containers(self._resource_prefix)
        live: Dict[str, str] = dict(listing)
        logger.info("Reconciling site status against %d live containers", len(live))

        changed = 0
        for site in self._site_repo.list_all():
            status = self._reconciled_status(site, live)
            if status is None or status == site.container_status:
                continue
            logger.info(
                "Site %s status %s -> %s",
                site.site_id,
                site.container_status.value if site.container_status else None,
                status.value,
            )
            site.set_status(status)
            self._site_repo.save(site)
            changed += 1

        logger.info("Status reconciliation complete: %d site(s) updated", changed)
        return changed

    @staticmethod
    def _reconciled_status(site: Site, live: Dict[str, str]) -> Optional[ContainerStatus]:
        if site.container_status == ContainerStatus.BUILDING:
            return ContainerStatus.ERROR
        if not site.is_deployed:
            return None

        app_state = live.get(site.container_name)
        if app_state is None:
            return ContainerStatus.ERROR
        if site.proxy_container_name and site.proxy_container_name not in live:
            return ContainerStatus.ERROR
        return status_from_listing(app_state)
