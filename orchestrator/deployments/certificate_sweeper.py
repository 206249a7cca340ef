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

"""Background retry of certificate requests for sites served over HTTP."""

import asyncio
import logging
from typing import Optional

from core.edge.services import EdgeConfigurationWriter
from core.sites.repositories import SiteRepository
from core.sites.value_objects import ContainerStatus

logger = logging.getLogger(__name__)


class CertificateSweeper:
    """Periodically re-requests certificates that failed during deployment.

    Only running sites without TLS are considered. A sweep is skipped while
    a deployment holds the host mutation lock. An interval of zero or less
    disables the sweeper.
    """

    def __init__(
        self,
        site_repo: SiteRepository,
        edge_writer: EdgeConfigurationWriter,
        mutation_lock: asyncio.Lock,
        interval_seconds: int = 0,
    ) -> None:
        self._site_repo = site_repo
        self._edge_writer = edge_writer
        self._mutation_lock = mutation_lock
        self._interval = interval_seconds
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        """Whether a retry interval is configured."""
        return self._interval > 0

    async def start(self) -> None:
        """Start the background sweep task when enabled."""
        if not self.enabled:
            logger.info("Certificate sweeper disabled")
            return
        if self._running:
            logger.warning("Certificate sweeper is already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info("Certificate sweeper started with %d second interval", self._interval)

    async def stop(self) -> None:
        """Stop the background sweep task."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def sweep_once(self) -> int:
        """Retry certificates once. Returns the number of sites that gained TLS."""
        if self._mutation_lock.locked():
            logger.debug("Deployment in progress, skipping certificate sweep")
            return 0

        issued = 0
        async with self._mutation_lock:
            for site in self._site_repo.list_all():
                if site.container_status != ContainerStatus.RUNNING or site.tls_enabled:
                    continue
                if not await self._edge_writer.request_certificate(site.domain):
                    continue
                site.mark_tls_enabled()
                self._site_repo.save(site)
                issued += 1
                logger.info("Certificate issued for %s on retry", site.domain)
        return issued

    async def _sweep_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            try:
                await self.sweep_once()
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception("Error in certificate sweeper: %s", exc)
