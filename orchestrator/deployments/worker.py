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

"""Background asyncio worker that runs queued deployments.

Exactly one deployment is in flight at a time. The worker holds the host
mutation lock while a job runs, so site start, stop and teardown requests
wait for it to finish.
"""

import asyncio
import logging
from typing import Optional

from core.deployments.repositories import DeploymentJobRepository, DeploymentQueue, QueueEntry

from orchestrator.deployments.artifacts import discard_artifact
from orchestrator.deployments.use_cases import RunDeploymentUseCase

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0

INTERRUPTED_MESSAGE = "Deployment interrupted by service restart"
ABORTED_MESSAGE = "Deployment aborted by an internal error"


class DeploymentWorker:
    """Background asyncio task that dequeues deployments in FIFO order.

    Runs within the FastAPI application lifecycle. When the queue is empty
    it sleeps for the poll interval. There is no retry and no cancellation
    of a running job.
    """

    def __init__(
        self,
        queue: DeploymentQueue,
        job_repo: DeploymentJobRepository,
        run_use_case: RunDeploymentUseCase,
        mutation_lock: asyncio.Lock,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ) -> None:  # pylint: disable=too-many-arguments,too-many-positional-arguments
        """Initialize deployment worker.

        Args:
            queue: Durable deployment queue.
            job_repo: Deployment job repository.
            run_use_case: Pipeline executed for each entry.
            mutation_lock: Lock serializing host mutations.
            poll_interval: Idle polling interval in seconds.
        """
        self._queue = queue
        self._job_repo = job_repo
        self._run_use_case = run_use_case
        self._mutation_lock = mutation_lock
        self._poll_interval = poll_interval
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._current_job_id: Optional[str] = None

    def recover_interrupted(self) -> int:
        """Fail every entry that was claimed but never acknowledged.

        Called once at startup, before the worker starts.

        Returns:
            Number of entries recovered.
        """
        recovered = 0
        for entry in self._queue.list_claimed():
            job = self._job_repo.find_by_id(entry.job_id)
            if job is not None and not job.status.is_terminal:
                job.append_log(INTERRUPTED_MESSAGE)
                job.fail(INTERRUPTED_MESSAGE)
                self._job_repo.save(job)
            discard_artifact(entry.artifact_path)
            self._queue.ack(entry.job_id)
            recovered += 1

        if recovered:
            logger.warning("Recovered %d interrupted deployment(s)", recovered)
        return recovered

    async def start(self) -> None:
        """Start the background worker task."""
        if self._running:
            logger.warning("Deployment worker is already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(
            "Deployment worker started with %s second poll interval",
            self._poll_interval,
        )

    async def stop(self) -> None:
        """Stop the background worker task."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Deployment worker stopped")

    async def run_once(self) -> bool:
        """Claim and run the oldest queued deployment.

        The entry is acknowledged whether the pipeline succeeded or raised;
        a job the pipeline left unfinished is failed first. Only a cancelled
        run leaves the entry claimed, for recovery at the next start.

        Returns:
            True if an entry was processed, False if the queue was empty.
        """
        entry = await asyncio.get_event_loop().run_in_executor(None, self._queue.claim_next)
        if entry is None:
            return False

        logger.info("Claimed deployment %s for site %s", entry.job_id, entry.site_id)
        acknowledge = True
        async with self._mutation_lock:
            self._current_job_id = entry.job_id
            try:
                await self._run_use_case.execute(entry)
            except asyncio.CancelledError:
                acknowledge = False
                raise
            except Exception:
                self._fail_unfinished(entry)
                raise
            finally:
                self._current_job_id = None
                if acknowledge:
                    self._queue.ack(entry.job_id)

        return True

    def _fail_unfinished(self, entry: QueueEntry) -> None:
        discard_artifact(entry.artifact_path)
        try:
            job = self._job_repo.find_by_id(entry.job_id)
            if job is not None and not job.status.is_terminal:
                job.append_log(ABORTED_MESSAGE)
                job.fail(ABORTED_MESSAGE)
                self._job_repo.save(job)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Could not mark deployment %s as failed", entry.job_id)

    async def _poll_loop(self) -> None:
        """Main loop that runs as a background task."""
        while self._running:
            processed = False
            try:
                processed = await self.run_once()
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception("Error in deployment worker: %s", exc)

            if not processed:
                await asyncio.sleep(self._poll_interval)

    @property
    def is_running(self) -> bool:
        """Check if the worker is currently running."""
        return self._running

    @property
    def current_job_id(self) -> Optional[str]:
        """Job currently being deployed, if any."""
        return self._current_job_id
