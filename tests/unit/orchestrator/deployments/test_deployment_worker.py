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

"""Unit tests for DeploymentWorker."""

# pylint: disable=redefined-outer-name

import asyncio

import pytest

from core.deployments.value_objects import JobStatus
from orchestrator.deployments.worker import ABORTED_MESSAGE, INTERRUPTED_MESSAGE, DeploymentWorker
from tests.mocks.archive_builder import application_zip
from tests.mocks.site_builders import SITE_ID


class RecordingRunUseCase:
    """Records the entries it is asked to run and the lock state at the time."""

    def __init__(self, lock: asyncio.Lock) -> None:
        self.lock = lock
        self.entries = []
        self.lock_held = []

    async def execute(self, entry):
        self.entries.append(entry.job_id)
        self.lock_held.append(self.lock.locked())


class FailingRunUseCase:
    """Raises before the job reaches a terminal state."""

    async def execute(self, entry):
        raise RuntimeError(f"database unavailable while running {entry.job_id}")


@pytest.fixture
def recorder(mutation_lock):
    return RecordingRunUseCase(mutation_lock)


@pytest.fixture
def worker(queue, job_repo, recorder, mutation_lock):
    return DeploymentWorker(queue, job_repo, recorder, mutation_lock, poll_interval=0.01)


class TestRunOnce:
    """Single-step processing."""

    @pytest.mark.asyncio
    async def test_empty_queue(self, worker) -> None:
        assert await worker.run_once() is False

    @pytest.mark.asyncio
    async def test_fifo_and_lock(self, worker, queue, queued_entry, recorder, tmp_path) -> None:
        for job_id in ("first", "second", "third"):
            queue.enqueue(queued_entry(tmp_path / f"{job_id}.zip", job_id=job_id))

        while await worker.run_once():
            pass

        assert recorder.entries == ["first", "second", "third"]
        assert recorder.lock_held == [True, True, True]
        assert queue.list_claimed() == []
        assert worker.current_job_id is None

    @pytest.mark.asyncio
    async def test_error_escaping_pipeline_still_acks(self, queue, job_repo, mutation_lock,
                                                      queued_entry, upload_layout) -> None:
        worker = DeploymentWorker(queue, job_repo, FailingRunUseCase(), mutation_lock)
        upload = application_zip(upload_layout.upload_path(SITE_ID, "abc123"))
        queue.enqueue(queued_entry(upload, job_id="broken"))

        with pytest.raises(RuntimeError):
            await worker.run_once()

        job = job_repo.find_by_id("broken")
        assert queue.list_claimed() == []
        assert job.status == JobStatus.FAILED
        assert job.message == ABORTED_MESSAGE
        assert not upload.exists()
        assert worker.current_job_id is None
        assert not mutation_lock.locked()


class TestRecoverInterrupted:
    """Startup recovery of claimed entries."""

    def test_fails_interrupted_jobs(self, worker, queue, job_repo, queued_entry, upload_layout) -> None:
        upload = application_zip(upload_layout.upload_path(SITE_ID, "abc123"))
        queue.enqueue(queued_entry(upload, job_id="interrupted"))
        queue.enqueue(queued_entry(upload, job_id="waiting"))
        queue.claim_next()

        assert worker.recover_interrupted() == 1

        job = job_repo.find_by_id("interrupted")
        assert job.status == JobStatus.FAILED
        assert job.message == INTERRUPTED_MESSAGE
        assert INTERRUPTED_MESSAGE in job.log
        assert not upload.exists()
        assert queue.list_claimed() == []
        assert queue.claim_next().job_id == "waiting"

    def test_nothing_to_recover(self, worker) -> None:
        assert worker.recover_interrupted() == 0


class TestLifecycle:
    """Background task start and stop."""

    @pytest.mark.asyncio
    async def test_processes_in_background(self, worker, queue, queued_entry, recorder, tmp_path) -> None:
        queue.enqueue(queued_entry(tmp_path / "a.zip", job_id="background"))

        await worker.start()
        for _ in range(100):
            if recorder.entries:
                break
            await asyncio.sleep(0.01)
        await worker.stop()

        assert recorder.entries == ["background"]
        assert worker.is_running is False

    @pytest.mark.asyncio
    async def test_start_twice_is_ignored(self, worker) -> None:
        await worker.start()
        await worker.start()
        assert worker.is_running
        await worker.stop()
