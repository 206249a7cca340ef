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

"""Unit tests for the DeploymentJob entity."""

import re

import pytest

from core.deployments.entities import DeploymentJob
from core.deployments.exceptions import InvalidStateTransitionError
from core.deployments.value_objects import JobId, JobStatus
from tests.mocks.site_builders import JOB_ID, SITE_ID

_LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z\] .+$")


@pytest.fixture
def job() -> DeploymentJob:
    return DeploymentJob(job_id=JOB_ID, site_id=SITE_ID)


class TestLog:
    """The job log only grows."""

    def test_each_append_is_a_timestamped_line(self, job) -> None:
        job.append_log("first")
        job.append_log("second\n")

        lines = job.log.splitlines()
        assert len(lines) == 2
        assert all(_LINE.match(line) for line in lines)
        assert lines[1].endswith("] second")

    def test_earlier_content_is_a_prefix(self, job) -> None:
        snapshots = []
        for step in ("queued", "running", "building", "done"):
            job.append_log(step)
            snapshots.append(job.log)

        for earlier, later in zip(snapshots, snapshots[1:]):
            assert later.startswith(earlier)
            assert len(later) > len(earlier)


class TestStateMachine:
    """QUEUED -> RUNNING -> SUCCESS | FAILED."""

    def test_success_path(self, job) -> None:
        job.start()
        job.succeed("Deployed to http://shop.example.com")

        assert job.status == JobStatus.SUCCESS
        assert job.started_at is not None
        assert job.finished_at >= job.started_at
        assert job.message == "Deployed to http://shop.example.com"

    def test_fail_from_queued(self, job) -> None:
        job.fail("cancelled")

        assert job.status == JobStatus.FAILED
        assert job.started_at is None

    def test_cannot_succeed_without_running(self, job) -> None:
        with pytest.raises(InvalidStateTransitionError):
            job.succeed()

    @pytest.mark.parametrize("terminal", ["succeed", "fail"])
    def test_terminal_states_are_final(self, job, terminal) -> None:
        job.start()
        if terminal == "succeed":
            job.succeed()
        else:
            job.fail("boom")

        with pytest.raises(InvalidStateTransitionError):
            job.fail("again")
        with pytest.raises(InvalidStateTransitionError):
            job.start()

    def test_terminal_flags(self) -> None:
        assert JobStatus.SUCCESS.is_terminal
        assert JobStatus.FAILED.is_terminal
        assert not JobStatus.RUNNING.is_terminal


class TestJobId:
    """Identifier validation."""

    def test_rejects_non_uuid(self) -> None:
        with pytest.raises(ValueError):
            JobId("../../etc")

    def test_accepts_uuid(self) -> None:
        assert str(JobId(JOB_ID)) == JOB_ID
