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

"""Unit tests for teardown, delete, start/stop and status reconciliation."""

# pylint: disable=redefined-outer-name

import asyncio

import pytest

from core.edge.services import EdgeConfigurationWriter
from core.provisioning.exceptions import ContainerCommandError, TeardownIncompleteError
from core.provisioning.services import DockerfileRenderer, IsolationProvisioner
from core.provisioning.value_objects import WorkloadSpec
from core.sites.exceptions import SiteNotFoundError, SiteStateError
from core.sites.value_objects import ContainerStatus
from infra.repositories.in_memory import InMemorySiteRepository
from orchestrator.sites.commands import SiteCommand
from orchestrator.sites.use_cases import (
    DeleteSiteUseCase,
    ReconcileContainerStatusUseCase,
    StartSiteUseCase,
    StopSiteUseCase,
    TeardownSiteUseCase,
)
from tests.mocks.site_builders import OTHER_SITE_ID, SITE_ID, make_deployed_site, make_site

PREFIX = "sitedock-site"
NEW_SITE_ID = "bbbbbbbb-0000-4000-8000-000000000000"


@pytest.fixture
def site_repo():
    return InMemorySiteRepository()


@pytest.fixture
def provisioner(fake_runtime):
    return IsolationProvisioner(
        runtime=fake_runtime,
        renderer=DockerfileRenderer("WebModel.Server.dll"),
        resource_prefix=PREFIX,
        base_port=8100,
        max_port=8199,
    )


@pytest.fixture
def teardown(site_repo, provisioner, recording_executor):
    return TeardownSiteUseCase(
        site_repo=site_repo,
        provisioner=provisioner,
        edge_writer=EdgeConfigurationWriter(recording_executor, "ops@example.com"),
        executor=recording_executor,
        mutation_lock=asyncio.Lock(),
    )


async def _deploy(site_repo, provisioner, site_id=SITE_ID, **overrides):
    site = make_deployed_site(site_id, **overrides)
    site_repo.save(site)
    await provisioner.start_workload(
        WorkloadSpec(site_id=site_id, site_name=site.name, access_enabled=True, access_secret="x" * 8)
    )
    return site


class TestTeardown:
    """TeardownSiteUseCase"""

    @pytest.mark.asyncio
    async def test_removes_all_resources(self, teardown, site_repo, provisioner, fake_runtime,
                                         recording_executor) -> None:
        await _deploy(site_repo, provisioner)

        await teardown.execute(SiteCommand(SITE_ID))

        assert fake_runtime.containers == {}
        assert fake_runtime.networks == {}
        assert recording_executor.operations() == [
            "remove-proxy-rule",
            "reload-proxy",
            "delete-certificate",
            "remove-uploads",
        ]

    @pytest.mark.asyncio
    async def test_twice_is_safe(self, teardown, site_repo, provisioner, fake_runtime) -> None:
        await _deploy(site_repo, provisioner)

        await teardown.execute(SiteCommand(SITE_ID))
        lines = await teardown.execute(SiteCommand(SITE_ID))

        assert fake_runtime.containers == {}
        assert not any(line.startswith("Removed") for line in lines)

    @pytest.mark.asyncio
    async def test_never_deployed_site(self, teardown, site_repo, fake_runtime) -> None:
        site_repo.save(make_site())

        await teardown.execute(SiteCommand(SITE_ID))

        assert ("remove_container", f"{PREFIX}-{SITE_ID}") in fake_runtime.calls

    @pytest.mark.asyncio
    async def test_failures_mark_error_and_continue(self, teardown, site_repo, provisioner,
                                                     fake_runtime, recording_executor) -> None:
        await _deploy(site_repo, provisioner)
        fake_runtime.failing_removals = {f"{PREFIX}-{SITE_ID}-net"}
        recording_executor.failures["remove-uploads"] = 1

        with pytest.raises(TeardownIncompleteError) as exc_info:
            await teardown.execute(SiteCommand(SITE_ID))

        assert len(exc_info.value.failures) == 2
        assert "remove-proxy-rule" in recording_executor.operations()
        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.ERROR

    @pytest.mark.asyncio
    async def test_reload_failure_still_deletes_certificate_and_uploads(
        self, teardown, site_repo, provisioner, recording_executor
    ) -> None:
        await _deploy(site_repo, provisioner)
        recording_executor.failures["reload-proxy"] = 1

        with pytest.raises(TeardownIncompleteError) as exc_info:
            await teardown.execute(SiteCommand(SITE_ID))

        assert recording_executor.operations() == [
            "remove-proxy-rule",
            "reload-proxy",
            "delete-certificate",
            "remove-uploads",
        ]
        assert len(exc_info.value.failures) == 1
        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.ERROR

    @pytest.mark.asyncio
    async def test_unknown_site(self, teardown) -> None:
        with pytest.raises(SiteNotFoundError):
            await teardown.execute(SiteCommand(SITE_ID))


class TestDeleteSite:
    """DeleteSiteUseCase"""

    @pytest.mark.asyncio
    async def test_deletes_record_after_teardown(self, teardown, site_repo, provisioner) -> None:
        await _deploy(site_repo, provisioner)

        await DeleteSiteUseCase(site_repo, teardown).execute(SiteCommand(SITE_ID))

        assert site_repo.find_by_id(SITE_ID) is None

    @pytest.mark.asyncio
    async def test_keeps_record_when_teardown_incomplete(self, teardown, site_repo, provisioner,
                                                         recording_executor) -> None:
        await _deploy(site_repo, provisioner)
        recording_executor.failures["remove-proxy-rule"] = 1

        with pytest.raises(TeardownIncompleteError):
            await DeleteSiteUseCase(site_repo, teardown).execute(SiteCommand(SITE_ID))

        assert site_repo.find_by_id(SITE_ID) is not None


class TestStartStop:
    """StartSiteUseCase and StopSiteUseCase"""

    @pytest.mark.asyncio
    async def test_stop_then_start(self, site_repo, provisioner, fake_runtime) -> None:
        await _deploy(site_repo, provisioner)
        lock = asyncio.Lock()

        stopped = await StopSiteUseCase(site_repo, provisioner, lock).execute(SiteCommand(SITE_ID))
        assert stopped.container_status == "stopped"
        assert fake_runtime.containers[f"{PREFIX}-{SITE_ID}"]["state"] == "exited"

        started = await StartSiteUseCase(site_repo, provisioner, lock).execute(SiteCommand(SITE_ID))
        assert started.container_status == "running"

    @pytest.mark.asyncio
    async def test_never_deployed(self, site_repo, provisioner) -> None:
        site_repo.save(make_site())

        with pytest.raises(SiteStateError):
            await StartSiteUseCase(site_repo, provisioner, asyncio.Lock()).execute(SiteCommand(SITE_ID))

    @pytest.mark.asyncio
    async def test_building(self, site_repo, provisioner) -> None:
        site_repo.save(make_deployed_site(container_status=ContainerStatus.BUILDING))

        with pytest.raises(SiteStateError):
            await StopSiteUseCase(site_repo, provisioner, asyncio.Lock()).execute(SiteCommand(SITE_ID))

    @pytest.mark.asyncio
    async def test_runtime_failure_marks_error(self, site_repo, provisioner) -> None:
        site_repo.save(make_deployed_site())

        with pytest.raises(ContainerCommandError):
            await StartSiteUseCase(site_repo, provisioner, asyncio.Lock()).execute(SiteCommand(SITE_ID))

        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.ERROR


class TestReconcile:
    """ReconcileContainerStatusUseCase"""

    @pytest.mark.asyncio
    async def test_reconciles_against_live_state(self, site_repo, provisioner, fake_runtime) -> None:
        await _deploy(site_repo, provisioner, container_status=ContainerStatus.STOPPED)
        site_repo.save(make_deployed_site(OTHER_SITE_ID, domain="gone.sites.example.com", slug="gone"))
        site_repo.save(make_site(NEW_SITE_ID,
                                 domain="new.sites.example.com", slug="new"))

        changed = await ReconcileContainerStatusUseCase(site_repo, fake_runtime, PREFIX).execute()

        assert changed == 2
        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.RUNNING
        assert site_repo.find_by_id(OTHER_SITE_ID).container_status == ContainerStatus.ERROR
        assert site_repo.find_by_id(NEW_SITE_ID).container_status is None

    @pytest.mark.asyncio
    async def test_building_becomes_error(self, site_repo, fake_runtime) -> None:
        site_repo.save(make_site(container_status=ContainerStatus.BUILDING))

        await ReconcileContainerStatusUseCase(site_repo, fake_runtime, PREFIX).execute()

        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.ERROR

    @pytest.mark.asyncio
    async def test_missing_sidecar_is_error(self, site_repo, provisioner, fake_runtime) -> None:
        await _deploy(site_repo, provisioner)
        del fake_runtime.containers[f"{PREFIX}-{SITE_ID}-proxy"]

        await ReconcileContainerStatusUseCase(site_repo, fake_runtime, PREFIX).execute()

        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.ERROR

    @pytest.mark.asyncio
    async def test_stopped_container(self, site_repo, provisioner, fake_runtime) -> None:
        await _deploy(site_repo, provisioner)
        await provisioner.stop(SITE_ID)

        await ReconcileContainerStatusUseCase(site_repo, fake_runtime, PREFIX).execute()

        assert site_repo.find_by_id(SITE_ID).container_status == ContainerStatus.STOPPED
