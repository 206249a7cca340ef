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

"""Unit tests for CertificateSweeper."""

import asyncio

import pytest

from core.edge.services import EdgeConfigurationWriter
from core.sites.value_objects import ContainerStatus
from infra.repositories.in_memory import InMemorySiteRepository
from orchestrator.deployments.certificate_sweeper import CertificateSweeper
from tests.mocks.site_builders import OTHER_SITE_ID, SITE_ID, make_deployed_site

THIRD_SITE_ID = "bbbbbbbb-0000-4000-8000-000000000000"


@pytest.fixture
def sweeper_parts(recording_executor):
    repo = InMemorySiteRepository()
    repo.save(make_deployed_site())
    repo.save(make_deployed_site(
        OTHER_SITE_ID, domain="stopped.sites.example.com", slug="stopped",
        container_status=ContainerStatus.STOPPED,
    ))
    repo.save(make_deployed_site(
        THIRD_SITE_ID, domain="secure.sites.example.com", slug="secure", tls_enabled=True,
    ))
    lock = asyncio.Lock()
    writer = EdgeConfigurationWriter(recording_executor, "ops@example.com")
    return repo, lock, CertificateSweeper(repo, writer, lock, interval_seconds=60)


class TestSweepOnce:
    """One retry pass."""

    @pytest.mark.asyncio
    async def test_only_running_sites_without_tls(self, sweeper_parts, recording_executor) -> None:
        repo, _, sweeper = sweeper_parts

        assert await sweeper.sweep_once() == 1

        assert recording_executor.calls == [
            ("request-certificate", ("shop.sites.example.com", "ops@example.com")),
        ]
        assert repo.find_by_id(SITE_ID).tls_enabled is True
        assert repo.find_by_id(OTHER_SITE_ID).tls_enabled is False

    @pytest.mark.asyncio
    async def test_failed_request_keeps_http(self, sweeper_parts, recording_executor) -> None:
        repo, _, sweeper = sweeper_parts
        recording_executor.failures["request-certificate"] = 1

        assert await sweeper.sweep_once() == 0
        assert repo.find_by_id(SITE_ID).tls_enabled is False

    @pytest.mark.asyncio
    async def test_skipped_while_deployment_runs(self, sweeper_parts, recording_executor) -> None:
        _, lock, sweeper = sweeper_parts

        async with lock:
            assert await sweeper.sweep_once() == 0

        assert recording_executor.calls == []


class TestEnabled:
    """Interval configuration."""

    @pytest.mark.asyncio
    async def test_zero_interval_disables(self, recording_executor) -> None:
        sweeper = CertificateSweeper(
            InMemorySiteRepository(),
            EdgeConfigurationWriter(recording_executor, "ops@example.com"),
            asyncio.Lock(),
            interval_seconds=0,
        )

        await sweeper.start()

        assert sweeper.enabled is False
        await sweeper.stop()

    @pytest.mark.asyncio
    async def test_start_and_stop(self, sweeper_parts) -> None:
        _, _, sweeper = sweeper_parts

        await sweeper.start()
        await sweeper.stop()

        assert sweeper.enabled is True
