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

"""Unit tests for PortAllocator and DockerfileRenderer."""

import pytest

from core.provisioning.exceptions import PortExhaustedError
from core.provisioning.services import DockerfileRenderer, PortAllocator, map_container_state
from core.runtime.value_objects import Confidence, RuntimeDetection, RuntimeTag
from core.sites.value_objects import ContainerStatus


class TestPortAllocator:
    """Allocation from a live snapshot."""

    @pytest.mark.asyncio
    async def test_lowest_free_port(self, fake_runtime) -> None:
        fake_runtime.foreign_ports = {8100, 8101, 8103}

        port = await PortAllocator(fake_runtime, 8100, 8199).allocate()

        assert port == 8102

    @pytest.mark.asyncio
    async def test_never_returns_port_in_snapshot(self, fake_runtime) -> None:
        fake_runtime.foreign_ports = set(range(8100, 8150, 2))
        allocator = PortAllocator(fake_runtime, 8100, 8199)

        for _ in range(5):
            port = await allocator.allocate()
            assert port not in fake_runtime.foreign_ports
            assert port >= 8100

    @pytest.mark.asyncio
    async def test_excluded_ports_are_skipped(self, fake_runtime) -> None:
        port = await PortAllocator(fake_runtime, 8100, 8199).allocate(exclude={8100, 8101})

        assert port == 8102

    @pytest.mark.asyncio
    async def test_snapshot_is_taken_per_call(self, fake_runtime) -> None:
        allocator = PortAllocator(fake_runtime, 8100, 8199)
        assert await allocator.allocate() == 8100

        fake_runtime.foreign_ports.add(8100)

        assert await allocator.allocate() == 8101

    @pytest.mark.asyncio
    async def test_exhausted(self, fake_runtime) -> None:
        fake_runtime.foreign_ports = {8100, 8101}

        with pytest.raises(PortExhaustedError):
            await PortAllocator(fake_runtime, 8100, 8101).allocate()


class TestDockerfileRenderer:
    """Build recipe rendering."""

    def test_root_application(self) -> None:
        detection = RuntimeDetection(tag=RuntimeTag.ASPNET_6, confidence=Confidence.HIGH, source="x")

        text = DockerfileRenderer("WebModel.Server.dll", app_port=5001).render(detection)

        assert text.splitlines() == [
            "FROM mcr.microsoft.com/dotnet/aspnet:6.0",
            "WORKDIR /app",
            'COPY [".", "."]',
            "EXPOSE 5001",
            "ENV ASPNETCORE_URLS=http://+:5001",
            'ENTRYPOINT ["dotnet", "WebModel.Server.dll"]',
        ]

    def test_subdirectory_offset(self) -> None:
        detection = RuntimeDetection(tag=RuntimeTag.ASPNET_8, confidence=Confidence.LOW, source="default")

        text = DockerfileRenderer("WebModel.Server.dll").render(detection, "publish/app")

        assert 'COPY ["publish/app/.", "."]' in text


@pytest.mark.parametrize(
    "state,expected",
    [
        ("running", ContainerStatus.RUNNING),
        ("exited", ContainerStatus.STOPPED),
        ("created", ContainerStatus.STOPPED),
        ("restarting", ContainerStatus.ERROR),
        (None, None),
    ],
)
def test_map_container_state(state, expected) -> None:
    assert map_container_state(state) == expected
