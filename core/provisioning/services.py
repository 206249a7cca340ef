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

"""Isolation provisioning: port allocation, image build and container lifecycle."""

import json
import logging
import secrets
from typing import Callable, Iterable, Optional

from core.provisioning.exceptions import (
    ContainerCommandError,
    PortExhaustedError,
    ProvisioningError,
    TeardownIncompleteError,
)
from core.provisioning.ports import ContainerRuntime
from core.provisioning.value_objects import ProvisionedWorkload, ResourceNames, WorkloadSpec
from core.runtime.value_objects import RuntimeDetection
from core.sites.value_objects import ContainerStatus

logger = logging.getLogger(__name__)

Progress = Optional[Callable[[str], None]]

BIND_CONFLICT_MARKERS = ("port is already allocated", "address already in use")

SIDECAR_NETWORK = "bridge"


def is_bind_conflict(output: str) -> bool:
    """Whether runtime output reports a host port bind conflict."""
    lowered = (output or "").lower()
    return any(marker in lowered for marker in BIND_CONFLICT_MARKERS)


def map_container_state(state: Optional[str]) -> Optional[ContainerStatus]:
    """Map a runtime state string to the cached site status."""
    if state is None:
        return None
    if state == "running":
        return ContainerStatus.RUNNING
    if state in ("exited", "created"):
        return ContainerStatus.STOPPED
    return ContainerStatus.ERROR


def _report(progress: Progress, line: str) -> None:
    logger.info(line)
    if progress is not None:
        progress(line)


class PortAllocator:
    """Chooses a free host port for one provisioning run.

    Each allocation takes a fresh snapshot of the ports published by the
    container runtime; nothing is remembered between runs.
    """

    def __init__(self, runtime: ContainerRuntime, base_port: int, max_port: int) -> None:
        self.runtime = runtime
        self.base_port = base_port
        self.max_port = max_port

    async def allocate(self, exclude: Iterable[int] = ()) -> int:
        """Return the lowest free port >= base_port not in the snapshot or exclude.

        Raises:
            PortExhaustedError: If every port up to max_port is taken.
        """
        taken = set(await self.runtime.published_host_ports()) | set(exclude)
        for port in range(self.base_port, self.max_port + 1):
            if port not in taken:
                return port
        raise PortExhaustedError(self.base_port, self.max_port)


class DockerfileRenderer:
    """Renders the build recipe for an extracted application."""

    def __init__(self, entry_file: str, app_port: int = 5001) -> None:
        self.entry_file = entry_file
        self.app_port = app_port

    def render(self, detection: RuntimeDetection, subdir_offset: Optional[str] = None) -> str:
        """Return Dockerfile text for the detected runtime."""
        source = f"{subdir_offset}/." if subdir_offset else "."
        lines = [
            f"FROM {detection.tag.base_image}",
            "WORKDIR /app",
            f"COPY {json.dumps([source, '.'])}",
            f"EXPOSE {self.app_port}",
            f"ENV ASPNETCORE_URLS=http://+:{self.app_port}",
            f"ENTRYPOINT {json.dumps(['dotnet', self.entry_file])}",
        ]
        return "\n".join(lines) + "\n"


class IsolationProvisioner:
    """Builds and runs a site's app container behind its access sidecar.

    The app container sits alone on an internal per-site network with no
    published port. The sidecar is started on the default bridge with the
    host port published, then attached to the site network so it can reach
    the app by container name.
    """

    # pylint: disable=too-many-arguments,too-many-positional-arguments
    def __init__(
        self,
        runtime: ContainerRuntime,
        renderer: DockerfileRenderer,
        resource_prefix: str,
        base_port: int,
        max_port: int,
        port_retry_attempts: int = 5,
        proxy_image: str = "sitedock/auth-proxy:latest",
        proxy_port: int = 3000,
        internal_network: bool = True,
    ) -> None:
        self.runtime = runtime
        self.renderer = renderer
        self.resource_prefix = resource_prefix
        self.base_port = base_port
        self.max_port = max_port
        self.port_retry_attempts = port_retry_attempts
        self.proxy_image = proxy_image
        self.proxy_port = proxy_port
        self.internal_network = internal_network

    def names_for(self, site_id: str) -> ResourceNames:
        """Resource names for a site."""
        return ResourceNames.for_site(site_id, self.resource_prefix)

    async def cleanup(self, site_id: str, progress: Progress = None) -> None:
        """Remove the sidecar, app container and network ahead of a rebuild."""
        names = self.names_for(site_id)
        if await self.runtime.remove_container(names.proxy_container):
            _report(progress, f"Removed previous sidecar {names.proxy_container}")
        if await self.runtime.remove_container(names.container):
            _report(progress, f"Removed previous container {names.container}")
        if await self.runtime.remove_network(names.network):
            _report(progress, f"Removed previous network {names.network}")
        _report(progress, "Cleanup before build complete")

    async def build_image(
        self,
        site_id: str,
        context: str,
        detection: RuntimeDetection,
        subdir_offset: Optional[str] = None,
        progress: Progress = None,
    ) -> str:
        """Build the site image from the extracted content. Returns the image name."""
        names = self.names_for(site_id)
        dockerfile = self.renderer.render(detection, subdir_offset)
        _report(
            progress,
            f"Building image {names.image} from {detection.tag.base_image}",
        )
        await self.runtime.build_image(names.image, context, dockerfile)
        _report(progress, f"Image {names.image} built")
        return names.image

    async def start_workload(self, spec: WorkloadSpec, progress: Progress = None) -> ProvisionedWorkload:
        """Create the network, app container and sidecar.

        Raises:
            PortExhaustedError: If no host port is free.
            ProvisioningError: If the sidecar could not bind a port after retries.
            ContainerCommandError: If any runtime command fails.
        """
        names = self.names_for(spec.site_id)

        await self.runtime.create_network(names.network, internal=self.internal_network)
        _report(progress, f"Network {names.network} created")

        await self.runtime.run_container(names.container, names.image, network=names.network)
        _report(progress, f"Container {names.container} started")

        env = self._sidecar_env(spec, names)
        allocator = PortAllocator(self.runtime, self.base_port, self.max_port)
        excluded = set()

        for attempt in range(1, self.port_retry_attempts + 1):
            port = await allocator.allocate(excluded)
            try:
                await self.runtime.run_container(
                    names.proxy_container,
                    self.proxy_image,
                    network=SIDECAR_NETWORK,
                    env=env,
                    publish=(port, self.proxy_port),
                )
            except ContainerCommandError as exc:
                if not is_bind_conflict(exc.output):
                    raise
                _report(
                    progress,
                    f"Port {port} already in use, retrying "
                    f"({attempt}/{self.port_retry_attempts})",
                )
                await self.runtime.remove_container(names.proxy_container)
                excluded.add(port)
                continue

            await self.runtime.connect_network(names.network, names.proxy_container)
            _report(progress, f"Sidecar {names.proxy_container} started on port {port}")
            return ProvisionedWorkload(names=names, host_port=port)

        raise ProvisioningError(
            f"Could not bind a host port after {self.port_retry_attempts} attempts"
        )

    async def start(self, site_id: str) -> None:
        """Start the app container, then the sidecar."""
        names = self.names_for(site_id)
        await self.runtime.start_container(names.container)
        await self.runtime.start_container(names.proxy_container)

    async def stop(self, site_id: str) -> None:
        """Stop the sidecar, then the app container."""
        names = self.names_for(site_id)
        await self.runtime.stop_container(names.proxy_container)
        await self.runtime.stop_container(names.container)

    async def remove_resources(self, site_id: str, progress: Progress = None) -> None:
        """Remove sidecar, app container, network and image.

        Every step is attempted; missing resources are not an error.

        Raises:
            TeardownIncompleteError: If any removal failed.
        """
        names = self.names_for(site_id)
        steps = (
            ("sidecar", self.runtime.remove_container, names.proxy_container),
            ("container", self.runtime.remove_container, names.container),
            ("network", self.runtime.remove_network, names.network),
            ("image", self.runtime.remove_image, names.image),
        )
        failures = []
        for label, remove, name in steps:
            try:
                removed = await remove(name)
            except ContainerCommandError as exc:
                logger.warning("Failed to remove %s %s: %s", label, name, exc.output)
                failures.append(f"{label} {name}: {exc.message}")
                continue
            if removed:
                _report(progress, f"Removed {label} {name}")
            else:
                logger.info("No %s %s to remove", label, name)

        if failures:
            raise TeardownIncompleteError(failures)

    async def container_status(self, name: str) -> Optional[ContainerStatus]:
        """Live status of a container, or None if it does not exist."""
        return map_container_state(await self.runtime.container_state(name))

    def _sidecar_env(self, spec: WorkloadSpec, names: ResourceNames) -> dict:
        env = {
            "PORT": str(self.proxy_port),
            "BACKEND_URL": f"http://{names.container}:{self.renderer.app_port}",
            "SITE_NAME": spec.site_name,
            "SESSION_SECRET": secrets.token_hex(32),
        }
        if spec.access_enabled and spec.access_secret:
            env["AUTH_PASSWORD"] = spec.access_secret
        return env
