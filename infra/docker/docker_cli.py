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

"""Container runtime adapter driving the docker CLI."""

import json
import logging
import re
from typing import Dict, List, Optional, Sequence, Set, Tuple

from core.provisioning.exceptions import ContainerCommandError
from core.provisioning.ports import ContainerRuntime
from infra.process import CommandResult, run_command

logger = logging.getLogger(__name__)

_PUBLISHED_PORT = re.compile(r":(\d+)->")

_MISSING_MARKERS = ("no such container", "no such network", "no such image", "no such object", "not found")

RESTART_POLICY = "unless-stopped"
PUBLISH_ADDRESS = "127.0.0.1"


def parse_published_ports(text: str) -> Set[int]:
    """Extract host ports from 'docker ps --format {{.Ports}}' output."""
    return {int(match) for match in _PUBLISHED_PORT.findall(text)}


def _is_missing(result: CommandResult) -> bool:
    lowered = result.output.lower()
    return any(marker in lowered for marker in _MISSING_MARKERS)


class DockerCliAdapter(ContainerRuntime):
    """Runs docker commands as argv arrays; never through a shell.

    Environment values for containers are passed through the docker client's
    own environment and referenced by name (-e NAME) so they never appear in
    the process list.
    """

    def __init__(
        self,
        docker_binary: str = "docker",
        command_timeout_seconds: int = 120,
        build_timeout_seconds: int = 900,
        name_prefix: str = "",
    ) -> None:
        self.docker_binary = docker_binary
        self.command_timeout_seconds = command_timeout_seconds
        self.build_timeout_seconds = build_timeout_seconds
        self.name_prefix = name_prefix

    async def _docker(
        self,
        args: Sequence[str],
        env: Optional[Dict[str, str]] = None,
        stdin_data: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> CommandResult:
        argv = [self.docker_binary, *args]
        logger.debug("Executing command: %s", " ".join(argv))
        return await run_command(
            argv,
            timeout_seconds=timeout or self.command_timeout_seconds,
            env=env,
            stdin_data=stdin_data,
        )

    async def _checked(self, args: Sequence[str], **kwargs) -> CommandResult:
        result = await self._docker(args, **kwargs)
        if not result.ok:
            raise ContainerCommandError([self.docker_binary, *args], result.exit_code, result.output)
        return result

    async def _remove(self, args: Sequence[str]) -> bool:
        result = await self._docker(args)
        if result.ok:
            return True
        if _is_missing(result):
            return False
        raise ContainerCommandError([self.docker_binary, *args], result.exit_code, result.output)

    async def published_host_ports(self) -> Set[int]:
        result = await self._checked(["ps", "-a", "--format", "{{.Ports}}"])
        ports = parse_published_ports(result.stdout)
        # Stopped containers do not report ports in ps output.
        ports |= await self._bound_ports_of_managed_containers()
        return ports

    async def _bound_ports_of_managed_containers(self) -> Set[int]:
        if not self.name_prefix:
            return set()
        listing = await self._checked(
            ["ps", "-aq", "--filter", f"name={self.name_prefix}"]
        )
        ids = listing.stdout.split()
        if not ids:
            return set()
        inspected = await self._docker(
            ["inspect", "--format", "{{json .HostConfig.PortBindings}}", *ids]
        )
        ports = set()
        for line in inspected.stdout.splitlines():
            try:
                bindings = json.loads(line) or {}
            except ValueError:
                continue
            for host_bindings in bindings.values():
                for binding in host_bindings or []:
                    host_port = (binding or {}).get("HostPort")
                    if host_port and host_port.isdigit():
                        ports.add(int(host_port))
        return ports

    async def build_image(self, image: str, context: str, dockerfile: str) -> str:
        result = await self._checked(
            ["build", "-f", "-", "-t", image, context],
            env={"DOCKER_BUILDKIT": "0"},
            stdin_data=dockerfile,
            timeout=self.build_timeout_seconds,
        )
        return result.stdout

    async def create_network(self, name: str, internal: bool) -> None:
        args = ["network", "create"]
        if internal:
            args.append("--internal")
        args.append(name)
        await self._checked(args)

    # pylint: disable=too-many-arguments,too-many-positional-arguments
    async def run_container(
        self,
        name: str,
        image: str,
        network: str,
        env: Optional[Dict[str, str]] = None,
        publish: Optional[Tuple[int, int]] = None,
    ) -> None:
        args = ["run", "-d", "--name", name, "--network", network]
        if publish is not None:
            host_port, container_port = publish
            args.extend(["-p", f"{PUBLISH_ADDRESS}:{host_port}:{container_port}"])
        for key in sorted(env or {}):
            args.extend(["-e", key])
        args.extend(["--restart", RESTART_POLICY, image])
        await self._checked(args, env=env)

    async def connect_network(self, network: str, container: str) -> None:
        await self._checked(["network", "connect", network, container])

    async def start_container(self, name: str) -> None:
        await self._checked(["start", name])

    async def stop_container(self, name: str) -> None:
        await self._checked(["stop", name])

    async def remove_container(self, name: str) -> bool:
        return await self._remove(["rm", "-f", name])

    async def remove_network(self, name: str) -> bool:
        return await self._remove(["network", "rm", name])

    async def remove_image(self, name: str) -> bool:
        return await self._remove(["rmi", "-f", name])

    async def container_state(self, name: str) -> Optional[str]:
        result = await self._docker(["inspect", "-f", "{{.State.Status}}", name])
        if result.ok:
            return result.stdout.strip() or None
        if _is_missing(result):
            return None
        raise ContainerCommandError(["inspect", name], result.exit_code, result.output)

    async def list_containers(self, name_prefix: str) -> List[Tuple[str, str]]:
        result = await self._checked(
            ["ps", "-a", "--filter", f"name={name_prefix}", "--format", "{{.Names}}\t{{.Status}}"]
        )
        containers = []
        for line in result.stdout.splitlines():
            name, _, status = line.partition("\t")
            name = name.strip()
            if name.startswith(name_prefix):
                containers.append((name, status.strip()))
        return containers
