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

"""Port to the container runtime."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Set, Tuple


class ContainerRuntime(ABC):
    """Operations the provisioner needs from the container runtime.

    Implementations raise ContainerCommandError when a command fails.
    Removal methods return False instead of raising when the resource
    does not exist.
    """

    @abstractmethod
    async def published_host_ports(self) -> Set[int]:
        """Return host ports published by any container, running or not."""
        ...

    @abstractmethod
    async def build_image(self, image: str, context: str, dockerfile: str) -> str:
        """Build an image from an in-memory Dockerfile. Returns build output."""
        ...

    @abstractmethod
    async def create_network(self, name: str, internal: bool) -> None:
        """Create a network."""
        ...

    # pylint: disable=too-many-arguments,too-many-positional-arguments
    @abstractmethod
    async def run_container(
        self,
        name: str,
        image: str,
        network: str,
        env: Optional[Dict[str, str]] = None,
        publish: Optional[Tuple[int, int]] = None,
    ) -> None:
        """Start a detached container with restart policy unless-stopped.

        Args:
            publish: Optional (host_port, container_port) mapping.
        """
        ...

    @abstractmethod
    async def connect_network(self, network: str, container: str) -> None:
        """Attach a container to an additional network."""
        ...

    @abstractmethod
    async def start_container(self, name: str) -> None:
        """Start an existing container."""
        ...

    @abstractmethod
    async def stop_container(self, name: str) -> None:
        """Stop a running container."""
        ...

    @abstractmethod
    async def remove_container(self, name: str) -> bool:
        """Force-remove a container."""
        ...

    @abstractmethod
    async def remove_network(self, name: str) -> bool:
        """Remove a network."""
        ...

    @abstractmethod
    async def remove_image(self, name: str) -> bool:
        """Force-remove an image."""
        ...

    @abstractmethod
    async def container_state(self, name: str) -> Optional[str]:
        """Return the runtime state string (running, exited, ...) or None if absent."""
        ...

    @abstractmethod
    async def list_containers(self, name_prefix: str) -> List[Tuple[str, str]]:
        """Return (name, status text) for every container whose name has the prefix."""
        ...
