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

"""Domain exceptions for isolation provisioning."""

from typing import Optional, Sequence


class ProvisioningError(Exception):
    """Base exception for all provisioning errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize provisioning error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ContainerCommandError(ProvisioningError):
    """A container runtime command exited non-zero or timed out."""

    def __init__(
        self,
        command: Sequence[str],
        exit_code: int,
        output: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize container command error.

        Args:
            command: The argv that failed (without environment values).
            exit_code: Process exit code, -1 on timeout.
            output: Captured stderr/stdout of the command.
            correlation_id: Optional correlation ID for tracing.
        """
        summary = " ".join(command[:3])
        super().__init__(
            f"Container command '{summary}' failed with exit code {exit_code}",
            correlation_id=correlation_id,
        )
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output


class PortExhaustedError(ProvisioningError):
    """No free host port remains in the configured range."""

    def __init__(
        self,
        base_port: int,
        max_port: int,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize port exhausted error.

        Args:
            base_port: First port of the range.
            max_port: Last port of the range.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"No free host port available in range {base_port}-{max_port}",
            correlation_id=correlation_id,
        )
        self.base_port = base_port
        self.max_port = max_port


class TeardownIncompleteError(ProvisioningError):
    """One or more teardown steps failed; the others were still attempted."""

    def __init__(self, failures: Sequence[str], correlation_id: Optional[str] = None) -> None:
        """Initialize teardown incomplete error.

        Args:
            failures: Description of each failed step.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            "Teardown incomplete: " + "; ".join(failures),
            correlation_id=correlation_id,
        )
        self.failures = list(failures)
