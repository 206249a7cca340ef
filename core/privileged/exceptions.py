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

"""Domain exceptions for the privileged execution boundary."""

from typing import Optional


class PrivilegedBoundaryError(Exception):
    """Base exception for all privileged boundary errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize privileged boundary error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class OperationNotAllowedError(PrivilegedBoundaryError):
    """Requested operation is not on the allowlist."""

    def __init__(self, operation: str, correlation_id: Optional[str] = None) -> None:
        """Initialize operation not allowed error.

        Args:
            operation: The rejected operation name.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Privileged operation not allowed: {operation!r}",
            correlation_id=correlation_id,
        )
        self.operation = operation


class ParameterRejectedError(PrivilegedBoundaryError):
    """An argument failed its format check. The value is never echoed."""

    def __init__(
        self,
        operation: str,
        parameter: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize parameter rejected error.

        Args:
            operation: The operation being invoked.
            parameter: Name of the rejected parameter.
            reason: Why the value was rejected.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Parameter '{parameter}' rejected for {operation}: {reason}",
            correlation_id=correlation_id,
        )
        self.operation = operation
        self.parameter = parameter
        self.reason = reason


class PrivilegedOperationError(PrivilegedBoundaryError):
    """The helper ran the operation and reported failure."""

    def __init__(
        self,
        operation: str,
        exit_code: int,
        output: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize privileged operation error.

        Args:
            operation: The operation that failed.
            exit_code: Helper exit code.
            output: Combined helper output.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Privileged operation {operation} failed with exit code {exit_code}",
            correlation_id=correlation_id,
        )
        self.operation = operation
        self.exit_code = exit_code
        self.output = output
