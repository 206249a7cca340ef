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

"""Domain exceptions for deployment jobs."""

from typing import Optional


class DeploymentDomainError(Exception):
    """Base exception for all deployment domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize deployment domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class JobNotFoundError(DeploymentDomainError):
    """Deployment job does not exist."""

    def __init__(self, job_id: str, correlation_id: Optional[str] = None) -> None:
        """Initialize job not found error.

        Args:
            job_id: The job identifier that was not found.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(f"Deployment not found: {job_id}", correlation_id=correlation_id)
        self.job_id = job_id


class InvalidStateTransitionError(DeploymentDomainError):
    """Job state transition is not allowed."""

    def __init__(
        self,
        job_id: str,
        from_state: str,
        to_state: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            job_id: The job whose transition was rejected.
            from_state: Current state.
            to_state: Requested state.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid state transition for job {job_id}: {from_state} -> {to_state}",
            correlation_id=correlation_id,
        )
        self.job_id = job_id
        self.from_state = from_state
        self.to_state = to_state


class InvalidDeploymentInputError(DeploymentDomainError):
    """Deployment request parameters failed validation."""
