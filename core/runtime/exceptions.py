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

"""Domain exceptions for runtime detection."""

from typing import Optional


class RuntimeDomainError(Exception):
    """Base exception for all runtime detection errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize runtime domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class EntryArtifactNotFoundError(RuntimeDomainError):
    """The entry artifact was not found in the extracted content."""

    def __init__(
        self,
        entry_file: str,
        search_depth: int,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize entry artifact not found error.

        Args:
            entry_file: Name of the artifact that was searched for.
            search_depth: How many directory levels below the root were searched.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Entry artifact {entry_file} not found in archive root "
            f"or within {search_depth} subdirectory levels",
            correlation_id=correlation_id,
        )
        self.entry_file = entry_file
        self.search_depth = search_depth
