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

"""Domain exceptions for archive validation and extraction."""

from typing import Optional


class ArchiveDomainError(Exception):
    """Base exception for all archive domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize archive domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ArchiveValidationError(ArchiveDomainError):
    """Uploaded file failed pre-extraction validation (size, type, signature)."""


class UnsafeArchiveEntryError(ArchiveDomainError):
    """Archive entry path would escape the extraction root."""

    def __init__(
        self,
        entry_name: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize unsafe entry error.

        Args:
            entry_name: Raw entry name from the archive directory.
            reason: Why the entry was rejected.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Unsafe archive entry '{entry_name}': {reason}",
            correlation_id=correlation_id,
        )
        self.entry_name = entry_name
        self.reason = reason


class ArchiveLimitExceededError(ArchiveDomainError):
    """Archive exceeded the entry count or uncompressed size ceiling."""

    def __init__(
        self,
        limit_name: str,
        limit: int,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize limit exceeded error.

        Args:
            limit_name: Which ceiling was crossed (entries or bytes).
            limit: The configured ceiling.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Archive exceeds maximum {limit_name} ({limit})",
            correlation_id=correlation_id,
        )
        self.limit_name = limit_name
        self.limit = limit
