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

"""Value objects for the archive domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import ClassVar, Optional


@dataclass(frozen=True)
class ArchiveLimits:
    """Ceilings applied while extracting an archive.

    Attributes:
        max_entries: Maximum number of entries (files and directories).
        max_uncompressed_bytes: Maximum cumulative bytes written to disk.

    Raises:
        ValueError: If any ceiling is not positive.
    """

    max_entries: int = 10000
    max_uncompressed_bytes: int = 5 * 1024 * 1024 * 1024

    def __post_init__(self) -> None:
        """Validate ceilings."""
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if self.max_uncompressed_bytes <= 0:
            raise ValueError("max_uncompressed_bytes must be positive")


@dataclass(frozen=True)
class ArchiveValidationResult:
    """Outcome of validating an uploaded archive.

    Attributes:
        valid: Whether the upload may be queued.
        reason: Human-readable rejection reason when invalid.
    """

    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ArchiveValidationResult":
        """Return a passing result."""
        return cls(valid=True)

    @classmethod
    def rejected(cls, reason: str) -> "ArchiveValidationResult":
        """Return a failing result with a reason."""
        return cls(valid=False, reason=reason)


@dataclass(frozen=True)
class EntryPath:
    """Validated relative path of an archive member.

    Attributes:
        value: Normalized POSIX relative path.

    Raises:
        ValueError: If the entry is absolute, contains traversal segments,
            URL schemes or null bytes.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 4096
    DRIVE_PATTERN: ClassVar[str] = r"^[A-Za-z]:"

    def __post_init__(self) -> None:
        """Validate entry path safety."""
        raw = self.value
        if not raw or not raw.strip():
            raise ValueError("empty entry name")
        if len(raw) > self.MAX_LENGTH:
            raise ValueError(f"entry name exceeds {self.MAX_LENGTH} characters")
        if "\x00" in raw:
            raise ValueError("entry name contains null byte")
        if "://" in raw:
            raise ValueError("entry name contains a URL scheme")

        normalized = raw.replace("\\", "/")
        if normalized.startswith("/") or re.match(self.DRIVE_PATTERN, normalized):
            raise ValueError("absolute path")
        if ".." in PurePosixPath(normalized).parts:
            raise ValueError("parent directory segment")

    @property
    def parts(self) -> tuple:
        """Path components with empty and current-directory segments removed."""
        normalized = self.value.replace("\\", "/")
        return tuple(p for p in PurePosixPath(normalized).parts if p not in ("", "."))

    @property
    def is_directory(self) -> bool:
        """Whether the entry denotes a directory."""
        return self.value.endswith("/") or self.value.endswith("\\")

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class ExtractionReport:
    """Summary of a completed extraction.

    Attributes:
        destination: Directory the archive was extracted into.
        entry_count: Number of archive members processed.
        bytes_written: Total uncompressed bytes written.
    """

    destination: str
    entry_count: int
    bytes_written: int


@dataclass(frozen=True)
class UploadLayout:
    """On-disk layout of uploaded and extracted content.

    Each site owns ``<upload_root>/<site_id>/``. Uploads are stored there as
    ``upload-<token>.zip`` and extracted into its ``extracted`` directory,
    which is kept as the build context for rebuilds.
    """

    upload_root: str

    EXTRACTED_DIR_NAME: ClassVar[str] = "extracted"

    def site_dir(self, site_id: str) -> Path:
        """Upload directory of a site."""
        return Path(self.upload_root) / site_id

    def extraction_dir(self, site_id: str) -> Path:
        """Directory a site's archive is extracted into."""
        return self.site_dir(site_id) / self.EXTRACTED_DIR_NAME

    def upload_path(self, site_id: str, token: str) -> Path:
        """Location for a newly received upload."""
        return self.site_dir(site_id) / f"upload-{token}.zip"
