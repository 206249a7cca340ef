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

"""Archive validation and bounded extraction services."""

import logging
import os
import shutil
import stat
import tempfile
import zipfile
from pathlib import Path
from typing import Union

from core.archive.exceptions import (
    ArchiveLimitExceededError,
    ArchiveValidationError,
    UnsafeArchiveEntryError,
)
from core.archive.value_objects import (
    ArchiveLimits,
    ArchiveValidationResult,
    EntryPath,
    ExtractionReport,
)

logger = logging.getLogger(__name__)

ZIP_SIGNATURES = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")

_COPY_CHUNK_BYTES = 64 * 1024


class ArchiveValidator:
    """Checks an uploaded file before anything is extracted from it."""

    def validate(self, path: Union[str, Path], max_bytes: int) -> ArchiveValidationResult:
        """Validate size, file type and zip signature.

        Args:
            path: Location of the uploaded file.
            max_bytes: Maximum accepted file size.

        Returns:
            ArchiveValidationResult; never raises for an invalid upload.
        """
        upload = Path(path)
        try:
            info = upload.lstat()
        except FileNotFoundError:
            return ArchiveValidationResult.rejected("Upload not found")
        except OSError as exc:
            logger.error("Could not stat upload: %s", exc)
            return ArchiveValidationResult.rejected("Upload could not be read")

        if not stat.S_ISREG(info.st_mode):
            return ArchiveValidationResult.rejected("Upload is not a regular file")

        if info.st_size > max_bytes:
            return ArchiveValidationResult.rejected(
                f"File size {info.st_size} exceeds maximum {max_bytes} bytes"
            )

        try:
            with open(upload, "rb") as handle:
                header = handle.read(4)
        except OSError as exc:
            logger.error("Could not read upload header: %s", exc)
            return ArchiveValidationResult.rejected("Upload could not be read")

        if header not in ZIP_SIGNATURES:
            return ArchiveValidationResult.rejected("File is not a valid ZIP archive")

        return ArchiveValidationResult.ok()

    def require_valid(self, path: Union[str, Path], max_bytes: int) -> None:
        """Validate and raise ArchiveValidationError with the reason on failure."""
        result = self.validate(path, max_bytes)
        if not result.valid:
            raise ArchiveValidationError(result.reason or "Archive validation failed")


class SafeArchiveExtractor:
    """Extracts a zip archive while enforcing path safety and size ceilings.

    Extraction happens in a temporary sibling directory that is renamed onto
    the destination only after every entry has passed. Any violation removes
    the temporary directory, so a rejected archive leaves nothing behind.
    """

    def __init__(self, limits: ArchiveLimits) -> None:
        self._limits = limits

    def extract(self, archive_path: Union[str, Path], destination: Union[str, Path]) -> ExtractionReport:
        """Extract archive_path into destination, replacing any previous content.

        Raises:
            ArchiveValidationError: If the file is not a readable zip archive.
            UnsafeArchiveEntryError: If an entry escapes the extraction root.
            ArchiveLimitExceededError: If entry count or size ceilings are crossed.
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{destination.name}-", dir=destination.parent))

        try:
            entry_count, bytes_written = self._extract_into(Path(archive_path), staging)
            if destination.exists():
                shutil.rmtree(destination)
            os.replace(staging, destination)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        logger.info(
            "Extracted %d entries (%d bytes) into %s",
            entry_count,
            bytes_written,
            destination,
        )
        return ExtractionReport(
            destination=str(destination),
            entry_count=entry_count,
            bytes_written=bytes_written,
        )

    def _extract_into(self, archive_path: Path, root: Path) -> tuple:
        root_resolved = root.resolve()
        bytes_written = 0
        entry_count = 0

        try:
            archive = zipfile.ZipFile(archive_path)
        except (zipfile.BadZipFile, OSError) as exc:
            raise ArchiveValidationError("File is not a valid ZIP archive") from exc

        with archive:
            for info in archive.infolist():
                entry_count += 1
                if entry_count > self._limits.max_entries:
                    raise ArchiveLimitExceededError("entries", self._limits.max_entries)

                target = self._resolve_target(info, root_resolved)
                if target is None:
                    continue

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                bytes_written = self._copy_member(archive, info, target, bytes_written)

        return entry_count, bytes_written

    def _resolve_target(self, info: zipfile.ZipInfo, root: Path):
        try:
            entry = EntryPath(info.filename)
        except ValueError as exc:
            raise UnsafeArchiveEntryError(info.filename, str(exc)) from exc

        mode = info.external_attr >> 16
        if stat.S_ISLNK(mode):
            raise UnsafeArchiveEntryError(info.filename, "symbolic link")

        if not entry.parts:
            return None

        target = root.joinpath(*entry.parts).resolve()
        if target != root and root not in target.parents:
            raise UnsafeArchiveEntryError(info.filename, "resolves outside extraction root")
        return target

    def _copy_member(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path, written: int) -> int:
        # Count bytes actually decompressed; header sizes can lie.
        with archive.open(info) as source, open(target, "wb") as sink:
            while True:
                chunk = source.read(_COPY_CHUNK_BYTES)
                if not chunk:
                    break
                written += len(chunk)
                if written > self._limits.max_uncompressed_bytes:
                    raise ArchiveLimitExceededError(
                        "uncompressed bytes", self._limits.max_uncompressed_bytes
                    )
                sink.write(chunk)
        return written
