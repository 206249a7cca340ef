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

"""Unit tests for SafeArchiveExtractor."""

import os
import stat
import zipfile

import pytest

from core.archive.exceptions import (
    ArchiveLimitExceededError,
    ArchiveValidationError,
    UnsafeArchiveEntryError,
)
from core.archive.services import SafeArchiveExtractor
from core.archive.value_objects import ArchiveLimits
from tests.mocks.archive_builder import ENTRY_FILE, application_zip, write_zip


@pytest.fixture
def extractor() -> SafeArchiveExtractor:
    return SafeArchiveExtractor(ArchiveLimits(max_entries=20, max_uncompressed_bytes=64 * 1024))


def _tree(root):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*"))


class TestSafeExtraction:
    """Archives whose entries all stay inside the destination."""

    def test_extracts_nested_members(self, tmp_path, extractor) -> None:
        archive = application_zip(tmp_path / "in" / "site.zip", prefix="publish/")
        destination = tmp_path / "out" / "extracted"

        report = extractor.extract(archive, destination)

        assert (destination / "publish" / ENTRY_FILE).is_file()
        assert (destination / "publish" / "wwwroot" / "index.html").read_bytes() == b"<html></html>"
        assert report.destination == str(destination)
        assert report.entry_count == 3

    def test_replaces_previous_content(self, tmp_path, extractor) -> None:
        destination = tmp_path / "extracted"
        destination.mkdir()
        (destination / "stale.txt").write_text("old")
        archive = write_zip(tmp_path / "site.zip", {"fresh.txt": b"new"})

        extractor.extract(archive, destination)

        assert _tree(destination) == ["fresh.txt"]

    def test_counts_decompressed_bytes(self, tmp_path, extractor) -> None:
        archive = write_zip(tmp_path / "site.zip", {"a.txt": b"x" * 100, "b/c.txt": b"y" * 50})

        report = extractor.extract(archive, tmp_path / "extracted")

        assert report.bytes_written == 150

    def test_skips_current_directory_entries(self, tmp_path, extractor) -> None:
        archive = write_zip(tmp_path / "site.zip", {"./": b"", "./app/main.txt": b"ok"})

        extractor.extract(archive, tmp_path / "extracted")

        assert (tmp_path / "extracted" / "app" / "main.txt").read_text() == "ok"


class TestUnsafeEntries:
    """Traversal and absolute entries abort and leave nothing behind."""

    @pytest.mark.parametrize(
        "entry",
        [
            "../../etc/passwd",
            "app/../../outside.txt",
            "/etc/passwd",
            "C:/Windows/evil.dll",
            "..\\..\\evil.txt",
        ],
    )
    def test_rejects_escaping_entry(self, tmp_path, extractor, entry) -> None:
        work = tmp_path / "work"
        archive = write_zip(tmp_path / "site.zip", {"ok.txt": b"fine", entry: b"pwned"})
        destination = work / "extracted"

        with pytest.raises(UnsafeArchiveEntryError):
            extractor.extract(archive, destination)

        assert not destination.exists()
        assert list(work.iterdir()) == []
        assert not (tmp_path / "outside.txt").exists()
        assert not (tmp_path / "evil.txt").exists()

    def test_failed_extraction_keeps_previous_content(self, tmp_path, extractor) -> None:
        destination = tmp_path / "extracted"
        destination.mkdir()
        (destination / "current.txt").write_text("live")
        archive = write_zip(tmp_path / "site.zip", {"../escape.txt": b"x"})

        with pytest.raises(UnsafeArchiveEntryError):
            extractor.extract(archive, destination)

        assert _tree(destination) == ["current.txt"]

    def test_rejects_symlink_entry(self, tmp_path, extractor) -> None:
        archive = tmp_path / "site.zip"
        link = zipfile.ZipInfo("link")
        link.external_attr = (stat.S_IFLNK | 0o777) << 16
        with zipfile.ZipFile(archive, "w") as handle:
            handle.writestr(link, "/etc/passwd")

        with pytest.raises(UnsafeArchiveEntryError) as exc_info:
            extractor.extract(archive, tmp_path / "extracted")

        assert exc_info.value.reason == "symbolic link"
        assert not (tmp_path / "extracted").exists()


class TestLimits:
    """Entry count and uncompressed size ceilings."""

    def test_entry_count_ceiling(self, tmp_path) -> None:
        members = {f"file{i}.txt": b"x" for i in range(6)}
        archive = write_zip(tmp_path / "site.zip", members)
        extractor = SafeArchiveExtractor(ArchiveLimits(max_entries=5))

        with pytest.raises(ArchiveLimitExceededError) as exc_info:
            extractor.extract(archive, tmp_path / "extracted")

        assert exc_info.value.limit_name == "entries"
        assert not (tmp_path / "extracted").exists()

    def test_uncompressed_size_ceiling(self, tmp_path) -> None:
        archive = write_zip(tmp_path / "site.zip", {"bomb.bin": b"\0" * 10000})
        extractor = SafeArchiveExtractor(ArchiveLimits(max_uncompressed_bytes=4096))

        with pytest.raises(ArchiveLimitExceededError) as exc_info:
            extractor.extract(archive, tmp_path / "extracted")

        assert exc_info.value.limit == 4096
        assert not (tmp_path / "extracted").exists()

    def test_corrupt_archive(self, tmp_path, extractor) -> None:
        archive = tmp_path / "site.zip"
        archive.write_bytes(b"PK\x03\x04" + os.urandom(64))

        with pytest.raises(ArchiveValidationError):
            extractor.extract(archive, tmp_path / "extracted")

        assert not (tmp_path / "extracted").exists()
