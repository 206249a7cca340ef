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

"""Unit tests for ArchiveValidator."""

import os

import pytest

from core.archive.exceptions import ArchiveValidationError
from core.archive.services import ArchiveValidator
from tests.mocks.archive_builder import application_zip


class TestArchiveValidator:
    """Pre-extraction checks on uploaded files."""

    def test_accepts_zip_within_limit(self, tmp_path) -> None:
        upload = application_zip(tmp_path / "site.zip")

        result = ArchiveValidator().validate(upload, max_bytes=1024 * 1024)

        assert result.valid
        assert result.reason is None

    def test_rejects_file_over_size_limit(self, tmp_path) -> None:
        upload = application_zip(tmp_path / "site.zip")
        size = upload.stat().st_size

        result = ArchiveValidator().validate(upload, max_bytes=size - 1)

        assert not result.valid
        assert "exceeds maximum" in result.reason
        assert str(size) in result.reason

    def test_size_check_does_not_extract(self, tmp_path) -> None:
        upload = application_zip(tmp_path / "site.zip")

        ArchiveValidator().validate(upload, max_bytes=10)

        assert sorted(p.name for p in tmp_path.iterdir()) == ["site.zip"]

    def test_rejects_non_zip_signature(self, tmp_path) -> None:
        upload = tmp_path / "site.zip"
        upload.write_bytes(b"%PDF-1.7 not an archive")

        result = ArchiveValidator().validate(upload, max_bytes=1024)

        assert not result.valid
        assert result.reason == "File is not a valid ZIP archive"

    def test_accepts_empty_archive_signature(self, tmp_path) -> None:
        upload = tmp_path / "empty.zip"
        upload.write_bytes(b"PK\x05\x06" + b"\x00" * 18)

        assert ArchiveValidator().validate(upload, max_bytes=1024).valid

    def test_rejects_missing_file(self, tmp_path) -> None:
        result = ArchiveValidator().validate(tmp_path / "absent.zip", max_bytes=1024)

        assert not result.valid
        assert result.reason == "Upload not found"

    def test_rejects_directory(self, tmp_path) -> None:
        result = ArchiveValidator().validate(tmp_path, max_bytes=1024)

        assert not result.valid
        assert result.reason == "Upload is not a regular file"

    def test_rejects_symlink(self, tmp_path) -> None:
        target = application_zip(tmp_path / "real.zip")
        link = tmp_path / "link.zip"
        os.symlink(target, link)

        result = ArchiveValidator().validate(link, max_bytes=1024 * 1024)

        assert not result.valid
        assert result.reason == "Upload is not a regular file"

    def test_require_valid_raises_with_reason(self, tmp_path) -> None:
        upload = tmp_path / "site.zip"
        upload.write_text("plain text")

        with pytest.raises(ArchiveValidationError) as exc_info:
            ArchiveValidator().require_valid(upload, max_bytes=1024)

        assert exc_info.value.message == "File is not a valid ZIP archive"
