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

"""Unit tests for secure logging utilities."""

import logging

import pytest

from api import logging_utils
from api.logging_utils import (
    MASK,
    create_job_log_file,
    log_secure_info,
    mask_secret,
    remove_job_logger,
)


@pytest.mark.parametrize(
    "message,leak",
    [
        ("connecting to 192.168.1.100", "192.168.1.100"),
        ("notify ops@example.com", "ops@example.com"),
        ("password=hunter2", "hunter2"),
        ("ACCESS_SECRET: topsecret", "topsecret"),
        ("Authorization: Bearer abc.def-ghi", "abc.def-ghi"),
    ],
)
def test_sanitize_redacts(message, leak) -> None:
    assert leak not in logging_utils._sanitize_message(message)  # pylint: disable=protected-access


def test_mask_secret() -> None:
    assert mask_secret("pw is hunter2 and hunter2", "hunter2") == f"pw is {MASK} and {MASK}"
    assert mask_secret("unchanged", None, "") == "unchanged"
    assert mask_secret("", "x") == ""


def test_identifier_is_truncated(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="api.logging_utils"):
        log_secure_info("info", "Site created", "3f2b8c1e-9a4d-4e7b-8c6a-1d2e3f4a5b6c")

    assert "Site created: 3f2b8c1e..." in caplog.text
    assert "9a4d" not in caplog.text


def test_job_log_file(job_log_dir) -> None:
    log_file = create_job_log_file("job-1234abcd")

    log_secure_info("info", "Extracting archive from 10.0.0.5", job_id="job-1234abcd", end_section=True)
    remove_job_logger("job-1234abcd")

    content = log_file.read_text()
    assert log_file == job_log_dir / "jobs" / "job-1234abcd.log"
    assert "Extracting archive from <REDACTED_IP>" in content
    assert "-" * 80 in content


def test_remove_unknown_job_logger() -> None:
    remove_job_logger("never-created")
