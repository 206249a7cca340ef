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

"""Shared pytest fixtures for SiteDock tests."""

# pylint: disable=redefined-outer-name

from pathlib import Path

import pytest

from common.config import (
    ArchiveConfig,
    EdgeConfig,
    PrivilegedConfig,
    ProvisioningConfig,
    SiteDockConfig,
)
from core.archive.value_objects import UploadLayout
from tests.mocks.fake_container_runtime import FakeContainerRuntime
from tests.mocks.recording_executor import RecordingExecutor


@pytest.fixture(autouse=True)
def job_log_dir(tmp_path, monkeypatch) -> Path:
    """Keep per-job log files inside the test's temporary directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("SITEDOCK_LOG_DIR", str(log_dir))
    return log_dir


@pytest.fixture
def sitedock_config(tmp_path) -> SiteDockConfig:
    """Configuration pointing every host path at the temporary directory.

    The proxy and certificate tools are replaced by ``true`` so that
    in-process helper operations succeed without nginx or certbot.
    """
    return SiteDockConfig(
        archive=ArchiveConfig(
            upload_root=str(tmp_path / "uploads"),
            max_upload_bytes=1024 * 1024,
            max_archive_entries=100,
            max_archive_uncompressed_bytes=4 * 1024 * 1024,
        ),
        provisioning=ProvisioningConfig(base_port=8100, max_port=8199),
        edge=EdgeConfig(
            sites_dir=str(tmp_path / "nginx" / "sites-enabled"),
            backup_dir=str(tmp_path / "nginx" / "backups"),
            nginx_binary="true",
            certbot_binary="true",
            letsencrypt_email="ops@example.com",
        ),
        privileged=PrivilegedConfig(mode="in_process"),
    )


@pytest.fixture
def upload_layout(sitedock_config) -> UploadLayout:
    """Upload layout rooted in the temporary directory."""
    return UploadLayout(sitedock_config.archive.upload_root)


@pytest.fixture
def fake_runtime() -> FakeContainerRuntime:
    """Fresh in-memory container runtime."""
    return FakeContainerRuntime()


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    """Privileged executor that validates and records calls."""
    return RecordingExecutor()

