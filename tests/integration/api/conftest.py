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

"""Fixtures for end-to-end API tests against the development container."""

# pylint: disable=redefined-outer-name

import asyncio
import os
from pathlib import Path

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from tests.mocks.archive_builder import application_zip

os.environ.setdefault("ENV", "dev")

from container import container  # noqa: E402  pylint: disable=wrong-import-position
from main import app  # noqa: E402  pylint: disable=wrong-import-position


@pytest.fixture
def api_container(sitedock_config, fake_runtime):
    """Development container with temporary paths and a fake docker runtime."""
    container.reset_singletons()
    container.config.override(providers.Object(sitedock_config))
    container.container_runtime.override(providers.Object(fake_runtime))
    yield container
    container.config.reset_override()
    container.container_runtime.reset_override()
    container.reset_singletons()


@pytest.fixture
def client(api_container):  # pylint: disable=unused-argument
    """Test client without the lifespan, so the worker only runs when driven."""
    return TestClient(app)


@pytest.fixture
def run_worker(api_container):
    """Process one queued deployment, returning whether one was found."""
    def _run() -> bool:
        return asyncio.run(api_container.deployment_worker().run_once())
    return _run


@pytest.fixture
def created_site(client) -> dict:
    """A registered site with password protection."""
    response = client.post(
        "/api/v1/sites",
        json={"name": "Field Notes", "subdomain": "notes", "access_secret": "s3cret-pass"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def app_archive(tmp_path) -> Path:
    """A deployable application archive."""
    return application_zip(tmp_path / "build" / "app.zip")
