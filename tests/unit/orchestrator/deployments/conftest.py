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

"""Fixtures wiring the deployment pipeline with in-memory and fake adapters."""

# pylint: disable=redefined-outer-name

import asyncio
from datetime import datetime, timezone

import pytest

from core.archive.value_objects import UploadLayout
from core.deployments.entities import DeploymentJob
from core.deployments.repositories import QueueEntry
from core.edge.services import EdgeConfigurationWriter
from core.provisioning.services import DockerfileRenderer, IsolationProvisioner
from core.runtime.services import RuntimeDetector
from infra.privileged.in_process_executor import InProcessPrivilegedExecutor
from infra.repositories.in_memory import (
    InMemoryDeploymentJobRepository,
    InMemoryDeploymentQueue,
    InMemorySiteRepository,
)
from orchestrator.deployments.use_cases import RunDeploymentUseCase
from tests.mocks.archive_builder import ENTRY_FILE
from tests.mocks.site_builders import JOB_ID, SECRET, SITE_ID, make_site


@pytest.fixture
def site_repo():
    repo = InMemorySiteRepository()
    repo.save(make_site())
    return repo


@pytest.fixture
def job_repo():
    return InMemoryDeploymentJobRepository()


@pytest.fixture
def queue():
    return InMemoryDeploymentQueue()


@pytest.fixture
def mutation_lock():
    return asyncio.Lock()


@pytest.fixture
def provisioner(fake_runtime, sitedock_config):
    prov = sitedock_config.provisioning
    return IsolationProvisioner(
        runtime=fake_runtime,
        renderer=DockerfileRenderer(ENTRY_FILE, prov.app_port),
        resource_prefix=prov.resource_prefix,
        base_port=prov.base_port,
        max_port=prov.max_port,
    )


@pytest.fixture
def executor(sitedock_config):
    return InProcessPrivilegedExecutor(sitedock_config)


@pytest.fixture
def run_use_case(job_repo, site_repo, executor, provisioner, sitedock_config):
    return RunDeploymentUseCase(
        job_repo=job_repo,
        site_repo=site_repo,
        executor=executor,
        detector=RuntimeDetector(ENTRY_FILE),
        provisioner=provisioner,
        edge_writer=EdgeConfigurationWriter(executor, sitedock_config.edge.letsencrypt_email),
        upload_layout=UploadLayout(sitedock_config.archive.upload_root),
    )


@pytest.fixture
def queued_entry(job_repo):
    """Store a QUEUED job and return a factory for its queue entry."""

    def build(artifact_path, job_id=JOB_ID, site_id=SITE_ID, secret=SECRET) -> QueueEntry:
        job_repo.save(DeploymentJob(job_id=job_id, site_id=site_id))
        return QueueEntry(
            job_id=job_id,
            site_id=site_id,
            artifact_path=str(artifact_path),
            access_user="viewer",
            access_secret=secret,
            enqueued_at=datetime.now(timezone.utc),
        )

    return build
