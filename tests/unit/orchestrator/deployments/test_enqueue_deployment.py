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

"""Unit tests for EnqueueDeploymentUseCase and the deployment queries."""

# pylint: disable=redefined-outer-name

import pytest

from core.archive.exceptions import ArchiveValidationError
from core.archive.services import ArchiveValidator
from core.deployments.exceptions import InvalidDeploymentInputError, JobNotFoundError
from core.sites.exceptions import SiteNotFoundError
from infra.id_generator import UUIDv4Generator
from infra.repositories.in_memory import (
    InMemoryDeploymentJobRepository,
    InMemoryDeploymentQueue,
    InMemorySiteRepository,
)
from orchestrator.deployments.commands import EnqueueDeploymentCommand
from orchestrator.deployments.use_cases import (
    EnqueueDeploymentUseCase,
    GetDeploymentLogUseCase,
    ListDeploymentsUseCase,
)
from tests.mocks.archive_builder import application_zip
from tests.mocks.site_builders import SECRET, SITE_ID, make_site


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
def use_case(site_repo, job_repo, queue, sitedock_config):
    return EnqueueDeploymentUseCase(
        site_repo=site_repo,
        job_repo=job_repo,
        queue=queue,
        validator=ArchiveValidator(),
        uuid_generator=UUIDv4Generator(),
        max_upload_bytes=sitedock_config.archive.max_upload_bytes,
    )


@pytest.fixture
def upload(upload_layout):
    return application_zip(upload_layout.upload_path(SITE_ID, "abc123"))


class TestEnqueueDeployment:
    """Accepting an upload."""

    def test_queues_job(self, use_case, job_repo, queue, upload, job_log_dir) -> None:
        accepted = use_case.execute(EnqueueDeploymentCommand(SITE_ID, str(upload)))

        job = job_repo.find_by_id(accepted.job_id)
        assert accepted.status == "QUEUED"
        assert accepted.site_id == SITE_ID
        assert "Deployment queued for site Demo Shop (shop.sites.example.com)" in job.log
        assert (job_log_dir / "jobs" / f"{accepted.job_id}.log").is_file()
        assert upload.exists()

        entry = queue.claim_next()
        assert entry.job_id == accepted.job_id
        assert entry.artifact_path == str(upload)
        assert (entry.access_user, entry.access_secret) == ("viewer", SECRET)

    def test_credentials_override_site_defaults(self, use_case, queue, upload) -> None:
        use_case.execute(
            EnqueueDeploymentCommand(SITE_ID, str(upload), access_user="guest", access_secret="new-secret-1")
        )

        entry = queue.claim_next()
        assert (entry.access_user, entry.access_secret) == ("guest", "new-secret-1")

    def test_unknown_site_discards_upload(self, use_case, job_repo, upload) -> None:
        with pytest.raises(SiteNotFoundError):
            use_case.execute(EnqueueDeploymentCommand("7a1c2d3e-4f5a-4b6c-8d7e-9f0a1b2c3d4e", str(upload)))

        assert not upload.exists()
        assert job_repo.list_for_site(SITE_ID) == []

    def test_bad_credentials_discard_upload(self, use_case, upload) -> None:
        with pytest.raises(InvalidDeploymentInputError):
            use_case.execute(EnqueueDeploymentCommand(SITE_ID, str(upload), access_secret="short"))

        assert not upload.exists()

    def test_not_a_zip(self, use_case, queue, upload_layout) -> None:
        path = upload_layout.upload_path(SITE_ID, "bad")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("hello")

        with pytest.raises(ArchiveValidationError):
            use_case.execute(EnqueueDeploymentCommand(SITE_ID, str(path)))

        assert not path.exists()
        assert queue.claim_next() is None

    def test_oversized_upload(self, site_repo, job_repo, queue, upload) -> None:
        use_case = EnqueueDeploymentUseCase(
            site_repo, job_repo, queue, ArchiveValidator(), UUIDv4Generator(), max_upload_bytes=10
        )

        with pytest.raises(ArchiveValidationError, match="exceeds maximum"):
            use_case.execute(EnqueueDeploymentCommand(SITE_ID, str(upload)))

    def test_command_repr_masks_secret(self) -> None:
        command = EnqueueDeploymentCommand(SITE_ID, "/x.zip", access_secret=SECRET)

        assert SECRET not in repr(command)


class TestDeploymentQueries:
    """History and log lookups."""

    def test_history_newest_first(self, use_case, site_repo, job_repo, upload_layout) -> None:
        first = use_case.execute(
            EnqueueDeploymentCommand(SITE_ID, str(application_zip(upload_layout.upload_path(SITE_ID, "a"))))
        )
        second = use_case.execute(
            EnqueueDeploymentCommand(SITE_ID, str(application_zip(upload_layout.upload_path(SITE_ID, "b"))))
        )

        history = ListDeploymentsUseCase(site_repo, job_repo).execute(SITE_ID)

        assert {row.job_id for row in history} == {first.job_id, second.job_id}
        assert history[0].created_at >= history[1].created_at

    def test_history_unknown_site(self, site_repo, job_repo) -> None:
        with pytest.raises(SiteNotFoundError):
            ListDeploymentsUseCase(site_repo, job_repo).execute("unknown")

    def test_log(self, use_case, job_repo, upload) -> None:
        accepted = use_case.execute(EnqueueDeploymentCommand(SITE_ID, str(upload)))

        view = GetDeploymentLogUseCase(job_repo).execute(accepted.job_id)

        assert view.status == "QUEUED"
        assert view.message is None
        assert view.log.endswith("\n")

    def test_log_unknown_job(self, job_repo) -> None:
        with pytest.raises(JobNotFoundError):
            GetDeploymentLogUseCase(job_repo).execute("missing")
