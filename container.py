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

"""Dependency Injector containers for the SiteDock API."""
# pylint: disable=c-extension-no-member

import asyncio
import os

from dependency_injector import containers, providers

from common.config import SiteDockConfig, load_config_or_default
from core.archive.services import ArchiveValidator
from core.archive.value_objects import UploadLayout
from core.edge.services import EdgeConfigurationWriter
from core.provisioning.services import DockerfileRenderer, IsolationProvisioner
from core.runtime.services import RuntimeDetector
from core.sites.services import SiteRegistrationService
from infra.docker.docker_cli import DockerCliAdapter
from infra.id_generator import UUIDv4Generator
from infra.privileged.in_process_executor import InProcessPrivilegedExecutor
from infra.privileged.sudo_executor import SudoPrivilegedExecutor
from infra.repositories import (
    InMemoryDeploymentJobRepository,
    InMemoryDeploymentQueue,
    InMemorySiteRepository,
    InMemoryTenantRepository,
)
from infra.security.hashers import build_password_hasher
from orchestrator.deployments.certificate_sweeper import CertificateSweeper
from orchestrator.deployments.use_cases import (
    EnqueueDeploymentUseCase,
    GetDeploymentLogUseCase,
    ListDeploymentsUseCase,
    RunDeploymentUseCase,
)
from orchestrator.deployments.worker import DeploymentWorker
from orchestrator.sites.use_cases import (
    CreateSiteUseCase,
    DeleteSiteUseCase,
    GetSiteUseCase,
    ReconcileContainerStatusUseCase,
    StartSiteUseCase,
    StopSiteUseCase,
    TeardownSiteUseCase,
)
from orchestrator.tenants.use_cases import CreateTenantUseCase

_WIRED_MODULES = [
    "api.sites.dependencies",
    "api.deployments.dependencies",
    "api.tenants.dependencies",
]


def _create_privileged_executor(config: SiteDockConfig):
    """Factory function selecting the privileged executor from configuration.

    Returns:
        SudoPrivilegedExecutor, or InProcessPrivilegedExecutor when
        ``[privileged] mode = in_process``.
    """
    if config.privileged.mode == "in_process":
        return InProcessPrivilegedExecutor(config=config)
    return SudoPrivilegedExecutor(
        helper_path=config.privileged.helper_path,
        sudo_binary=config.privileged.sudo_binary,
        timeout_seconds=config.privileged.timeout_seconds,
    )


def _create_sql_site_repo():
    """Create SQL site repository. Imported lazily so dev mode needs no database."""
    from infra.db.repositories import SqlSiteRepository  # pylint: disable=import-outside-toplevel
    return SqlSiteRepository()


def _create_sql_tenant_repo():
    """Create SQL tenant repository."""
    from infra.db.repositories import SqlTenantRepository  # pylint: disable=import-outside-toplevel
    return SqlTenantRepository()


def _create_sql_job_repo():
    """Create SQL deployment job repository."""
    from infra.db.repositories import SqlDeploymentJobRepository  # pylint: disable=import-outside-toplevel
    return SqlDeploymentJobRepository()


def _create_sql_queue():
    """Create SQL deployment queue."""
    from infra.db.repositories import SqlDeploymentQueue  # pylint: disable=import-outside-toplevel
    return SqlDeploymentQueue()


class DevContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Development profile container.

    Uses in-memory repositories and queue and runs the privileged helper
    in-process. No database or sudo rule required.

    Activated when ENV=dev (default).
    """

    wiring_config = containers.WiringConfiguration(modules=_WIRED_MODULES)

    config = providers.Singleton(load_config_or_default)
    uuid_generator = providers.Singleton(UUIDv4Generator)
    mutation_lock = providers.Singleton(asyncio.Lock)

    upload_layout = providers.Singleton(
        UploadLayout,
        upload_root=config.provided.archive.upload_root,
    )

    # --- Repositories ---
    site_repository = providers.Singleton(InMemorySiteRepository)
    tenant_repository = providers.Singleton(InMemoryTenantRepository)
    job_repository = providers.Singleton(InMemoryDeploymentJobRepository)
    deployment_queue = providers.Singleton(InMemoryDeploymentQueue)

    # --- Host adapters ---
    executor = providers.Singleton(InProcessPrivilegedExecutor, config=config)

    container_runtime = providers.Singleton(
        DockerCliAdapter,
        docker_binary=config.provided.provisioning.docker_binary,
        command_timeout_seconds=config.provided.provisioning.command_timeout_seconds,
        build_timeout_seconds=config.provided.provisioning.build_timeout_seconds,
        name_prefix=config.provided.provisioning.resource_prefix,
    )

    password_hasher = providers.Singleton(
        build_password_hasher,
        strategy=config.provided.security.password_hasher,
        pbkdf2_iterations=config.provided.security.pbkdf2_iterations,
    )

    # --- Domain services ---
    archive_validator = providers.Singleton(ArchiveValidator)

    runtime_detector = providers.Factory(
        RuntimeDetector,
        entry_file=config.provided.runtime.entry_file,
        secondary_config_file=config.provided.runtime.secondary_config_file,
        search_depth=config.provided.runtime.search_depth,
    )

    dockerfile_renderer = providers.Factory(
        DockerfileRenderer,
        entry_file=config.provided.runtime.entry_file,
        app_port=config.provided.provisioning.app_port,
    )

    isolation_provisioner = providers.Factory(
        IsolationProvisioner,
        runtime=container_runtime,
        renderer=dockerfile_renderer,
        resource_prefix=config.provided.provisioning.resource_prefix,
        base_port=config.provided.provisioning.base_port,
        max_port=config.provided.provisioning.max_port,
        port_retry_attempts=config.provided.provisioning.port_retry_attempts,
        proxy_image=config.provided.provisioning.proxy_image,
        proxy_port=config.provided.provisioning.proxy_port,
        internal_network=config.provided.provisioning.internal_network,
    )

    edge_writer = providers.Factory(
        EdgeConfigurationWriter,
        executor=executor,
        letsencrypt_email=config.provided.edge.letsencrypt_email,
    )

    registration_service = providers.Factory(
        SiteRegistrationService,
        site_repo=site_repository,
        default_base_domain=config.provided.sites.default_base_domain,
    )

    # --- Use cases ---
    create_tenant_use_case = providers.Factory(
        CreateTenantUseCase,
        tenant_repo=tenant_repository,
        password_hasher=password_hasher,
        uuid_generator=uuid_generator,
    )

    create_site_use_case = providers.Factory(
        CreateSiteUseCase,
        site_repo=site_repository,
        tenant_repo=tenant_repository,
        registration_service=registration_service,
        uuid_generator=uuid_generator,
        default_access_user=config.provided.sites.default_access_user,
    )

    get_site_use_case = providers.Factory(GetSiteUseCase, site_repo=site_repository)

    start_site_use_case = providers.Factory(
        StartSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        mutation_lock=mutation_lock,
    )

    stop_site_use_case = providers.Factory(
        StopSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        mutation_lock=mutation_lock,
    )

    teardown_site_use_case = providers.Factory(
        TeardownSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        edge_writer=edge_writer,
        executor=executor,
        mutation_lock=mutation_lock,
    )

    delete_site_use_case = providers.Factory(
        DeleteSiteUseCase,
        site_repo=site_repository,
        teardown=teardown_site_use_case,
    )

    reconcile_status_use_case = providers.Factory(
        ReconcileContainerStatusUseCase,
        site_repo=site_repository,
        runtime=container_runtime,
        resource_prefix=config.provided.provisioning.resource_prefix,
    )

    enqueue_deployment_use_case = providers.Factory(
        EnqueueDeploymentUseCase,
        site_repo=site_repository,
        job_repo=job_repository,
        queue=deployment_queue,
        validator=archive_validator,
        uuid_generator=uuid_generator,
        max_upload_bytes=config.provided.archive.max_upload_bytes,
    )

    get_deployment_log_use_case = providers.Factory(
        GetDeploymentLogUseCase,
        job_repo=job_repository,
    )

    list_deployments_use_case = providers.Factory(
        ListDeploymentsUseCase,
        site_repo=site_repository,
        job_repo=job_repository,
    )

    run_deployment_use_case = providers.Factory(
        RunDeploymentUseCase,
        job_repo=job_repository,
        site_repo=site_repository,
        executor=executor,
        detector=runtime_detector,
        provisioner=isolation_provisioner,
        edge_writer=edge_writer,
        upload_layout=upload_layout,
    )

    # --- Background tasks ---
    deployment_worker = providers.Singleton(
        DeploymentWorker,
        queue=deployment_queue,
        job_repo=job_repository,
        run_use_case=run_deployment_use_case,
        mutation_lock=mutation_lock,
        poll_interval=config.provided.worker.poll_interval_seconds,
    )

    certificate_sweeper = providers.Singleton(
        CertificateSweeper,
        site_repo=site_repository,
        edge_writer=edge_writer,
        mutation_lock=mutation_lock,
        interval_seconds=config.provided.edge.certificate_retry_interval_seconds,
    )


class ProdContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Production profile container.

    Uses SQLAlchemy repositories and the shared database-backed queue, and
    runs the privileged helper through sudo.

    Activated when ENV=prod.
    """

    wiring_config = containers.WiringConfiguration(modules=_WIRED_MODULES)

    config = providers.Singleton(load_config_or_default)
    uuid_generator = providers.Singleton(UUIDv4Generator)
    mutation_lock = providers.Singleton(asyncio.Lock)

    upload_layout = providers.Singleton(
        UploadLayout,
        upload_root=config.provided.archive.upload_root,
    )

    # --- Repositories ---
    site_repository = providers.Singleton(_create_sql_site_repo)
    tenant_repository = providers.Singleton(_create_sql_tenant_repo)
    job_repository = providers.Singleton(_create_sql_job_repo)
    deployment_queue = providers.Singleton(_create_sql_queue)

    # --- Host adapters ---
    executor = providers.Singleton(_create_privileged_executor, config=config)

    container_runtime = providers.Singleton(
        DockerCliAdapter,
        docker_binary=config.provided.provisioning.docker_binary,
        command_timeout_seconds=config.provided.provisioning.command_timeout_seconds,
        build_timeout_seconds=config.provided.provisioning.build_timeout_seconds,
        name_prefix=config.provided.provisioning.resource_prefix,
    )

    password_hasher = providers.Singleton(
        build_password_hasher,
        strategy=config.provided.security.password_hasher,
        pbkdf2_iterations=config.provided.security.pbkdf2_iterations,
    )

    # --- Domain services ---
    archive_validator = providers.Singleton(ArchiveValidator)

    runtime_detector = providers.Factory(
        RuntimeDetector,
        entry_file=config.provided.runtime.entry_file,
        secondary_config_file=config.provided.runtime.secondary_config_file,
        search_depth=config.provided.runtime.search_depth,
    )

    dockerfile_renderer = providers.Factory(
        DockerfileRenderer,
        entry_file=config.provided.runtime.entry_file,
        app_port=config.provided.provisioning.app_port,
    )

    isolation_provisioner = providers.Factory(
        IsolationProvisioner,
        runtime=container_runtime,
        renderer=dockerfile_renderer,
        resource_prefix=config.provided.provisioning.resource_prefix,
        base_port=config.provided.provisioning.base_port,
        max_port=config.provided.provisioning.max_port,
        port_retry_attempts=config.provided.provisioning.port_retry_attempts,
        proxy_image=config.provided.provisioning.proxy_image,
        proxy_port=config.provided.provisioning.proxy_port,
        internal_network=config.provided.provisioning.internal_network,
    )

    edge_writer = providers.Factory(
        EdgeConfigurationWriter,
        executor=executor,
        letsencrypt_email=config.provided.edge.letsencrypt_email,
    )

    registration_service = providers.Factory(
        SiteRegistrationService,
        site_repo=site_repository,
        default_base_domain=config.provided.sites.default_base_domain,
    )

    # --- Use cases ---
    create_tenant_use_case = providers.Factory(
        CreateTenantUseCase,
        tenant_repo=tenant_repository,
        password_hasher=password_hasher,
        uuid_generator=uuid_generator,
    )

    create_site_use_case = providers.Factory(
        CreateSiteUseCase,
        site_repo=site_repository,
        tenant_repo=tenant_repository,
        registration_service=registration_service,
        uuid_generator=uuid_generator,
        default_access_user=config.provided.sites.default_access_user,
    )

    get_site_use_case = providers.Factory(GetSiteUseCase, site_repo=site_repository)

    start_site_use_case = providers.Factory(
        StartSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        mutation_lock=mutation_lock,
    )

    stop_site_use_case = providers.Factory(
        StopSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        mutation_lock=mutation_lock,
    )

    teardown_site_use_case = providers.Factory(
        TeardownSiteUseCase,
        site_repo=site_repository,
        provisioner=isolation_provisioner,
        edge_writer=edge_writer,
        executor=executor,
        mutation_lock=mutation_lock,
    )

    delete_site_use_case = providers.Factory(
        DeleteSiteUseCase,
        site_repo=site_repository,
        teardown=teardown_site_use_case,
    )

    reconcile_status_use_case = providers.Factory(
        ReconcileContainerStatusUseCase,
        site_repo=site_repository,
        runtime=container_runtime,
        resource_prefix=config.provided.provisioning.resource_prefix,
    )

    enqueue_deployment_use_case = providers.Factory(
        EnqueueDeploymentUseCase,
        site_repo=site_repository,
        job_repo=job_repository,
        queue=deployment_queue,
        validator=archive_validator,
        uuid_generator=uuid_generator,
        max_upload_bytes=config.provided.archive.max_upload_bytes,
    )

    get_deployment_log_use_case = providers.Factory(
        GetDeploymentLogUseCase,
        job_repo=job_repository,
    )

    list_deployments_use_case = providers.Factory(
        ListDeploymentsUseCase,
        site_repo=site_repository,
        job_repo=job_repository,
    )

    run_deployment_use_case = providers.Factory(
        RunDeploymentUseCase,
        job_repo=job_repository,
        site_repo=site_repository,
        executor=executor,
        detector=runtime_detector,
        provisioner=isolation_provisioner,
        edge_writer=edge_writer,
        upload_layout=upload_layout,
    )

    # --- Background tasks ---
    deployment_worker = providers.Singleton(
        DeploymentWorker,
        queue=deployment_queue,
        job_repo=job_repository,
        run_use_case=run_deployment_use_case,
        mutation_lock=mutation_lock,
        poll_interval=config.provided.worker.poll_interval_seconds,
    )

    certificate_sweeper = providers.Singleton(
        CertificateSweeper,
        site_repo=site_repository,
        edge_writer=edge_writer,
        mutation_lock=mutation_lock,
        interval_seconds=config.provided.edge.certificate_retry_interval_seconds,
    )


def get_container_class():
    """Select container class based on ENV environment variable.

    Returns:
        DevContainer if ENV=dev (default)
        ProdContainer if ENV=prod

    Usage:
        ENV=prod uvicorn main:app
    """
    env = os.getenv("ENV", "dev").lower()

    if env == "prod":
        return ProdContainer

    return DevContainer


Container = get_container_class()

# Singleton container instance shared across app and dependencies
container = Container()

__all__ = ["Container", "container", "get_container_class"]
