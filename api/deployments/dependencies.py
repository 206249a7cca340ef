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

"""FastAPI dependency providers for Deployments API."""

from api.deployments.uploads import UploadStore
from api.dependencies import _get_container
from orchestrator.deployments.use_cases import (
    EnqueueDeploymentUseCase,
    GetDeploymentLogUseCase,
    ListDeploymentsUseCase,
)
from orchestrator.sites.use_cases import GetSiteUseCase


def get_upload_store() -> UploadStore:
    """Provide the upload store for the configured upload root."""
    container = _get_container()
    return UploadStore(
        layout=container.upload_layout(),
        max_upload_bytes=container.config().archive.max_upload_bytes,
    )


def get_enqueue_deployment_use_case() -> EnqueueDeploymentUseCase:
    """Provide enqueue-deployment use case."""
    return _get_container().enqueue_deployment_use_case()


def get_deployment_site_use_case() -> GetSiteUseCase:
    """Provide get-site use case for checking the target before storing an upload."""
    return _get_container().get_site_use_case()


def get_deployment_log_use_case() -> GetDeploymentLogUseCase:
    """Provide get-deployment-log use case."""
    return _get_container().get_deployment_log_use_case()


def get_list_deployments_use_case() -> ListDeploymentsUseCase:
    """Provide list-deployments use case."""
    return _get_container().list_deployments_use_case()
