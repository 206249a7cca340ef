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

"""FastAPI routes for deployments."""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from api.dependencies import get_correlation_id
from api.deployments.dependencies import (
    get_deployment_log_use_case,
    get_deployment_site_use_case,
    get_enqueue_deployment_use_case,
    get_list_deployments_use_case,
    get_upload_store,
)
from api.deployments.schemas import (
    DeploymentAcceptedResponse,
    DeploymentListResponse,
    DeploymentLogResponse,
    DeploymentSummaryModel,
)
from api.deployments.uploads import UploadStore
from api.errors import ERROR_RESPONSES, http_error, internal_error
from api.logging_utils import log_secure_info
from api.sites.routes import site_error, validated_site_id
from core.archive.exceptions import ArchiveValidationError
from core.deployments.exceptions import InvalidDeploymentInputError, JobNotFoundError
from core.deployments.value_objects import JobId
from core.sites.exceptions import SiteNotFoundError
from orchestrator.deployments.commands import EnqueueDeploymentCommand
from orchestrator.deployments.use_cases import (
    EnqueueDeploymentUseCase,
    GetDeploymentLogUseCase,
    ListDeploymentsUseCase,
)
from orchestrator.sites.commands import SiteCommand
from orchestrator.sites.use_cases import GetSiteUseCase

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Deployments"])


@router.post(
    "/sites/{site_id}/deployments",
    response_model=DeploymentAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Deploy archive",
    description="Upload a zip archive and queue its deployment to the site",
    responses=ERROR_RESPONSES,
)
async def create_deployment(
    site_id: str,
    file: UploadFile = File(..., description="Zip archive of the published application"),
    access_user: Optional[str] = Form(default=None),
    access_secret: Optional[str] = Form(default=None),
    site_use_case: GetSiteUseCase = Depends(get_deployment_site_use_case),
    use_case: EnqueueDeploymentUseCase = Depends(get_enqueue_deployment_use_case),
    upload_store: UploadStore = Depends(get_upload_store),
    correlation_id: str = Depends(get_correlation_id),
) -> DeploymentAcceptedResponse:  # pylint: disable=too-many-arguments,too-many-positional-arguments
    """Store the upload, validate it and queue the deployment.

    Accepts the request synchronously and returns 202 Accepted. The
    pipeline runs in the background worker; poll the log endpoint for
    progress.
    """
    command = SiteCommand(validated_site_id(site_id, correlation_id), correlation_id)
    try:
        site_use_case.execute(command)
    except SiteNotFoundError as exc:
        raise site_error(exc, correlation_id) from exc

    try:
        artifact_path = await upload_store.save(command.site_id, file)
    except OSError as exc:
        logger.exception("Failed to store upload")
        raise internal_error(correlation_id) from exc
    finally:
        await file.close()

    try:
        result = use_case.execute(
            EnqueueDeploymentCommand(
                site_id=command.site_id,
                artifact_path=str(artifact_path),
                access_user=access_user,
                access_secret=access_secret,
                correlation_id=correlation_id,
            )
        )
    except SiteNotFoundError as exc:
        raise site_error(exc, correlation_id) from exc
    except ArchiveValidationError as exc:
        log_secure_info("warning", f"Upload rejected: {exc.message}", command.site_id)
        raise http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_ARCHIVE", exc.message, correlation_id
        ) from exc
    except InvalidDeploymentInputError as exc:
        raise http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_DEPLOYMENT", exc.message, correlation_id
        ) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Unexpected error queueing deployment")
        raise internal_error(correlation_id) from exc

    return DeploymentAcceptedResponse(**asdict(result))


@router.get(
    "/deployments",
    response_model=DeploymentListResponse,
    summary="List deployments",
    description="Most recent deployments of a site, newest first",
    responses=ERROR_RESPONSES,
)
def list_deployments(
    site_id: str = Query(..., description="Site whose deployments to list"),
    use_case: ListDeploymentsUseCase = Depends(get_list_deployments_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> DeploymentListResponse:
    """Return a site's deployment history."""
    valid_site_id = validated_site_id(site_id, correlation_id)
    try:
        results = use_case.execute(valid_site_id)
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc

    return DeploymentListResponse(
        deployments=[DeploymentSummaryModel(**asdict(item)) for item in results]
    )


@router.get(
    "/deployments/{job_id}/log",
    response_model=DeploymentLogResponse,
    summary="Get deployment log",
    responses=ERROR_RESPONSES,
)
def get_deployment_log(
    job_id: str,
    use_case: GetDeploymentLogUseCase = Depends(get_deployment_log_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> DeploymentLogResponse:
    """Return status, message and log of a deployment."""
    try:
        validated_job_id = JobId(job_id)
    except ValueError as exc:
        raise http_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_JOB_ID",
            f"Invalid job_id format: {job_id}",
            correlation_id,
        ) from exc

    try:
        result = use_case.execute(validated_job_id.value)
    except JobNotFoundError as exc:
        raise http_error(
            status.HTTP_404_NOT_FOUND, "DEPLOYMENT_NOT_FOUND", exc.message, correlation_id
        ) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Unexpected error reading deployment log")
        raise internal_error(correlation_id) from exc

    return DeploymentLogResponse(**asdict(result))
