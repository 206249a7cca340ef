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

"""FastAPI routes for site registration and lifecycle."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_correlation_id
from api.errors import ERROR_RESPONSES, http_error, internal_error
from api.logging_utils import log_secure_info
from api.sites.dependencies import (
    get_create_site_use_case,
    get_delete_site_use_case,
    get_get_site_use_case,
    get_start_site_use_case,
    get_stop_site_use_case,
)
from api.sites.schemas import CreateSiteRequest, SiteResponseModel
from core.provisioning.exceptions import ProvisioningError, TeardownIncompleteError
from core.sites.exceptions import (
    DomainConflictError,
    InvalidSiteInputError,
    SiteNotFoundError,
    SiteStateError,
    TenantNotFoundError,
)
from core.sites.value_objects import SiteId
from orchestrator.sites.commands import CreateSiteCommand, SiteCommand
from orchestrator.sites.dtos import SiteResponse
from orchestrator.sites.use_cases import (
    CreateSiteUseCase,
    DeleteSiteUseCase,
    GetSiteUseCase,
    StartSiteUseCase,
    StopSiteUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sites", tags=["Sites"])


def validated_site_id(site_id: str, correlation_id: str) -> str:
    """Return the site id or raise 400 when it is not a UUID."""
    try:
        return SiteId(site_id).value
    except ValueError as exc:
        raise http_error(
            status.HTTP_400_BAD_REQUEST,
            "INVALID_SITE_ID",
            f"Invalid site_id format: {site_id}",
            correlation_id,
        ) from exc


def site_error(exc: Exception, correlation_id: str) -> HTTPException:
    """Map a site or provisioning error to its HTTP response."""
    if isinstance(exc, SiteNotFoundError):
        return http_error(status.HTTP_404_NOT_FOUND, "SITE_NOT_FOUND", exc.message, correlation_id)
    if isinstance(exc, TenantNotFoundError):
        return http_error(
            status.HTTP_404_NOT_FOUND, "TENANT_NOT_FOUND", exc.message, correlation_id
        )
    if isinstance(exc, DomainConflictError):
        return http_error(status.HTTP_409_CONFLICT, "DOMAIN_CONFLICT", exc.message, correlation_id)
    if isinstance(exc, SiteStateError):
        return http_error(
            status.HTTP_409_CONFLICT, "INVALID_SITE_STATE", exc.message, correlation_id
        )
    if isinstance(exc, InvalidSiteInputError):
        return http_error(status.HTTP_400_BAD_REQUEST, "INVALID_SITE", exc.message, correlation_id)
    if isinstance(exc, TeardownIncompleteError):
        return http_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "TEARDOWN_INCOMPLETE",
            exc.message,
            correlation_id,
        )
    if isinstance(exc, ProvisioningError):
        return http_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "CONTAINER_ERROR",
            exc.message,
            correlation_id,
        )
    logger.exception("Unexpected error in site operation")
    return internal_error(correlation_id)


def _to_model(result: SiteResponse) -> SiteResponseModel:
    return SiteResponseModel(**asdict(result))


@router.post(
    "",
    response_model=SiteResponseModel,
    status_code=status.HTTP_201_CREATED,
    summary="Create site",
    description="Register a site; containers are created by its first deployment",
    responses=ERROR_RESPONSES,
)
def create_site(
    request: CreateSiteRequest,
    use_case: CreateSiteUseCase = Depends(get_create_site_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> SiteResponseModel:
    """Register a site."""
    logger.info("Create site request: correlation_id=%s", correlation_id)

    try:
        result = use_case.execute(
            CreateSiteCommand(
                name=request.name,
                subdomain=request.subdomain,
                access_secret=request.access_secret,
                access_enabled=request.access_enabled,
                access_user=request.access_user,
                tenant_id=request.tenant_id,
                description=request.description,
                correlation_id=correlation_id,
            )
        )
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc

    return _to_model(result)


@router.get(
    "/{site_id}",
    response_model=SiteResponseModel,
    summary="Get site",
    responses=ERROR_RESPONSES,
)
def get_site(
    site_id: str,
    use_case: GetSiteUseCase = Depends(get_get_site_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> SiteResponseModel:
    """Return a site and its cached container status."""
    command = SiteCommand(validated_site_id(site_id, correlation_id), correlation_id)
    try:
        return _to_model(use_case.execute(command))
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc


@router.delete(
    "/{site_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete site",
    description="Tear down every resource of the site, then delete its record",
    responses=ERROR_RESPONSES,
)
async def delete_site(
    site_id: str,
    use_case: DeleteSiteUseCase = Depends(get_delete_site_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> Response:
    """Tear down and delete a site."""
    command = SiteCommand(validated_site_id(site_id, correlation_id), correlation_id)
    log_secure_info("info", "Delete site request", command.site_id)
    try:
        await use_case.execute(command)
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{site_id}/start",
    response_model=SiteResponseModel,
    summary="Start site",
    responses=ERROR_RESPONSES,
)
async def start_site(
    site_id: str,
    use_case: StartSiteUseCase = Depends(get_start_site_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> SiteResponseModel:
    """Start the app container and sidecar of a deployed site."""
    command = SiteCommand(validated_site_id(site_id, correlation_id), correlation_id)
    try:
        return _to_model(await use_case.execute(command))
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc


@router.post(
    "/{site_id}/stop",
    response_model=SiteResponseModel,
    summary="Stop site",
    responses=ERROR_RESPONSES,
)
async def stop_site(
    site_id: str,
    use_case: StopSiteUseCase = Depends(get_stop_site_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> SiteResponseModel:
    """Stop the sidecar and app container of a deployed site."""
    command = SiteCommand(validated_site_id(site_id, correlation_id), correlation_id)
    try:
        return _to_model(await use_case.execute(command))
    except Exception as exc:  # pylint: disable=broad-except
        raise site_error(exc, correlation_id) from exc
