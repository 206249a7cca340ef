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

"""FastAPI routes for tenant registration."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from api.dependencies import get_correlation_id
from api.errors import ERROR_RESPONSES, http_error, internal_error
from api.tenants.dependencies import get_create_tenant_use_case
from api.tenants.schemas import CreateTenantRequest, TenantResponseModel
from core.sites.exceptions import InvalidSiteInputError, TenantConflictError
from orchestrator.tenants.commands import CreateTenantCommand
from orchestrator.tenants.use_cases import CreateTenantUseCase

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post(
    "",
    response_model=TenantResponseModel,
    status_code=status.HTTP_201_CREATED,
    summary="Register tenant",
    description="Register a tenant owning a base domain",
    responses=ERROR_RESPONSES,
)
def create_tenant(
    request: CreateTenantRequest,
    use_case: CreateTenantUseCase = Depends(get_create_tenant_use_case),
    correlation_id: str = Depends(get_correlation_id),
) -> TenantResponseModel:
    """Register a tenant."""
    logger.info("Create tenant request: correlation_id=%s", correlation_id)

    try:
        result = use_case.execute(
            CreateTenantCommand(
                name=request.name,
                domain=request.domain,
                email=request.email,
                password=request.password,
                correlation_id=correlation_id,
            )
        )
    except InvalidSiteInputError as exc:
        raise http_error(
            status.HTTP_400_BAD_REQUEST, "INVALID_TENANT", exc.message, correlation_id
        ) from exc
    except TenantConflictError as exc:
        logger.warning("Tenant conflict on %s", exc.field_name)
        raise http_error(
            status.HTTP_409_CONFLICT, "TENANT_CONFLICT", exc.message, correlation_id
        ) from exc
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Unexpected error creating tenant")
        raise internal_error(correlation_id) from exc

    return TenantResponseModel(**asdict(result))
