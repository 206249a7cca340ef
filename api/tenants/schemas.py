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

"""Pydantic schemas for Tenants API requests and responses."""

from pydantic import BaseModel, Field


class CreateTenantRequest(BaseModel):
    """Request model for tenant registration."""

    name: str = Field(..., min_length=1, max_length=200, description="Tenant display name")
    domain: str = Field(..., min_length=4, max_length=253, description="Base domain")
    email: str = Field(..., min_length=3, max_length=254, description="Contact email")
    password: str = Field(..., min_length=8, max_length=128, description="Login password")


class TenantResponseModel(BaseModel):
    """Response model for a tenant."""

    tenant_id: str = Field(..., description="Tenant identifier")
    name: str = Field(..., description="Tenant display name")
    domain: str = Field(..., description="Base domain")
    email: str = Field(..., description="Contact email")
    active: bool = Field(..., description="Whether the tenant is active")
    created_at: str = Field(..., description="Creation timestamp (ISO 8601)")
