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

"""Pydantic schemas for Sites API requests and responses."""

from typing import Optional

from pydantic import BaseModel, Field


class CreateSiteRequest(BaseModel):
    """Request model for site registration."""

    name: str = Field(..., min_length=1, max_length=200, description="Site display name")
    subdomain: str = Field(..., min_length=1, max_length=63, description="Subdomain label")
    access_secret: str = Field(
        ..., min_length=8, max_length=100, description="Password enforced by the access sidecar"
    )
    access_enabled: bool = Field(default=True, description="Require the password")
    access_user: Optional[str] = Field(
        default=None, max_length=64, description="Sidecar login name"
    )
    tenant_id: Optional[str] = Field(default=None, description="Owning tenant")
    description: Optional[str] = Field(default=None, max_length=2000, description="Description")


class SiteResponseModel(BaseModel):
    """Response model for a site. Never includes the access secret."""

    site_id: str = Field(..., description="Site identifier")
    name: str = Field(..., description="Site display name")
    domain: str = Field(..., description="Fully qualified domain")
    slug: str = Field(..., description="URL-safe slug")
    url: str = Field(..., description="Public URL")
    tenant_id: Optional[str] = Field(default=None, description="Owning tenant")
    description: Optional[str] = Field(default=None, description="Description")
    custom_logo_path: Optional[str] = Field(default=None, description="Branding asset path")
    access_user: str = Field(..., description="Sidecar login name")
    access_enabled: bool = Field(..., description="Whether the sidecar requires a password")
    runtime_tag: Optional[str] = Field(default=None, description="Detected runtime")
    container_name: Optional[str] = Field(default=None, description="App container")
    proxy_container_name: Optional[str] = Field(default=None, description="Sidecar container")
    network_name: Optional[str] = Field(default=None, description="Per-site network")
    image_name: Optional[str] = Field(default=None, description="Site image")
    container_port: Optional[int] = Field(default=None, description="Published host port")
    container_status: Optional[str] = Field(default=None, description="Cached container status")
    tls_enabled: bool = Field(..., description="Whether a certificate was issued")
    created_at: str = Field(..., description="Creation timestamp (ISO 8601)")
    updated_at: str = Field(..., description="Last update timestamp (ISO 8601)")
