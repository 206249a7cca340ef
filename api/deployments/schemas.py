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

"""Pydantic schemas for Deployments API responses."""

from typing import List, Optional

from pydantic import BaseModel, Field


class DeploymentAcceptedResponse(BaseModel):
    """Response model for a queued deployment (202 Accepted)."""

    job_id: str = Field(..., description="Deployment job identifier")
    site_id: str = Field(..., description="Target site")
    status: str = Field(..., description="Job status (QUEUED)")


class DeploymentLogResponse(BaseModel):
    """Response model for a deployment's status and log."""

    job_id: str = Field(..., description="Deployment job identifier")
    site_id: str = Field(..., description="Target site")
    status: str = Field(..., description="QUEUED, RUNNING, SUCCESS or FAILED")
    message: Optional[str] = Field(default=None, description="Outcome message")
    log: str = Field(..., description="Timestamped, append-only deployment log")


class DeploymentSummaryModel(BaseModel):
    """One deployment in a site's history."""

    job_id: str = Field(..., description="Deployment job identifier")
    site_id: str = Field(..., description="Target site")
    status: str = Field(..., description="Job status")
    message: Optional[str] = Field(default=None, description="Outcome message")
    created_at: str = Field(..., description="Queue timestamp (ISO 8601)")
    started_at: Optional[str] = Field(default=None, description="Start timestamp (ISO 8601)")
    finished_at: Optional[str] = Field(default=None, description="End timestamp (ISO 8601)")


class DeploymentListResponse(BaseModel):
    """Response model for a site's deployment history, newest first."""

    deployments: List[DeploymentSummaryModel] = Field(default_factory=list)
