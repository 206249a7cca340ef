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

"""Error response schema shared by all API modules."""

from datetime import datetime, timezone

from fastapi import HTTPException, status
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    correlation_id: str = Field(..., description="Request correlation ID")
    timestamp: str = Field(..., description="Error timestamp (ISO 8601)")


def build_error_response(error_code: str, message: str, correlation_id: str) -> ErrorResponse:
    """Build an error body stamped with the current time."""
    return ErrorResponse(
        error=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


def http_error(
    status_code: int,
    error_code: str,
    message: str,
    correlation_id: str,
) -> HTTPException:
    """Return an HTTPException carrying an ErrorResponse as its detail."""
    return HTTPException(
        status_code=status_code,
        detail=build_error_response(error_code, message, correlation_id).model_dump(),
    )


ERROR_RESPONSES = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
    409: {"description": "Conflict", "model": ErrorResponse},
    500: {"description": "Internal error", "model": ErrorResponse},
}


def internal_error(correlation_id: str) -> HTTPException:
    """Return the 500 raised for unexpected failures."""
    return http_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        correlation_id,
    )
