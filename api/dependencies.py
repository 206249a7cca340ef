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

"""Common dependencies for API endpoints."""

import logging
import re
from typing import Annotated, Optional

from fastapi import Header

logger = logging.getLogger(__name__)

_CORRELATION_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def _get_container():
    """Lazy import of container to avoid circular imports."""
    from container import container  # pylint: disable=import-outside-toplevel
    return container


def get_correlation_id(
    x_correlation_id: Annotated[Optional[str], Header(
        alias="X-Correlation-Id",
        description="Request tracing ID",
    )] = None,
) -> str:
    """Return provided correlation ID or generate one."""
    if x_correlation_id and _CORRELATION_ID_PATTERN.fullmatch(x_correlation_id):
        return x_correlation_id
    return _get_container().uuid_generator().generate()
