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

"""FastAPI dependency providers for Sites API."""

from api.dependencies import _get_container
from orchestrator.sites.use_cases import (
    CreateSiteUseCase,
    DeleteSiteUseCase,
    GetSiteUseCase,
    StartSiteUseCase,
    StopSiteUseCase,
)


def get_create_site_use_case() -> CreateSiteUseCase:
    """Provide create-site use case."""
    return _get_container().create_site_use_case()


def get_get_site_use_case() -> GetSiteUseCase:
    """Provide get-site use case."""
    return _get_container().get_site_use_case()


def get_start_site_use_case() -> StartSiteUseCase:
    """Provide start-site use case."""
    return _get_container().start_site_use_case()


def get_stop_site_use_case() -> StopSiteUseCase:
    """Provide stop-site use case."""
    return _get_container().stop_site_use_case()


def get_delete_site_use_case() -> DeleteSiteUseCase:
    """Provide delete-site use case."""
    return _get_container().delete_site_use_case()
