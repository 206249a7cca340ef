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

"""Site use cases."""

from orchestrator.sites.use_cases.control_site import StartSiteUseCase, StopSiteUseCase
from orchestrator.sites.use_cases.create_site import CreateSiteUseCase
from orchestrator.sites.use_cases.delete_site import DeleteSiteUseCase, TeardownSiteUseCase
from orchestrator.sites.use_cases.get_site import GetSiteUseCase
from orchestrator.sites.use_cases.reconcile_status import ReconcileContainerStatusUseCase

__all__ = [
    "CreateSiteUseCase",
    "DeleteSiteUseCase",
    "GetSiteUseCase",
    "ReconcileContainerStatusUseCase",
    "StartSiteUseCase",
    "StopSiteUseCase",
    "TeardownSiteUseCase",
]
