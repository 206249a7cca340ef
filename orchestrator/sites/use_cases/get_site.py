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

"""GetSite use case implementation."""

from core.sites.entities import Site
from core.sites.exceptions import SiteNotFoundError
from core.sites.repositories import SiteRepository

from orchestrator.sites.commands import SiteCommand
from orchestrator.sites.dtos import SiteResponse


def load_site(site_repo: SiteRepository, command: SiteCommand) -> Site:
    """Return the site named by the command or raise SiteNotFoundError."""
    site = site_repo.find_by_id(command.site_id)
    if site is None:
        raise SiteNotFoundError(command.site_id, correlation_id=command.correlation_id)
    return site


class GetSiteUseCase:
    """Use case for reading a single site."""

    def __init__(self, site_repo: SiteRepository) -> None:
        self._site_repo = site_repo

    def execute(self, command: SiteCommand) -> SiteResponse:
        """Return the site.

        Raises:
            SiteNotFoundError: If the site does not exist.
        """
        return SiteResponse.from_entity(load_site(self._site_repo, command))
