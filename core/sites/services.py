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

"""Site naming and registration services."""

import logging
import re
import unicodedata
from typing import Optional

from core.sites.entities import Tenant
from core.sites.exceptions import DomainConflictError, InvalidSiteInputError
from core.sites.repositories import SiteRepository
from core.sites.value_objects import Domain, Slug

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(Slug.PATTERN)
_SUBDOMAIN_LABEL = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$")


def generate_slug(name: str) -> str:
    """Derive a URL-safe slug from a display name.

    Applying it to its own output returns the same value.
    """
    decomposed = unicodedata.normalize("NFKD", name.lower())
    text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9\s-]", "", text).strip()
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def is_valid_slug(slug: str) -> bool:
    """Check slug format."""
    return bool(_SLUG_PATTERN.fullmatch(slug))


def _truncate_slug(slug: str, length: int) -> str:
    return slug[:length].rstrip("-")


class SiteRegistrationService:
    """Derives unique slugs and domains for new sites."""

    def __init__(self, site_repo: SiteRepository, default_base_domain: str) -> None:
        self.site_repo = site_repo
        self.default_base_domain = default_base_domain

    def unique_slug(self, name: str) -> str:
        """Return a slug for name that no other site uses.

        The slug, including any numeric suffix, never exceeds Slug.MAX_LENGTH.

        Raises:
            InvalidSiteInputError: If no valid slug can be derived.
        """
        base = _truncate_slug(generate_slug(name), Slug.MAX_LENGTH)
        if not base or not is_valid_slug(base):
            raise InvalidSiteInputError("Invalid site name - cannot generate valid slug")

        candidate = base
        counter = 1
        while self.site_repo.slug_exists(candidate):
            suffix = f"-{counter}"
            candidate = _truncate_slug(base, Slug.MAX_LENGTH - len(suffix)) + suffix
            counter += 1
        return candidate

    def build_domain(self, subdomain: str, tenant: Optional[Tenant] = None) -> Domain:
        """Combine a subdomain with the tenant's (or default) base domain.

        Raises:
            InvalidSiteInputError: If the resulting domain is malformed.
        """
        labels = (subdomain or "").strip().lower().split(".")
        if not all(_SUBDOMAIN_LABEL.match(label) for label in labels):
            raise InvalidSiteInputError(f"Invalid subdomain: {subdomain!r}")

        base = tenant.domain if tenant is not None else self.default_base_domain
        try:
            return Domain(f"{'.'.join(labels)}.{base}")
        except ValueError as exc:
            raise InvalidSiteInputError(str(exc)) from exc

    def ensure_domain_available(self, domain: Domain) -> None:
        """Raise DomainConflictError when another site holds the domain."""
        if self.site_repo.find_by_domain(domain.value) is not None:
            logger.warning("Domain conflict for %s", domain.value)
            raise DomainConflictError(domain.value)
