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

"""Command addressing an existing site."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SiteCommand:
    """Command naming the site an operation applies to.

    Attributes:
        site_id: Site identifier from the URL path.
        correlation_id: Request correlation identifier for tracing.
    """

    site_id: str
    correlation_id: Optional[str] = None
