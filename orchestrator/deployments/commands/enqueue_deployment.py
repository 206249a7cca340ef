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

"""EnqueueDeployment command DTO."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EnqueueDeploymentCommand:
    """Command to queue a deployment of an uploaded archive.

    Attributes:
        site_id: Target site.
        artifact_path: Absolute path of the stored upload.
        access_user: Sidecar login name; defaults to the site's current one.
        access_secret: Sidecar password; defaults to the site's current one.
        correlation_id: Request correlation identifier for tracing.
    """

    site_id: str
    artifact_path: str
    access_user: Optional[str] = None
    access_secret: Optional[str] = None
    correlation_id: Optional[str] = None

    def __repr__(self) -> str:
        """Return representation with the secret masked."""
        return (
            f"EnqueueDeploymentCommand(site_id={self.site_id!r}, "
            f"artifact_path={self.artifact_path!r}, access_user={self.access_user!r}, "
            f"correlation_id={self.correlation_id!r})"
        )
