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

"""Value objects for runtime detection.

All value objects are immutable and defined by their values, not identity.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class RuntimeTag(str, Enum):
    """Closed set of supported application runtimes.

    Members are ordered newest first; the first member is the fallback
    used when nothing in the content identifies the runtime.
    """

    ASPNET_8 = "aspnet-8"
    ASPNET_6 = "aspnet-6"
    ASPNETCORE_3_1 = "aspnetcore-3.1"

    @property
    def base_image(self) -> str:
        """Container base image for this runtime."""
        return _BASE_IMAGES[self]

    @classmethod
    def newest(cls) -> "RuntimeTag":
        """Return the newest supported runtime."""
        return cls.ASPNET_8


_BASE_IMAGES = {
    RuntimeTag.ASPNET_8: "mcr.microsoft.com/dotnet/aspnet:8.0",
    RuntimeTag.ASPNET_6: "mcr.microsoft.com/dotnet/aspnet:6.0",
    RuntimeTag.ASPNETCORE_3_1: "mcr.microsoft.com/dotnet/core/aspnet:3.1",
}


class Confidence(str, Enum):
    """How the runtime tag was determined.

    HIGH: Read from the runtime descriptor.
    MEDIUM: Inferred from a secondary configuration file.
    LOW: Defaulted to the newest runtime.
    """

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class ApplicationLocation:
    """Where the entry artifact lives inside the extracted content.

    Attributes:
        app_dir: Directory containing the entry artifact.
        subdir_offset: Path of app_dir relative to the extraction root,
            or None when the artifact sits at the root.
    """

    app_dir: Path
    subdir_offset: Optional[str] = None


@dataclass(frozen=True)
class RuntimeDetection:
    """Result of classifying an application directory.

    Attributes:
        tag: Detected runtime tag.
        confidence: How the tag was determined.
        source: File the decision was based on, or "default".
        framework_version: Version string read from the descriptor, if any.
    """

    tag: RuntimeTag
    confidence: Confidence
    source: str
    framework_version: Optional[str] = None
