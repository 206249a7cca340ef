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

"""Runtime detection for extracted application content."""

import json
import logging
from collections import deque
from pathlib import Path
from typing import Iterable, Optional, Union

import jsonschema

from core.runtime.exceptions import EntryArtifactNotFoundError
from core.runtime.value_objects import (
    ApplicationLocation,
    Confidence,
    RuntimeDetection,
    RuntimeTag,
)

logger = logging.getLogger(__name__)

_FRAMEWORK_SCHEMA = {
    "type": "object",
    "required": ["version"],
    "properties": {
        "name": {"type": "string"},
        "version": {"type": "string", "minLength": 1},
    },
}

RUNTIME_DESCRIPTOR_SCHEMA = {
    "type": "object",
    "required": ["runtimeOptions"],
    "properties": {
        "runtimeOptions": {
            "type": "object",
            "anyOf": [
                {"required": ["framework"]},
                {"required": ["frameworks"]},
            ],
            "properties": {
                "framework": _FRAMEWORK_SCHEMA,
                "frameworks": {
                    "type": "array",
                    "minItems": 1,
                    "items": _FRAMEWORK_SCHEMA,
                },
            },
        },
    },
}

# Version prefix of the runtime descriptor mapped to the runtime tag.
_VERSION_PREFIXES = (
    ("8.", RuntimeTag.ASPNET_8),
    ("6.", RuntimeTag.ASPNET_6),
    ("3.1", RuntimeTag.ASPNETCORE_3_1),
)

# Target framework monikers searched for in the secondary config file.
_MONIKERS = (
    ("net8.0", RuntimeTag.ASPNET_8),
    ("net6.0", RuntimeTag.ASPNET_6),
    ("netcoreapp3.1", RuntimeTag.ASPNETCORE_3_1),
)


def tag_for_framework_version(version: str) -> Optional[RuntimeTag]:
    """Map a framework version string to a runtime tag, or None if unsupported."""
    for prefix, tag in _VERSION_PREFIXES:
        if version.startswith(prefix):
            return tag
    return None


class RuntimeDetector:
    """Locates the entry artifact and classifies the application runtime.

    Args:
        entry_file: File name of the entry artifact (e.g. WebModel.Server.dll).
        secondary_config_file: File scanned for framework monikers when the
            runtime descriptor is missing or unreadable.
        search_depth: Number of directory levels below the root searched
            for the entry artifact.
    """

    def __init__(
        self,
        entry_file: str,
        secondary_config_file: str = "appsettings.json",
        search_depth: int = 2,
    ) -> None:
        self.entry_file = entry_file
        self.secondary_config_file = secondary_config_file
        self.search_depth = search_depth

    @property
    def descriptor_file(self) -> str:
        """Name of the runtime descriptor that accompanies the entry artifact."""
        return f"{Path(self.entry_file).stem}.runtimeconfig.json"

    def locate(self, root: Union[str, Path]) -> ApplicationLocation:
        """Find the directory holding the entry artifact.

        The root is checked first, then subdirectories breadth-first in
        sorted order down to search_depth levels.

        Raises:
            EntryArtifactNotFoundError: If the artifact is not found.
        """
        root = Path(root)
        if (root / self.entry_file).is_file():
            return ApplicationLocation(app_dir=root, subdir_offset=None)

        pending = deque((child, 1) for child in self._subdirectories(root))
        while pending:
            directory, depth = pending.popleft()
            if (directory / self.entry_file).is_file():
                offset = directory.relative_to(root).as_posix()
                logger.info("Entry artifact found in subdirectory %s", offset)
                return ApplicationLocation(app_dir=directory, subdir_offset=offset)
            if depth < self.search_depth:
                pending.extend((child, depth + 1) for child in self._subdirectories(directory))

        raise EntryArtifactNotFoundError(self.entry_file, self.search_depth)

    def classify(self, app_dir: Union[str, Path]) -> RuntimeDetection:
        """Classify the runtime of the application in app_dir. Never raises."""
        app_dir = Path(app_dir)

        detection = self._from_descriptor(app_dir / self.descriptor_file)
        if detection is not None:
            return detection

        detection = self._from_secondary_config(app_dir / self.secondary_config_file)
        if detection is not None:
            return detection

        tag = RuntimeTag.newest()
        logger.warning("Could not detect runtime, defaulting to %s", tag.value)
        return RuntimeDetection(tag=tag, confidence=Confidence.LOW, source="default")

    def detect(self, root: Union[str, Path]):
        """Locate the entry artifact and classify its runtime.

        Returns:
            Tuple of (ApplicationLocation, RuntimeDetection).
        """
        location = self.locate(root)
        return location, self.classify(location.app_dir)

    def _from_descriptor(self, path: Path) -> Optional[RuntimeDetection]:
        if not path.is_file():
            return None
        try:
            document = json.loads(path.read_text(encoding="utf-8-sig"))
            jsonschema.validate(instance=document, schema=RUNTIME_DESCRIPTOR_SCHEMA)
        except (OSError, ValueError, jsonschema.ValidationError) as exc:
            logger.warning("Could not read %s: %s", path.name, exc)
            return None

        for version in self._framework_versions(document["runtimeOptions"]):
            tag = tag_for_framework_version(version)
            if tag is not None:
                logger.info("Found framework version %s in %s", version, path.name)
                return RuntimeDetection(
                    tag=tag,
                    confidence=Confidence.HIGH,
                    source=path.name,
                    framework_version=version,
                )
        logger.warning("No supported framework version in %s", path.name)
        return None

    def _from_secondary_config(self, path: Path) -> Optional[RuntimeDetection]:
        if not path.is_file():
            return None
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Could not read %s: %s", path.name, exc)
            return None

        for moniker, tag in _MONIKERS:
            if moniker in content:
                return RuntimeDetection(tag=tag, confidence=Confidence.MEDIUM, source=path.name)
        return None

    @staticmethod
    def _framework_versions(options: dict) -> Iterable[str]:
        if "framework" in options:
            yield options["framework"]["version"]
        for framework in options.get("frameworks", []):
            yield framework["version"]

    @staticmethod
    def _subdirectories(directory: Path):
        try:
            children = sorted(directory.iterdir())
        except OSError as exc:
            logger.warning("Error searching directory %s: %s", directory, exc)
            return []
        return [child for child in children if child.is_dir() and not child.is_symlink()]
