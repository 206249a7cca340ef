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

"""Builders for zip archives used across tests."""

import json
import zipfile
from pathlib import Path
from typing import Any, Dict, Optional

ENTRY_FILE = "WebModel.Server.dll"
SETTINGS_FILE = "appsettings.json"


def write_zip(path: Path, members: Dict[str, bytes]) -> Path:
    """Write a zip archive with the given member names and contents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return path


def application_members(
    prefix: str = "",
    framework_version: Optional[str] = "8.0.0",
    settings: Optional[Dict[str, Any]] = None,
) -> Dict[str, bytes]:
    """Members of a minimal published application, optionally with settings."""
    members = {
        f"{prefix}{ENTRY_FILE}": b"MZ fake assembly",
        f"{prefix}wwwroot/index.html": b"<html></html>",
    }
    if framework_version is not None:
        descriptor = {
            "runtimeOptions": {
                "tfm": "net8.0",
                "framework": {"name": "Microsoft.AspNetCore.App", "version": framework_version},
            }
        }
        members[f"{prefix}WebModel.Server.runtimeconfig.json"] = json.dumps(descriptor).encode()
    if settings is not None:
        members[f"{prefix}{SETTINGS_FILE}"] = json.dumps(settings).encode()
    return members


def application_zip(path: Path, prefix: str = "", framework_version: Optional[str] = "8.0.0") -> Path:
    """Write a deployable application archive."""
    return write_zip(path, application_members(prefix, framework_version))
