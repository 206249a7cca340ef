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

"""Storage of uploaded archives before they are queued."""

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from core.archive.value_objects import UploadLayout

logger = logging.getLogger(__name__)

_CHUNK_BYTES = 1024 * 1024


class UploadStore:
    """Streams an upload to ``<upload_root>/<site_id>/upload-<uuid>.zip``.

    Writing stops one byte past the size ceiling so an oversized upload
    never fills the disk; the validator then rejects it by size.
    """

    def __init__(self, layout: UploadLayout, max_upload_bytes: int) -> None:
        self._layout = layout
        self._max_upload_bytes = max_upload_bytes

    async def save(self, site_id: str, upload: UploadFile) -> Path:
        """Write the upload to disk and return its path."""
        site_dir = self._layout.site_dir(site_id)
        site_dir.mkdir(parents=True, exist_ok=True, mode=0o750)
        target = self._layout.upload_path(site_id, uuid.uuid4().hex)

        written = 0
        try:
            with open(target, "xb") as handle:
                while written <= self._max_upload_bytes:
                    chunk = await upload.read(_CHUNK_BYTES)
                    if not chunk:
                        break
                    remaining = self._max_upload_bytes + 1 - written
                    handle.write(chunk[:remaining])
                    written += min(len(chunk), remaining)
        except OSError:
            target.unlink(missing_ok=True)
            raise

        logger.info("Stored upload of %d bytes at %s", written, target)
        return target
