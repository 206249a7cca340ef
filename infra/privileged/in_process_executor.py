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

"""Privileged executor that calls the helper dispatcher in-process.

Used for development where the service already runs with the rights it
needs (or against scratch directories); the same allowlist applies.
"""

import logging
from typing import Union

from common.config import SiteDockConfig
from core.privileged.exceptions import PrivilegedOperationError
from core.privileged.operations import PrivilegedOperation, mask_arguments, validate_invocation
from core.privileged.ports import PrivilegedExecutor
from helper.main import EXIT_FAILED
from helper.operations import HelperOperationError, dispatch

logger = logging.getLogger(__name__)


class InProcessPrivilegedExecutor(PrivilegedExecutor):
    """Validates, then runs the helper operation directly."""

    def __init__(self, config: SiteDockConfig) -> None:
        self.config = config

    async def run(self, operation: Union[PrivilegedOperation, str], *args: str) -> str:
        argv = validate_invocation(operation, list(args))
        op_name = argv[0]
        logger.info(
            "Running privileged operation in-process: %s %s",
            op_name,
            " ".join(mask_arguments(op_name, args)),
        )
        try:
            lines = await dispatch(self.config, op_name, argv[1:])
        except HelperOperationError as exc:
            output = "\n".join(part for part in (exc.message, exc.output) if part)
            raise PrivilegedOperationError(op_name, EXIT_FAILED, output) from exc
        return "\n".join(lines) + ("\n" if lines else "")
