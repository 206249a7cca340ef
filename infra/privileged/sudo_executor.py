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

"""Privileged executor that runs the helper through sudo."""

import logging
from typing import Union

from core.privileged.exceptions import PrivilegedOperationError
from core.privileged.operations import PrivilegedOperation, mask_arguments, validate_invocation
from core.privileged.ports import PrivilegedExecutor
from infra.process import run_command

logger = logging.getLogger(__name__)


class SudoPrivilegedExecutor(PrivilegedExecutor):
    """Runs ``sudo -n <helper> <operation> <args...>`` as an argv array.

    sudo is invoked non-interactively; a missing sudoers rule fails fast
    instead of waiting for a password.
    """

    def __init__(
        self,
        helper_path: str,
        sudo_binary: str = "sudo",
        timeout_seconds: int = 600,
    ) -> None:
        self.helper_path = helper_path
        self.sudo_binary = sudo_binary
        self.timeout_seconds = timeout_seconds

    async def run(self, operation: Union[PrivilegedOperation, str], *args: str) -> str:
        argv = validate_invocation(operation, list(args))
        op_name = argv[0]
        masked = " ".join(mask_arguments(op_name, args))
        logger.info("Running privileged operation: %s %s", op_name, masked)

        result = await run_command(
            [self.sudo_binary, "-n", self.helper_path, *argv],
            timeout_seconds=self.timeout_seconds,
        )
        if not result.ok:
            logger.error(
                "Privileged operation failed: %s %s (exit code %d)",
                op_name,
                masked,
                result.exit_code,
            )
            raise PrivilegedOperationError(op_name, result.exit_code, result.output)
        return result.stdout
