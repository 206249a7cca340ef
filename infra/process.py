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

"""Asynchronous subprocess execution with argv arrays and timeouts."""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = -1


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    exit_code: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Whether the command exited zero."""
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined stderr and stdout, stderr first."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


async def run_command(
    argv: Sequence[str],
    timeout_seconds: float,
    env: Optional[Dict[str, str]] = None,
    stdin_data: Optional[str] = None,
) -> CommandResult:
    """Run argv without a shell and wait for it.

    Args:
        argv: Program and arguments.
        timeout_seconds: Wall-clock limit; the process is terminated, then killed.
        env: Extra environment variables merged over the current environment.
        stdin_data: Text written to the process's stdin.

    Returns:
        CommandResult. A timeout yields exit code -1 and timed_out=True.
    """
    child_env = None
    if env:
        child_env = dict(os.environ)
        child_env.update(env)

    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.PIPE if stdin_data is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=child_env,
    )

    payload = stdin_data.encode("utf-8") if stdin_data is not None else None
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(payload), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        proc.terminate()
        try:
            await asyncio.wait_for(proc.wait(), timeout=5)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
        logger.error("Command timed out after %ss: %s", timeout_seconds, argv[0])
        return CommandResult(
            exit_code=TIMEOUT_EXIT_CODE,
            stdout="",
            stderr=f"Command timed out after {timeout_seconds} seconds",
            timed_out=True,
        )

    return CommandResult(
        exit_code=proc.returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )
