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

"""Unit tests for the privileged executors."""

import pytest

from core.privileged.exceptions import (
    OperationNotAllowedError,
    ParameterRejectedError,
    PrivilegedOperationError,
)
from infra.privileged import sudo_executor
from infra.privileged.in_process_executor import InProcessPrivilegedExecutor
from infra.privileged.sudo_executor import SudoPrivilegedExecutor
from infra.process import CommandResult
from tests.mocks.site_builders import SITE_ID


class TestSudoExecutor:
    """sudo invocation of the helper."""

    @pytest.fixture
    def invocations(self, monkeypatch):
        calls = []
        exit_codes = []

        async def fake_run_command(argv, timeout_seconds, env=None, stdin_data=None):
            calls.append(list(argv))
            code = exit_codes.pop(0) if exit_codes else 0
            return CommandResult(exit_code=code, stdout="done\n", stderr="boom" if code else "")

        monkeypatch.setattr(sudo_executor, "run_command", fake_run_command)
        return calls, exit_codes

    @pytest.mark.asyncio
    async def test_argv(self, invocations) -> None:
        calls, _ = invocations
        executor = SudoPrivilegedExecutor("/usr/local/bin/sitedock-helper", "/usr/bin/sudo")

        output = await executor.run("write-proxy-rule", "shop.example.com", "8100")

        assert output == "done\n"
        assert calls == [[
            "/usr/bin/sudo", "-n", "/usr/local/bin/sitedock-helper",
            "write-proxy-rule", "shop.example.com", "8100",
        ]]

    @pytest.mark.asyncio
    async def test_rejected_before_sudo(self, invocations) -> None:
        calls, _ = invocations
        executor = SudoPrivilegedExecutor("/usr/local/bin/sitedock-helper")

        with pytest.raises(ParameterRejectedError):
            await executor.run("remove-uploads", "../../etc")
        with pytest.raises(OperationNotAllowedError):
            await executor.run("rm", "-rf", "/")

        assert calls == []

    @pytest.mark.asyncio
    async def test_failure(self, invocations) -> None:
        _, exit_codes = invocations
        exit_codes.append(1)
        executor = SudoPrivilegedExecutor("/usr/local/bin/sitedock-helper")

        with pytest.raises(PrivilegedOperationError) as exc_info:
            await executor.run("reload-proxy")

        assert exc_info.value.exit_code == 1
        assert "boom" in exc_info.value.output


class TestInProcessExecutor:
    """Direct dispatch to helper operations."""

    @pytest.mark.asyncio
    async def test_remove_uploads(self, sitedock_config, upload_layout) -> None:
        site_dir = upload_layout.site_dir(SITE_ID)
        site_dir.mkdir(parents=True)
        (site_dir / "upload.zip").write_bytes(b"PK")

        await InProcessPrivilegedExecutor(sitedock_config).run("remove-uploads", SITE_ID)

        assert not site_dir.exists()

    @pytest.mark.asyncio
    async def test_helper_failure_becomes_operation_error(self, sitedock_config) -> None:
        sitedock_config.edge.nginx_binary = "false"

        with pytest.raises(PrivilegedOperationError) as exc_info:
            await InProcessPrivilegedExecutor(sitedock_config).run("reload-proxy")

        assert exc_info.value.exit_code == 1
