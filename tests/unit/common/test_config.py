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

"""Unit tests for the INI configuration loader."""

import textwrap

import pytest

from common.config import SiteDockConfig, load_config, load_config_or_default


def _ini(tmp_path, text):
    path = tmp_path / "sitedock.ini"
    path.write_text(textwrap.dedent(text))
    return str(path)


class TestLoadConfig:
    """load_config"""

    def test_partial_file_keeps_defaults(self, tmp_path) -> None:
        path = _ini(tmp_path, """
            [provisioning]
            base_port = 9000
            max_port = 9100
            internal_network = false

            [worker]
            poll_interval_seconds = 0.5
        """)

        config = load_config(path)

        assert config.provisioning.base_port == 9000
        assert config.provisioning.internal_network is False
        assert config.worker.poll_interval_seconds == 0.5
        assert config.archive == SiteDockConfig().archive
        assert config.runtime.entry_file == "WebModel.Server.dll"

    def test_env_var_path(self, tmp_path, monkeypatch) -> None:
        path = _ini(tmp_path, """
            [sites]
            default_base_domain = apps.example.org
        """)
        monkeypatch.setenv("SITEDOCK_CONFIG_PATH", path)

        assert load_config().sites.default_base_domain == "apps.example.org"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.ini"))

    def test_empty_file(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="Empty configuration"):
            load_config(_ini(tmp_path, ""))

    def test_unknown_section(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="Unknown configuration sections"):
            load_config(_ini(tmp_path, "[database]\nurl = x\n"))

    def test_unknown_option(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="Unknown option 'colour'"):
            load_config(_ini(tmp_path, "[edge]\ncolour = blue\n"))

    def test_non_numeric_value(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            load_config(_ini(tmp_path, "[provisioning]\nbase_port = many\n"))

    @pytest.mark.parametrize(
        "text,message",
        [
            ("[provisioning]\nbase_port = 80\n", "Invalid port range"),
            ("[provisioning]\nbase_port = 9000\nmax_port = 8999\n", "Invalid port range"),
            ("[provisioning]\nport_retry_attempts = 0\n", "port_retry_attempts"),
            ("[privileged]\nmode = root\n", "privileged mode"),
            ("[security]\npassword_hasher = md5\n", "password_hasher"),
            ("[runtime]\nsearch_depth = -1\n", "search_depth"),
        ],
    )
    def test_invalid_values(self, tmp_path, text, message) -> None:
        with pytest.raises(ValueError, match=message):
            load_config(_ini(tmp_path, text))


def test_load_config_or_default_falls_back(tmp_path) -> None:
    config = load_config_or_default(str(tmp_path / "absent.ini"))

    assert config == SiteDockConfig()


def test_load_config_or_default_propagates_invalid_file(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_config_or_default(_ini(tmp_path, "[privileged]\nmode = root\n"))
