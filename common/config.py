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

"""Configuration loader for SiteDock."""

import configparser
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/sitedock/sitedock.ini"

GIB = 1024 * 1024 * 1024


@dataclass
class ArchiveConfig:
    """Upload and extraction limits."""
    upload_root: str = "/srv/sitedock/uploads"
    max_upload_bytes: int = 2 * GIB
    max_archive_entries: int = 10000
    max_archive_uncompressed_bytes: int = 5 * GIB


@dataclass
class RuntimeConfig:
    """Entry artifact naming used by the runtime detector."""
    entry_file: str = "WebModel.Server.dll"
    secondary_config_file: str = "appsettings.json"
    search_depth: int = 2


@dataclass
class ProvisioningConfig:
    """Isolation runtime configuration."""
    docker_binary: str = "/usr/bin/docker"
    resource_prefix: str = "sitedock-site"
    base_port: int = 8100
    max_port: int = 8999
    port_retry_attempts: int = 5
    app_port: int = 5001
    proxy_image: str = "sitedock/auth-proxy:latest"
    proxy_port: int = 3000
    internal_network: bool = True
    command_timeout_seconds: int = 120
    build_timeout_seconds: int = 900


@dataclass
class EdgeConfig:
    """Reverse proxy and certificate authority configuration."""
    sites_dir: str = "/etc/nginx/sites-enabled"
    backup_dir: str = "/var/lib/sitedock/proxy-backups"
    nginx_binary: str = "/usr/sbin/nginx"
    certbot_binary: str = "/usr/bin/certbot"
    letsencrypt_email: str = "admin@example.com"
    certificate_timeout_seconds: int = 300
    certificate_retry_interval_seconds: int = 0


@dataclass
class PrivilegedConfig:
    """Privileged helper invocation."""
    mode: str = "sudo"
    sudo_binary: str = "/usr/bin/sudo"
    helper_path: str = "/usr/local/bin/sitedock-helper"
    timeout_seconds: int = 600


@dataclass
class WorkerConfig:
    """Deployment worker settings."""
    poll_interval_seconds: float = 2.0


@dataclass
class SitesConfig:
    """Site registration defaults."""
    default_base_domain: str = "sites.example.com"
    default_access_user: str = "viewer"


@dataclass
class SecurityConfig:
    """Credential hashing strategy."""
    password_hasher: str = "argon2"
    pbkdf2_iterations: int = 100000


@dataclass
class SiteDockConfig:
    """SiteDock configuration."""
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    provisioning: ProvisioningConfig = field(default_factory=ProvisioningConfig)
    edge: EdgeConfig = field(default_factory=EdgeConfig)
    privileged: PrivilegedConfig = field(default_factory=PrivilegedConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    sites: SitesConfig = field(default_factory=SitesConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


_SECTIONS = {
    "archive": ArchiveConfig,
    "runtime": RuntimeConfig,
    "provisioning": ProvisioningConfig,
    "edge": EdgeConfig,
    "privileged": PrivilegedConfig,
    "worker": WorkerConfig,
    "sites": SitesConfig,
    "security": SecurityConfig,
}

_ALLOWED_PRIVILEGED_MODES = ("sudo", "in_process")
_ALLOWED_HASHERS = ("argon2", "pbkdf2")


def _read_section(parser: configparser.ConfigParser, name: str, section_cls):
    """Build a section dataclass, converting options to the default's type."""
    section = section_cls()
    if not parser.has_section(name):
        return section

    for option in parser.options(name):
        if not hasattr(section, option):
            raise ValueError(f"Unknown option '{option}' in section [{name}]")
        current = getattr(section, option)
        if isinstance(current, bool):
            value = parser.getboolean(name, option)
        elif isinstance(current, int):
            value = parser.getint(name, option)
        elif isinstance(current, float):
            value = parser.getfloat(name, option)
        else:
            value = parser.get(name, option).strip()
        setattr(section, option, value)
    return section


def _validate(config: SiteDockConfig) -> None:
    prov = config.provisioning
    if not 1024 <= prov.base_port <= prov.max_port <= 65535:
        raise ValueError(
            f"Invalid port range: base_port={prov.base_port}, max_port={prov.max_port}"
        )
    if prov.port_retry_attempts < 1:
        raise ValueError("port_retry_attempts must be at least 1")
    if config.archive.max_upload_bytes <= 0:
        raise ValueError("max_upload_bytes must be positive")
    if config.archive.max_archive_entries <= 0:
        raise ValueError("max_archive_entries must be positive")
    if config.privileged.mode not in _ALLOWED_PRIVILEGED_MODES:
        raise ValueError(
            f"privileged mode must be one of {_ALLOWED_PRIVILEGED_MODES}, "
            f"got '{config.privileged.mode}'"
        )
    if config.security.password_hasher not in _ALLOWED_HASHERS:
        raise ValueError(
            f"password_hasher must be one of {_ALLOWED_HASHERS}, "
            f"got '{config.security.password_hasher}'"
        )
    if config.runtime.search_depth < 0:
        raise ValueError("search_depth cannot be negative")


def load_config(config_path: Optional[str] = None) -> SiteDockConfig:
    """Load SiteDock configuration from INI file.

    Args:
        config_path: Path to configuration file. If None, uses SITEDOCK_CONFIG_PATH
                    environment variable or the default path.

    Returns:
        SiteDockConfig instance. Options absent from the file keep their defaults.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv("SITEDOCK_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser()
    parser.read(config_file)

    if not parser.sections():
        raise ValueError(f"Empty configuration file: {config_file}")

    unknown = set(parser.sections()) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown configuration sections: {sorted(unknown)}")

    try:
        sections = {
            name: _read_section(parser, name, section_cls)
            for name, section_cls in _SECTIONS.items()
        }
    except configparser.Error as exc:
        raise ValueError(f"Invalid configuration file {config_file}: {exc}") from exc

    config = SiteDockConfig(**sections)
    _validate(config)
    return config


def load_config_or_default(config_path: Optional[str] = None) -> SiteDockConfig:
    """Load configuration, falling back to built-in defaults when the file is absent."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        logger.warning("Configuration file not found, using built-in defaults")
        return SiteDockConfig()
