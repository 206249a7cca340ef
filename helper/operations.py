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

"""Host operations performed by the privileged helper.

Every function here assumes its arguments already passed
core.privileged.operations.validate_invocation. Operations are idempotent:
removing something that is absent succeeds.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Awaitable, Callable, Dict, List

from common.config import SiteDockConfig
from core.archive.exceptions import ArchiveDomainError
from core.archive.services import ArchiveValidator, SafeArchiveExtractor
from core.archive.value_objects import ArchiveLimits, UploadLayout
from core.edge.templates import render_proxy_rule, rule_filename
from core.privileged.operations import PrivilegedOperation, validate_invocation
from infra.process import run_command

logger = logging.getLogger(__name__)

_BACKUP_SUFFIX = ".bak"
_NEW_RULE_SUFFIX = ".new"
_MISSING_CERTIFICATE_MARKERS = ("no certificate found", "no certificate matching")
_SKIP_AUTHENTICATION_SECTIONS = ("StartupSettings", "ViFlow")


class HelperOperationError(Exception):
    """A privileged operation ran and failed."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.output = output


def _layout(config: SiteDockConfig) -> UploadLayout:
    return UploadLayout(config.archive.upload_root)


def _inside(path: Path, root: Path) -> bool:
    resolved = path.resolve()
    root = root.resolve()
    return resolved == root or root in resolved.parents


def _require_plain_site_dirs(config: SiteDockConfig, site_id: str) -> None:
    """Refuse a site whose upload or extraction directory is a symlink or escapes the upload root."""
    upload_root = Path(config.archive.upload_root)
    layout = _layout(config)
    for path in (layout.site_dir(site_id), layout.extraction_dir(site_id)):
        if path.is_symlink() or (path.exists() and not _inside(path, upload_root)):
            raise HelperOperationError(
                f"Upload directory of site {site_id} is not a plain directory"
            )


def _write_atomically(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def extract_archive(config: SiteDockConfig, site_id: str, archive_path: str) -> List[str]:
    """Validate and extract an uploaded archive into the site's extraction dir."""
    _require_plain_site_dirs(config, site_id)
    upload_dir = _layout(config).site_dir(site_id)
    archive = Path(archive_path)
    if archive.is_symlink() or not _inside(archive, upload_dir):
        raise HelperOperationError(f"Archive path is outside the upload directory of site {site_id}")

    try:
        ArchiveValidator().require_valid(archive, config.archive.max_upload_bytes)
        extractor = SafeArchiveExtractor(
            ArchiveLimits(
                max_entries=config.archive.max_archive_entries,
                max_uncompressed_bytes=config.archive.max_archive_uncompressed_bytes,
            )
        )
        report = extractor.extract(archive, _layout(config).extraction_dir(site_id))
    except ArchiveDomainError as exc:
        raise HelperOperationError(exc.message) from exc

    return [
        f"Extracted {report.entry_count} entries ({report.bytes_written} bytes) "
        f"to {report.destination}"
    ]


async def write_proxy_rule(config: SiteDockConfig, domain: str, port: str) -> List[str]:
    """Write the proxy rule for domain, journaling the previous state."""
    sites_dir = Path(config.edge.sites_dir)
    backup_dir = Path(config.edge.backup_dir)
    sites_dir.mkdir(parents=True, exist_ok=True)
    backup_dir.mkdir(parents=True, exist_ok=True)

    name = rule_filename(domain)
    rule = sites_dir / name
    lines = []
    if rule.exists():
        shutil.copy2(rule, backup_dir / f"{name}{_BACKUP_SUFFIX}")
        lines.append(f"Backed up previous rule {rule}")
    else:
        (backup_dir / f"{name}{_NEW_RULE_SUFFIX}").touch()

    content = render_proxy_rule(domain, int(port), config.edge.certificate_timeout_seconds)
    _write_atomically(rule, content)

    lines.append(f"Wrote proxy rule {rule}")
    return lines


async def trust_sidecar_auth(config: SiteDockConfig, site_id: str, app_subdir: str) -> List[str]:
    """Set SkipAuthentication in the settings file next to the entry artifact.

    The application then relies on the password sidecar in front of it
    instead of prompting for a second login.
    """
    _require_plain_site_dirs(config, site_id)
    root = _layout(config).extraction_dir(site_id)
    app_dir = root if app_subdir == "." else root.joinpath(*app_subdir.split("/"))
    settings_path = app_dir / config.runtime.secondary_config_file

    for path in (settings_path, *settings_path.parents):
        if path == root:
            break
        if path.is_symlink():
            raise HelperOperationError(f"Refusing to follow symbolic link {path}")
    if not settings_path.is_file():
        raise HelperOperationError(f"No {settings_path.name} found in {app_dir}")

    try:
        settings = json.loads(settings_path.read_text(encoding="utf-8-sig"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise HelperOperationError(f"{settings_path.name} is not valid JSON") from exc
    if not isinstance(settings, dict):
        raise HelperOperationError(f"{settings_path.name} does not contain a JSON object")

    for name in _SKIP_AUTHENTICATION_SECTIONS:
        section = settings.get(name)
        if not isinstance(section, dict):
            section = {}
        section["SkipAuthentication"] = True
        settings[name] = section

    _write_atomically(settings_path, json.dumps(settings, indent=2) + "\n")
    return [f"SkipAuthentication enabled in {settings_path}"]


def _restore_journal(config: SiteDockConfig) -> List[str]:
    sites_dir = Path(config.edge.sites_dir)
    backup_dir = Path(config.edge.backup_dir)
    if not backup_dir.is_dir():
        return []

    lines = []
    for entry in sorted(backup_dir.iterdir()):
        if entry.name.endswith(_BACKUP_SUFFIX):
            target = sites_dir / entry.name[: -len(_BACKUP_SUFFIX)]
            os.replace(entry, target)
            lines.append(f"Restored previous rule {target}")
        elif entry.name.endswith(_NEW_RULE_SUFFIX):
            target = sites_dir / entry.name[: -len(_NEW_RULE_SUFFIX)]
            target.unlink(missing_ok=True)
            entry.unlink()
            lines.append(f"Removed rejected rule {target}")
    return lines


def _clear_journal(config: SiteDockConfig) -> None:
    backup_dir = Path(config.edge.backup_dir)
    if not backup_dir.is_dir():
        return
    for entry in backup_dir.iterdir():
        if entry.name.endswith((_BACKUP_SUFFIX, _NEW_RULE_SUFFIX)):
            entry.unlink()


async def check_proxy_config(config: SiteDockConfig) -> List[str]:
    """Run the proxy's configuration test, rolling back pending rules on failure."""
    result = await run_command(
        [config.edge.nginx_binary, "-t"],
        timeout_seconds=config.privileged.timeout_seconds,
    )
    if not result.ok:
        restored = _restore_journal(config)
        raise HelperOperationError(
            "Proxy configuration test failed",
            "\n".join([result.output, *restored]),
        )
    _clear_journal(config)
    return ["Proxy configuration test passed"]


async def reload_proxy(config: SiteDockConfig) -> List[str]:
    """Reload the proxy."""
    result = await run_command(
        [config.edge.nginx_binary, "-s", "reload"],
        timeout_seconds=config.privileged.timeout_seconds,
    )
    if not result.ok:
        raise HelperOperationError("Proxy reload failed", result.output)
    return ["Proxy reloaded"]


async def remove_proxy_rule(config: SiteDockConfig, domain: str) -> List[str]:
    """Remove the proxy rule for domain if present."""
    rule = Path(config.edge.sites_dir) / rule_filename(domain)
    if not rule.exists():
        return [f"No proxy rule for {domain}"]
    rule.unlink()
    return [f"Removed proxy rule {rule}"]


async def request_certificate(config: SiteDockConfig, domain: str, email: str) -> List[str]:
    """Obtain a certificate and let the proxy plugin install the redirect."""
    result = await run_command(
        [
            config.edge.certbot_binary,
            "--nginx",
            "-d", domain,
            "--non-interactive",
            "--agree-tos",
            "-m", email,
            "--redirect",
        ],
        timeout_seconds=config.edge.certificate_timeout_seconds,
    )
    if not result.ok:
        raise HelperOperationError(f"Certificate request failed for {domain}", result.output)
    return [f"Certificate issued for {domain}"]


async def delete_certificate(config: SiteDockConfig, domain: str) -> List[str]:
    """Delete the certificate for domain if present."""
    result = await run_command(
        [config.edge.certbot_binary, "delete", "--cert-name", domain, "--non-interactive"],
        timeout_seconds=config.edge.certificate_timeout_seconds,
    )
    if result.ok:
        return [f"Certificate deleted for {domain}"]
    if any(marker in result.output.lower() for marker in _MISSING_CERTIFICATE_MARKERS):
        return [f"No certificate for {domain}"]
    raise HelperOperationError(f"Certificate deletion failed for {domain}", result.output)


async def remove_uploads(config: SiteDockConfig, site_id: str) -> List[str]:
    """Delete everything uploaded or extracted for a site."""
    upload_root = Path(config.archive.upload_root)
    target = _layout(config).site_dir(site_id)
    if not target.exists():
        return [f"No uploads for site {site_id}"]
    if target.is_symlink() or not _inside(target, upload_root):
        raise HelperOperationError(f"Upload directory of site {site_id} is not a plain directory")
    shutil.rmtree(target)
    return [f"Removed uploads for site {site_id}"]


_HANDLERS: Dict[PrivilegedOperation, Callable[..., Awaitable[List[str]]]] = {
    PrivilegedOperation.EXTRACT_ARCHIVE: extract_archive,
    PrivilegedOperation.WRITE_PROXY_RULE: write_proxy_rule,
    PrivilegedOperation.REMOVE_PROXY_RULE: remove_proxy_rule,
    PrivilegedOperation.TEST_PROXY_CONFIG: check_proxy_config,
    PrivilegedOperation.RELOAD_PROXY: reload_proxy,
    PrivilegedOperation.REQUEST_CERTIFICATE: request_certificate,
    PrivilegedOperation.DELETE_CERTIFICATE: delete_certificate,
    PrivilegedOperation.REMOVE_UPLOADS: remove_uploads,
    PrivilegedOperation.TRUST_SIDECAR_AUTH: trust_sidecar_auth,
}


async def dispatch(config: SiteDockConfig, operation: str, args: List[str]) -> List[str]:
    """Re-validate and perform one operation.

    Returns:
        Progress lines.

    Raises:
        OperationNotAllowedError, ParameterRejectedError: If validation fails.
        HelperOperationError: If the operation failed.
    """
    argv = validate_invocation(operation, args)
    handler = _HANDLERS[PrivilegedOperation(argv[0])]
    try:
        return await handler(config, *argv[1:])
    except OSError as exc:
        raise HelperOperationError(f"{argv[0]} failed: {exc}") from exc
