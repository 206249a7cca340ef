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

"""Allowlist of privileged host operations and their parameter validators.

The same registry is applied by the caller before invoking the helper and by
the helper before acting, so a parameter that would be rejected on either
side never reaches a host tool.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from core.privileged.exceptions import OperationNotAllowedError, ParameterRejectedError
from core.sites.value_objects import is_valid_domain

logger = logging.getLogger(__name__)

MASK = "******"

DANGEROUS_CHARS = (
    "\n", "\r", "\0", "\t", "\v", "\f", "\a", "\b", "\\", "`", "$",
    "&", "|", ";", "<", ">", "(", ")", "*", "?", "~", "#", "'", '"', " ",
)

SHELL_BINARIES = ("sh", "bash", "dash", "zsh", "ksh", "csh", "tcsh", "fish")


class PrivilegedOperation(str, Enum):
    """Host operations the helper is allowed to perform."""

    EXTRACT_ARCHIVE = "extract-archive"
    WRITE_PROXY_RULE = "write-proxy-rule"
    REMOVE_PROXY_RULE = "remove-proxy-rule"
    TEST_PROXY_CONFIG = "test-proxy-config"
    RELOAD_PROXY = "reload-proxy"
    REQUEST_CERTIFICATE = "request-certificate"
    DELETE_CERTIFICATE = "delete-certificate"
    REMOVE_UPLOADS = "remove-uploads"
    TRUST_SIDECAR_AUTH = "trust-sidecar-auth"


class ParamKind(str, Enum):
    """Typed parameter formats accepted at the boundary."""

    SITE_ID = "SITE_ID"
    DOMAIN = "DOMAIN"
    PORT = "PORT"
    EMAIL = "EMAIL"
    ARCHIVE_PATH = "ARCHIVE_PATH"
    SLUG = "SLUG"
    ACCESS_USER = "ACCESS_USER"
    ACCESS_SECRET = "ACCESS_SECRET"
    APP_SUBDIR = "APP_SUBDIR"


@dataclass(frozen=True)
class ParamSpec:
    """One positional parameter of an operation."""

    name: str
    kind: ParamKind
    sensitive: bool = False


@dataclass(frozen=True)
class OperationSpec:
    """Allowlisted operation and its positional parameters."""

    operation: PrivilegedOperation
    params: Tuple[ParamSpec, ...] = ()

    @property
    def arity(self) -> int:
        """Number of positional arguments expected."""
        return len(self.params)


_UUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")
_EMAIL = re.compile(r"^[A-Za-z0-9._%+-]{1,64}@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_ARCHIVE_PATH = re.compile(r"^/[A-Za-z0-9._/-]+\.zip$")
_SLUG = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_ACCESS_USER = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_PATH_SEGMENT = re.compile(r"^[A-Za-z0-9._-]{1,255}$")
_MAX_APP_SUBDIR_DEPTH = 8


def _check_site_id(value: str) -> Optional[str]:
    return None if _UUID.fullmatch(value) else "not a site id"


def _check_domain(value: str) -> Optional[str]:
    if value != value.lower():
        return "domain must be lowercase"
    return None if is_valid_domain(value) else "not a valid domain"


def _check_port(value: str) -> Optional[str]:
    if not value.isdigit() or len(value) > 5:
        return "not a port number"
    return None if 1024 <= int(value) <= 65535 else "port out of range"


def _check_email(value: str) -> Optional[str]:
    if len(value) > 254:
        return "email too long"
    return None if _EMAIL.fullmatch(value) else "not a valid email"


def _check_archive_path(value: str) -> Optional[str]:
    if not _ARCHIVE_PATH.fullmatch(value):
        return "not an absolute .zip path"
    if ".." in value.split("/"):
        return "parent directory segment"
    return None


def _check_slug(value: str) -> Optional[str]:
    return None if _SLUG.fullmatch(value) and len(value) <= 100 else "not a valid slug"


def _check_access_user(value: str) -> Optional[str]:
    return None if _ACCESS_USER.fullmatch(value) else "not a valid access user"


def _check_access_secret(value: str) -> Optional[str]:
    if not 8 <= len(value) <= 100:
        return "secret length out of range"
    return None if value.isprintable() else "secret contains control characters"


def _check_app_subdir(value: str) -> Optional[str]:
    if value == ".":
        return None
    segments = value.split("/")
    if len(segments) > _MAX_APP_SUBDIR_DEPTH:
        return "too many path segments"
    for segment in segments:
        if segment in (".", "..") or not _PATH_SEGMENT.fullmatch(segment):
            return "not a relative directory"
    return None


_VALIDATORS: Dict[ParamKind, Callable[[str], Optional[str]]] = {
    ParamKind.SITE_ID: _check_site_id,
    ParamKind.DOMAIN: _check_domain,
    ParamKind.PORT: _check_port,
    ParamKind.EMAIL: _check_email,
    ParamKind.ARCHIVE_PATH: _check_archive_path,
    ParamKind.SLUG: _check_slug,
    ParamKind.ACCESS_USER: _check_access_user,
    ParamKind.ACCESS_SECRET: _check_access_secret,
    ParamKind.APP_SUBDIR: _check_app_subdir,
}

# Kinds whose values may legitimately contain shell metacharacters.
_FREE_TEXT_KINDS = frozenset({ParamKind.ACCESS_SECRET})

REGISTRY: Dict[PrivilegedOperation, OperationSpec] = {
    spec.operation: spec
    for spec in (
        OperationSpec(
            PrivilegedOperation.EXTRACT_ARCHIVE,
            (
                ParamSpec("site_id", ParamKind.SITE_ID),
                ParamSpec("archive_path", ParamKind.ARCHIVE_PATH),
            ),
        ),
        OperationSpec(
            PrivilegedOperation.WRITE_PROXY_RULE,
            (ParamSpec("domain", ParamKind.DOMAIN), ParamSpec("port", ParamKind.PORT)),
        ),
        OperationSpec(
            PrivilegedOperation.REMOVE_PROXY_RULE,
            (ParamSpec("domain", ParamKind.DOMAIN),),
        ),
        OperationSpec(PrivilegedOperation.TEST_PROXY_CONFIG),
        OperationSpec(PrivilegedOperation.RELOAD_PROXY),
        OperationSpec(
            PrivilegedOperation.REQUEST_CERTIFICATE,
            (
                ParamSpec("domain", ParamKind.DOMAIN),
                ParamSpec("email", ParamKind.EMAIL, sensitive=True),
            ),
        ),
        OperationSpec(
            PrivilegedOperation.DELETE_CERTIFICATE,
            (ParamSpec("domain", ParamKind.DOMAIN),),
        ),
        OperationSpec(
            PrivilegedOperation.REMOVE_UPLOADS,
            (ParamSpec("site_id", ParamKind.SITE_ID),),
        ),
        OperationSpec(
            PrivilegedOperation.TRUST_SIDECAR_AUTH,
            (
                ParamSpec("site_id", ParamKind.SITE_ID),
                ParamSpec("app_subdir", ParamKind.APP_SUBDIR),
            ),
        ),
    )
}


def resolve_operation(operation: Union[PrivilegedOperation, str]) -> OperationSpec:
    """Look up the allowlist entry for an operation name.

    Raises:
        OperationNotAllowedError: If the operation is unknown.
    """
    try:
        return REGISTRY[PrivilegedOperation(operation)]
    except ValueError as exc:
        raise OperationNotAllowedError(str(operation)) from exc


def validate_parameter(kind: ParamKind, value: str) -> Optional[str]:
    """Return a rejection reason for value, or None if it is acceptable."""
    if not isinstance(value, str) or not value:
        return "empty value"
    if kind not in _FREE_TEXT_KINDS:
        for char in DANGEROUS_CHARS:
            if char in value:
                return f"dangerous character {char!r}"
        if value in SHELL_BINARIES:
            return "shell binary not allowed"
    return _VALIDATORS[kind](value)


def validate_invocation(
    operation: Union[PrivilegedOperation, str],
    args: Sequence[str],
) -> List[str]:
    """Validate an invocation against the allowlist.

    Args:
        operation: Operation name or enum member.
        args: Positional string arguments.

    Returns:
        The argv to hand to the helper: [operation, *args].

    Raises:
        OperationNotAllowedError: If the operation is not allowlisted.
        ParameterRejectedError: If arity or any argument format is wrong.
    """
    spec = resolve_operation(operation)
    op_name = spec.operation.value

    if len(args) != spec.arity:
        raise ParameterRejectedError(
            op_name, "arguments", f"expected {spec.arity} arguments, got {len(args)}"
        )

    for param, value in zip(spec.params, args):
        reason = validate_parameter(param.kind, value)
        if reason is not None:
            logger.error(
                "Rejected privileged invocation: %s %s",
                op_name,
                " ".join(mask_arguments(spec.operation, args)),
            )
            raise ParameterRejectedError(op_name, param.name, reason)

    return [op_name, *args]


def mask_arguments(
    operation: Union[PrivilegedOperation, str],
    args: Sequence[str],
) -> List[str]:
    """Return args with sensitive parameters replaced by the mask."""
    try:
        spec = REGISTRY[PrivilegedOperation(operation)]
    except ValueError:
        return [MASK for _ in args]

    masked = []
    for index, value in enumerate(args):
        sensitive = index < spec.arity and spec.params[index].sensitive
        masked.append(MASK if sensitive else str(value))
    return masked
