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

"""Secure logging utilities for SiteDock.

Provides per-job file logging with automatic redaction of sensitive data
(IP addresses, tokens, passwords, secrets, emails) so that job log files
never contain exploitable information.
"""

import logging
import os
import re
import traceback
from pathlib import Path
from typing import Dict, Optional

_LOG_FORMATTER = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

DEFAULT_LOG_DIR = "/var/log/sitedock"

_job_loggers: Dict[str, logging.Logger] = {}

# ---------------------------------------------------------------------------
# Sensitive-data redaction patterns
# ---------------------------------------------------------------------------
_SENSITIVE_PATTERNS = [
    # IPv4 addresses  (e.g. 192.168.1.100)
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b"), "<REDACTED_IP>"),
    # IPv6 addresses  (simplified, colon-hex groups)
    (re.compile(r"\b(?:[0-9a-fA-F]{1,4}:){2,7}[0-9a-fA-F]{1,4}\b"), "<REDACTED_IP>"),
    # JWT / Bearer tokens  (three base64url segments separated by dots)
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "<REDACTED_TOKEN>"),
    # Authorization header values
    (re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.]+"), r"\1<REDACTED_TOKEN>"),
    # password= / secret= / token= / AUTH_PASSWORD= values
    (re.compile(
        r"(?i)((?:password|passwd|secret|api_key|apikey|token|auth_token|access_secret)"
        r"\s*[=:]\s*)[^\s,;\"']+"
    ), r"\1<REDACTED>"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "<REDACTED_EMAIL>"),
]

MASK = "******"


def _sanitize_message(message: str) -> str:
    """Redact sensitive data from a log message."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def mask_secret(text: str, *secrets: Optional[str]) -> str:
    """Replace every occurrence of the given secret values with a mask.

    Used for tool output that may echo credentials verbatim, where the
    pattern-based redaction cannot know the value.
    """
    if not text:
        return text
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


# ---------------------------------------------------------------------------
# Job log-file lifecycle
# ---------------------------------------------------------------------------
def _log_base() -> Path:
    return Path(os.getenv("SITEDOCK_LOG_DIR", DEFAULT_LOG_DIR)) / "jobs"


def create_job_log_file(job_id: str) -> Optional[Path]:
    """Create ``<SITEDOCK_LOG_DIR>/jobs/<job_id>.log`` and warm the cached logger.

    Called once when a deployment is enqueued. Subsequent calls to
    :func:`log_secure_info` with the same *job_id* append to this file.

    Returns:
        Path to the created log file, or ``None`` on failure.
    """
    base = _log_base()
    try:
        base.mkdir(parents=True, exist_ok=True)
        log_file = base / f"{job_id}.log"
        log_file.touch(exist_ok=True)
        _get_or_create_job_logger(job_id, log_file)
        return log_file
    except OSError:
        logging.getLogger(__name__).warning(
            "Failed to create job log file for job: %s", job_id[:8]
        )
        return None


def remove_job_logger(job_id: str) -> None:
    """Flush, close, and remove the cached logger for *job_id*."""
    job_logger = _job_loggers.pop(job_id, None)
    if job_logger is None:
        return
    for handler in list(job_logger.handlers):
        handler.flush()
        handler.close()
        job_logger.removeHandler(handler)


def _get_or_create_job_logger(
    job_id: str, log_file: Optional[Path] = None
) -> Optional[logging.Logger]:
    """Return a cached per-job logger, creating one if necessary."""
    if job_id in _job_loggers:
        return _job_loggers[job_id]

    if log_file is None:
        candidate = _log_base() / f"{job_id}.log"
        if not candidate.is_file():
            return None
        log_file = candidate

    try:
        job_logger = logging.getLogger(f"sitedock.job.{job_id}")
        job_logger.setLevel(logging.DEBUG)
        job_logger.propagate = False
        handler = logging.FileHandler(str(log_file), mode="a")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(_LOG_FORMATTER)
        job_logger.addHandler(handler)
        _job_loggers[job_id] = job_logger
        return job_logger
    except OSError:
        return None


_SEPARATOR = "-" * 80


# ---------------------------------------------------------------------------
# Public logging entry point (per-job)
# ---------------------------------------------------------------------------
def log_secure_info(
    level: str,
    message: str,
    identifier: Optional[str] = None,
    job_id: Optional[str] = None,
    exc_info: bool = False,
    end_section: bool = False,
) -> None:
    """Log a message after redacting sensitive data.

    * *identifier* is truncated to its first 8 characters.
    * IP addresses, tokens, passwords, secrets, and emails are
      automatically replaced with ``<REDACTED_*>`` placeholders.
    * When *job_id* is supplied the entry is also written to the
      per-job log file.

    Args:
        level: ``'info'``, ``'warning'``, ``'error'``, ``'debug'``, or ``'critical'``.
        message: Human-readable log message.
        identifier: Optional opaque id; only the first 8 chars are kept.
        job_id: Route the entry to the job-specific log file.
        exc_info: Append the current exception traceback.
        end_section: Append a separator line to visually delimit this execution.
    """
    logger = logging.getLogger(__name__)

    if identifier:
        log_message = f"{message}: {identifier[:8]}..."
    else:
        log_message = message

    if exc_info:
        log_message = f"{log_message}\n{traceback.format_exc().rstrip()}"

    log_message = _sanitize_message(log_message)

    log_func = getattr(logger, level, logger.info)
    log_func(log_message)

    if job_id:
        job_logger = _get_or_create_job_logger(job_id)
        if job_logger:
            job_log_func = getattr(job_logger, level, job_logger.info)
            job_log_func(log_message)
            if end_section:
                job_logger.info(_SEPARATOR)
