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

"""Edge configuration writer: proxy rule, reload and certificate."""

import logging
from typing import Callable, Optional

from core.edge.exceptions import ProxyConfigInvalidError
from core.privileged.exceptions import PrivilegedBoundaryError, PrivilegedOperationError
from core.privileged.operations import PrivilegedOperation
from core.privileged.ports import PrivilegedExecutor

logger = logging.getLogger(__name__)


class EdgeConfigurationWriter:
    """Publishes a site on the host reverse proxy through the privileged boundary.

    The writer never touches the proxy directory or certificate store
    itself; every step is an allowlisted helper operation.
    """

    def __init__(self, executor: PrivilegedExecutor, letsencrypt_email: str) -> None:
        self.executor = executor
        self.letsencrypt_email = letsencrypt_email

    async def publish(
        self,
        domain: str,
        port: int,
        progress: Optional[Callable[[str], None]] = None,
    ) -> bool:
        """Route domain to the local port and request a certificate.

        Returns:
            True if a certificate was issued, False if issuance failed.

        Raises:
            ProxyConfigInvalidError: If the proxy rejected the new rule.
            PrivilegedOperationError: If writing the rule or reloading failed.
        """
        report = progress or _discard

        await self.executor.run(PrivilegedOperation.WRITE_PROXY_RULE, domain, str(port))
        report(f"Proxy rule written for {domain} -> 127.0.0.1:{port}")

        try:
            await self.executor.run(PrivilegedOperation.TEST_PROXY_CONFIG)
        except PrivilegedOperationError as exc:
            report("Proxy configuration test failed; previous rule restored")
            raise ProxyConfigInvalidError(domain, exc.output) from exc

        await self.executor.run(PrivilegedOperation.RELOAD_PROXY)
        report("Proxy reloaded")

        tls_enabled = await self.request_certificate(domain)
        if tls_enabled:
            report(f"Certificate issued for {domain}")
        else:
            report(f"Certificate request failed for {domain}; serving over HTTP")
        return tls_enabled

    async def request_certificate(self, domain: str) -> bool:
        """Request a certificate. Failure is logged and reported as False."""
        try:
            await self.executor.run(
                PrivilegedOperation.REQUEST_CERTIFICATE, domain, self.letsencrypt_email
            )
        except PrivilegedOperationError as exc:
            logger.warning(
                "Certificate request failed for %s (exit code %s)", domain, exc.exit_code
            )
            return False
        return True

    async def unpublish(
        self,
        domain: str,
        progress: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Remove the proxy rule, reload, and delete the certificate.

        Certificate deletion is best effort and is attempted even when
        removing the rule or reloading failed; that failure is raised after.

        Raises:
            PrivilegedBoundaryError: If removing the rule or reloading failed.
        """
        report = progress or _discard

        proxy_error: Optional[PrivilegedBoundaryError] = None
        try:
            await self.executor.run(PrivilegedOperation.REMOVE_PROXY_RULE, domain)
            await self.executor.run(PrivilegedOperation.RELOAD_PROXY)
            report(f"Proxy rule removed for {domain}")
        except PrivilegedBoundaryError as exc:
            logger.warning("Removing proxy rule for %s failed: %s", domain, exc.message)
            proxy_error = exc

        try:
            await self.executor.run(PrivilegedOperation.DELETE_CERTIFICATE, domain)
            report(f"Certificate deleted for {domain}")
        except PrivilegedOperationError as exc:
            logger.warning(
                "Certificate deletion failed for %s (exit code %s)", domain, exc.exit_code
            )

        if proxy_error is not None:
            raise proxy_error


def _discard(_line: str) -> None:
    return None
