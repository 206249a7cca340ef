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

"""Domain exceptions for edge (reverse proxy and certificate) configuration."""

from typing import Optional


class EdgeConfigurationError(Exception):
    """Base exception for all edge configuration errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize edge configuration error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ProxyConfigInvalidError(EdgeConfigurationError):
    """Proxy rejected the configuration; the previous rule was restored."""

    def __init__(
        self,
        domain: str,
        output: str = "",
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize proxy config invalid error.

        Args:
            domain: Domain whose rule failed validation.
            output: Output of the proxy configuration test.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Proxy configuration test failed for {domain}; proxy not reloaded",
            correlation_id=correlation_id,
        )
        self.domain = domain
        self.output = output
