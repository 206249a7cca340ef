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

"""Infrastructure layer for identifier generation using UUID v4."""

import uuid

from core.deployments.repositories import IdentifierGenerator


class UUIDv4Generator(IdentifierGenerator):  # pylint: disable=R0903
    """Identifier generator using UUID v4."""

    def generate(self) -> str:
        """Generate a new UUID v4 string.

        Returns:
            Canonical lowercase UUID string.
        """
        return str(uuid.uuid4())
