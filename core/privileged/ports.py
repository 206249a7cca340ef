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

"""Port for running allowlisted host operations."""

from abc import ABC, abstractmethod
from typing import Union

from core.privileged.operations import PrivilegedOperation


class PrivilegedExecutor(ABC):
    """Runs one allowlisted operation with elevated rights."""

    @abstractmethod
    async def run(self, operation: Union[PrivilegedOperation, str], *args: str) -> str:
        """Validate and run the operation.

        Returns:
            Progress output produced by the operation.

        Raises:
            OperationNotAllowedError: If the operation is not allowlisted.
            ParameterRejectedError: If any argument fails validation.
            PrivilegedOperationError: If the operation ran and failed.
        """
        ...
