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

"""Entry point of the privileged helper (sitedock-helper).

Invoked by the service as ``sudo -n sitedock-helper <operation> [args...]``.
The helper reads configuration only from the default system path, never
from the caller's environment, and re-validates every argument before
acting.

Exit codes:
    0: operation succeeded
    1: operation failed
    2: operation or arguments rejected
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from common.config import DEFAULT_CONFIG_PATH, load_config_or_default
from core.privileged.exceptions import PrivilegedBoundaryError
from core.privileged.operations import mask_arguments
from helper.operations import HelperOperationError, dispatch

logger = logging.getLogger("sitedock.helper")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    """Command line parser for the helper."""
    parser = argparse.ArgumentParser(
        prog="sitedock-helper",
        description="Perform one allowlisted privileged SiteDock host operation",
    )
    parser.add_argument("operation", help="Allowlisted operation name")
    parser.add_argument("args", nargs="*", help="Operation arguments")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run one operation and return the process exit code."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    parsed = build_parser().parse_args(argv)
    masked = " ".join(mask_arguments(parsed.operation, parsed.args))

    config = load_config_or_default(DEFAULT_CONFIG_PATH)

    try:
        lines = asyncio.run(dispatch(config, parsed.operation, parsed.args))
    except PrivilegedBoundaryError as exc:
        logger.error("Rejected %s %s: %s", parsed.operation, masked, exc.message)
        return EXIT_REJECTED
    except HelperOperationError as exc:
        logger.error("Operation %s %s failed: %s", parsed.operation, masked, exc.message)
        if exc.output:
            print(exc.output, file=sys.stderr)
        return EXIT_FAILED

    for line in lines:
        print(line)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
