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

"""Password hasher implementations."""

import base64
import hashlib
import hmac
import secrets

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from core.security.ports import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """argon2id via argon2-cffi with the library's default cost parameters."""

    name = "argon2"

    def __init__(self) -> None:
        self._hasher = Argon2Hasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, encoded: str, password: str) -> bool:
        try:
            return self._hasher.verify(encoded, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA256, encoded as pbkdf2_sha256$<iterations>$<salt>$<hash>."""

    name = "pbkdf2"
    ALGORITHM = "pbkdf2_sha256"

    def __init__(self, iterations: int = 100000) -> None:
        self.iterations = iterations

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(16)
        digest = self._derive(password, salt, self.iterations)
        return "$".join(
            (
                self.ALGORITHM,
                str(self.iterations),
                base64.b64encode(salt).decode("ascii"),
                base64.b64encode(digest).decode("ascii"),
            )
        )

    def verify(self, encoded: str, password: str) -> bool:
        try:
            algorithm, iterations, salt_b64, digest_b64 = encoded.split("$")
            if algorithm != self.ALGORITHM:
                return False
            salt = base64.b64decode(salt_b64)
            expected = base64.b64decode(digest_b64)
            actual = self._derive(password, salt, int(iterations))
        except ValueError:
            return False
        return hmac.compare_digest(actual, expected)

    @staticmethod
    def _derive(password: str, salt: bytes, iterations: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def build_password_hasher(strategy: str, pbkdf2_iterations: int = 100000) -> PasswordHasher:
    """Return the hasher selected in configuration.

    Raises:
        ValueError: If the strategy is unknown.
    """
    if strategy == Argon2PasswordHasher.name:
        return Argon2PasswordHasher()
    if strategy == Pbkdf2PasswordHasher.name:
        return Pbkdf2PasswordHasher(pbkdf2_iterations)
    raise ValueError(f"Unknown password hasher: {strategy!r}")
