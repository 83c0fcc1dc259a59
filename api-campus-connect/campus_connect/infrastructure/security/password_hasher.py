# campus_connect/infrastructure/security/password_hasher.py
"""PBKDF2-SHA256 password hashing.

Hash and salt are stored base64-encoded next to the algorithm name and the
iteration count, so ``PASSWORD_ITERATIONS`` can be raised without breaking
existing accounts: old hashes keep verifying with their own cost and are
upgraded on the next successful login (``needs_rehash``).
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import os
from dataclasses import dataclass

from campus_connect.config.settings import settings

ALGO = "pbkdf2_sha256"
SALT_BYTES = 16
MIN_PASSWORD_LENGTH = 8


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


@dataclass(frozen=True)
class PasswordRecord:
    """As quatro colunas de senha do usuário."""

    password_hash: str
    password_salt: str
    password_algo: str
    password_iterations: int

    @classmethod
    def of(cls, user) -> "PasswordRecord":
        return cls(
            password_hash=user.password_hash,
            password_salt=user.password_salt,
            password_algo=user.password_algo,
            password_iterations=user.password_iterations,
        )

    def apply_to(self, user) -> None:
        user.password_hash = self.password_hash
        user.password_salt = self.password_salt
        user.password_algo = self.password_algo
        user.password_iterations = self.password_iterations


class PasswordHasher:
    @staticmethod
    def hash(password: str, *, iterations: int | None = None) -> PasswordRecord:
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters")

        it = iterations or settings.password_iterations
        salt = os.urandom(SALT_BYTES)
        return PasswordRecord(
            password_hash=_b64(_derive(password, salt, it)),
            password_salt=_b64(salt),
            password_algo=ALGO,
            password_iterations=it,
        )

    @staticmethod
    def verify(password: str, record: PasswordRecord) -> bool:
        if record.password_algo != ALGO or record.password_iterations <= 0:
            return False

        try:
            salt = base64.b64decode(record.password_salt, validate=True)
            expected = base64.b64decode(record.password_hash, validate=True)
        except (binascii.Error, ValueError):
            return False

        return hmac.compare_digest(_derive(password, salt, record.password_iterations), expected)

    @staticmethod
    def needs_rehash(record: PasswordRecord) -> bool:
        return record.password_algo != ALGO or record.password_iterations < settings.password_iterations
