from __future__ import annotations

import hmac
import secrets

from argon2.low_level import Type, hash_secret_raw

SALT_BYTES = 16
HASH_LEN = 64


class PasswordHasher:
    """Argon2id over a random salt, stored as ``salt_hex:hash_hex``.

    The raw API is used instead of argon2's encoded strings so stored hashes
    keep a plain two-part layout.
    """

    def __init__(self, *, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4) -> None:
        self._time_cost = int(time_cost)
        self._memory_cost = int(memory_cost)
        self._parallelism = int(parallelism)

    def _derive(self, password: str, salt: bytes) -> bytes:
        return hash_secret_raw(
            secret=password.encode("utf-8"),
            salt=salt,
            time_cost=self._time_cost,
            memory_cost=self._memory_cost,
            parallelism=self._parallelism,
            hash_len=HASH_LEN,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(SALT_BYTES)
        return f"{salt.hex()}:{self._derive(password, salt).hex()}"

    def verify(self, password: str, stored: str) -> bool:
        salt_hex, sep, hash_hex = (stored or "").partition(":")
        if not sep or not salt_hex or not hash_hex:
            return False
        try:
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(hash_hex)
        except ValueError:
            return False
        if len(salt) < 8 or len(expected) != HASH_LEN:
            return False
        derived = self._derive(password or "", salt)
        return hmac.compare_digest(derived, expected)
