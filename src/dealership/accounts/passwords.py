from __future__ import annotations

import bcrypt

from ..core.constants import BCRYPT_ROUNDS


class PasswordHasher:
    """Salted one-way hashing (bcrypt) for account passwords."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self._rounds = int(rounds)

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, plaintext: str, password_hash: str | None) -> bool:
        if not plaintext or not password_hash:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
