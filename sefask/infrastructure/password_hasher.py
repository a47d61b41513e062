"""Bcrypt Password Hasher — PasswordHasher implementation backed by bcrypt.

Invariants:
    - Plaintext is never logged or stored
    - Inputs longer than 72 bytes are truncated (bcrypt's hard limit) identically
      on hash and on match, so long passphrases still verify
    - matches() returns False on a malformed digest instead of raising
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    """Hashes passwords with a per-digest random salt."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def matches(self, plaintext: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password digest is malformed")
            return False
