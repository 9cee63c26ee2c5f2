"""bcrypt password hashing."""

import asyncio

import bcrypt

from bailago.domain.service.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Password hasher backed by bcrypt.

    bcrypt is CPU bound, so both operations run in a worker thread to keep
    the event loop responsive. bcrypt only considers the first 72 bytes of
    the password; registration inputs are capped at 72 characters.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize bcrypt hasher.

        Args:
            rounds: bcrypt work factor (log2 of the iteration count)
        """
        self.rounds = rounds

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def _verify_sync(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    async def hash(self, plaintext: str) -> str:
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify(self, plaintext: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, plaintext, hashed)
