"""One-time token generators."""

import itertools
import secrets

from bailago.domain.service.ports import TokenGenerator


class SecretsTokenGenerator(TokenGenerator):
    """URL-safe random tokens from the ``secrets`` module."""

    def __init__(self, nbytes: int = 32) -> None:
        self.nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_urlsafe(self.nbytes)


class SequentialTokenGenerator(TokenGenerator):
    """Deterministic tokens for tests: ``token-1``, ``token-2``, ..."""

    def __init__(self, prefix: str = "token") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)
        self.issued: list[str] = []

    def generate(self) -> str:
        token = f"{self.prefix}-{next(self._counter)}"
        self.issued.append(token)
        return token
