"""Credential hashing and token adapters."""

from .hashing import BcryptPasswordHasher
from .tokens import SecretsTokenGenerator, SequentialTokenGenerator

__all__ = [
    "BcryptPasswordHasher",
    "SecretsTokenGenerator",
    "SequentialTokenGenerator",
]
