"""Base repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class Repository(ABC):
    """Base class for all repositories.

    Every repository guards its entity map with one coarse-grained lock.
    Registries hold it around each read-modify-write:

        async with repository.atomic():
            entity = await repository.find_by_id(entity_id)
            await repository.save(entity.model_copy(update={...}))

    The lock is not re-entrant, and nothing inside the block may await
    external I/O.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager:
        """Return the context manager guarding this repository's map."""
        pass
