"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError, ValueError):
    """Dependency injection error."""

    pass
