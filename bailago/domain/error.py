"""Domain layer errors.

Expected business conditions are returned as ``Outcome`` failures, not
raised. ``OutcomeError`` covers the case where a caller explicitly asks for
an exception with ``Outcome.unwrap``.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class OutcomeError(DomainError):
    """Raised when a failed outcome is unwrapped."""

    def __init__(self, failure) -> None:
        self.failure = failure
        super().__init__(f"{failure.kind.value}: {failure.message}")
