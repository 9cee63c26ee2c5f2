"""Account lifecycle use cases."""

from bailago.application.usecase.account.inactivity import (
    AccountRequest,
    GetInactivityStatusResponse,
    GetInactivityStatusUseCase,
    ReactivateAccountResponse,
    ReactivateAccountUseCase,
)

__all__ = [
    "AccountRequest",
    "GetInactivityStatusResponse",
    "GetInactivityStatusUseCase",
    "ReactivateAccountResponse",
    "ReactivateAccountUseCase",
]
