"""Authentication use cases."""

from .authenticate import AuthenticateRequest, AuthenticateResponse, AuthenticateUseCase
from .login import LoginRequest, LoginResponse, LoginUseCase
from .oauth_login import OAuthLoginRequest, OAuthLoginResponse, OAuthLoginUseCase
from .register_user import RegisterUserRequest, RegisterUserResponse, RegisterUserUseCase
from .request_password_reset import (
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from .reset_password import ResetPasswordRequest, ResetPasswordResponse, ResetPasswordUseCase
from .verify_email import VerifyEmailRequest, VerifyEmailResponse, VerifyEmailUseCase

__all__ = [
    "AuthenticateRequest",
    "AuthenticateResponse",
    "AuthenticateUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "OAuthLoginRequest",
    "OAuthLoginResponse",
    "OAuthLoginUseCase",
    "RegisterUserRequest",
    "RegisterUserResponse",
    "RegisterUserUseCase",
    "RequestPasswordResetRequest",
    "RequestPasswordResetResponse",
    "RequestPasswordResetUseCase",
    "ResetPasswordRequest",
    "ResetPasswordResponse",
    "ResetPasswordUseCase",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    "VerifyEmailUseCase",
]
