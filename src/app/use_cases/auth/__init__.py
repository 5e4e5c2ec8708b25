"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .dtos import (
    AccountResponse,
    AuthResponse,
    ChurchMembershipInfo,
    LogoutResponse,
    MessageResponse,
    RefreshTokenResponse,
    RegisterCommand,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AccountResponse",
    "AuthResponse",
    "LogoutResponse",
    "MessageResponse",
    "RefreshTokenResponse",
    # DTOs - Nested Models
    "ChurchMembershipInfo",
]
