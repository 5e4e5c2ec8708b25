"""
Account Management Use Cases

Profile, password and global account administration.
"""

from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .change_password_use_case import ChangePasswordUseCase
from .list_accounts_use_case import ListAccountsUseCase
from .set_account_active_use_case import SetAccountActiveUseCase
from .dtos import AccountFilter, PasswordChangedResponse, UpdateProfileCommand

__all__ = [
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "ChangePasswordUseCase",
    "ListAccountsUseCase",
    "SetAccountActiveUseCase",
    "AccountFilter",
    "PasswordChangedResponse",
    "UpdateProfileCommand",
]
