"""
Account Management DTOs
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class UpdateProfileCommand(BaseModel):
    """Fields left as None are not changed; preferences are merged"""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None


class AccountFilter(BaseModel):
    role: Optional[str] = None
    is_active: Optional[bool] = None
    search: Optional[str] = None


class PasswordChangedResponse(BaseModel):
    message: str
    revoked_sessions: int
