"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Account, AccountRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Command to register a new account (already validated by the API layer)"""

    first_name: str
    last_name: str
    email: str
    password: str
    phone: Optional[str] = None
    role: AccountRole = AccountRole.member


# ============================================================================
# Response DTOs
# ============================================================================


class ChurchMembershipInfo(BaseModel):
    """Church the account is related to"""

    church_id: UUID
    name: Optional[str] = None
    role: str


class AccountResponse(BaseModel):
    """Account profile (never includes the password hash)"""

    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    is_email_verified: bool
    preferences: Dict[str, Any]
    created_at: datetime
    last_login_at: Optional[datetime] = None
    churches: List[ChurchMembershipInfo] = []

    @classmethod
    def from_entity(
        cls, account: Account, churches: Optional[List[ChurchMembershipInfo]] = None
    ) -> "AccountResponse":
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            full_name=account.full_name,
            email=account.email,
            phone=account.phone,
            role=account.role.value,
            is_active=account.is_active,
            is_email_verified=account.is_email_verified,
            preferences=account.preferences or {},
            created_at=account.created_at,
            last_login_at=account.last_login_at,
            churches=churches or [],
        )


class AuthResponse(BaseModel):
    """Response for register and login"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    account: AccountResponse


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    revoked_sessions: int


class MessageResponse(BaseModel):
    """Outcome of the password reset and email verification flows"""

    status: str
    message: str
