"""
Access Control DTOs

Immutable values produced by the request gates. Each gate returns a new
RequestContext carrying the fields it resolved; nothing mutates a context
after it is built.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import Account, AccountRole


class AccountSnapshot(BaseModel):
    """Read-only view of the authenticated account"""

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: AccountRole
    is_active: bool

    @classmethod
    def from_account(cls, account: Account) -> "AccountSnapshot":
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            role=account.role,
            is_active=account.is_active,
        )


class ChurchAccess(BaseModel):
    """Outcome of the tenant access check"""

    model_config = ConfigDict(frozen=True)

    church_id: UUID
    role: str


class RequestContext(BaseModel):
    """
    Per-request access context.

    Closed: unknown fields are rejected. Gates derive new contexts with
    model_copy(update=...).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    account: Optional[AccountSnapshot] = None
    church_id: Optional[UUID] = None
    church_role: Optional[str] = None
    resource_id: Optional[UUID] = None
    resource: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None

    @property
    def account_id(self) -> UUID:
        return self.account.id

    def with_church(self, access: ChurchAccess) -> "RequestContext":
        return self.model_copy(
            update={"church_id": access.church_id, "church_role": access.role}
        )

    def with_resource(self, resource_id: UUID, resource: Dict[str, Any]) -> "RequestContext":
        return self.model_copy(update={"resource_id": resource_id, "resource": resource})
