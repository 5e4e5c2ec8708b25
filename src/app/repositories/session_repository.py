from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        """Update existing session"""
        pass

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Find session by the SHA-256 digest of its refresh token"""
        pass

    @abstractmethod
    async def revoke_all_by_account_id(self, account_id: UUID) -> int:
        """Revoke all active sessions for an account"""
        pass
