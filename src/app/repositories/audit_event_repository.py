from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """Append-only trail of account, church and billing events"""

    @abstractmethod
    async def create(self, event: AuditEvent) -> AuditEvent:
        pass

    @abstractmethod
    async def list_for_account(
        self, account_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> List[AuditEvent]:
        """Newest first, optionally narrowed to one action"""
        pass

    @abstractmethod
    async def list_for_church(
        self, church_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> List[AuditEvent]:
        pass
