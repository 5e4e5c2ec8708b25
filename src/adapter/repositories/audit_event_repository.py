from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: AuditEvent) -> AuditEvent:
        # Events share the caller's transaction; a rolled back use case leaves no trace
        self.session.add(event)
        await self.session.flush()
        return event

    async def list_for_account(
        self, account_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> List[AuditEvent]:
        stmt = select(AuditEvent).where(AuditEvent.account_id == account_id)
        if action:
            stmt = stmt.where(AuditEvent.action == action)
        stmt = stmt.order_by(AuditEvent.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_for_church(
        self, church_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> List[AuditEvent]:
        stmt = select(AuditEvent).where(AuditEvent.church_id == church_id)
        if action:
            stmt = stmt.where(AuditEvent.action == action)
        stmt = stmt.order_by(AuditEvent.created_at.desc()).limit(limit)
        result = await self.session.exec(stmt)
        return list(result.all())
