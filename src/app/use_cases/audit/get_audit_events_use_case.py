"""
Get Audit Events Use Case

Reads the audit trail of one account or one church.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return


class AuditEventView(BaseModel):
    action: str
    account_id: Optional[UUID] = None
    account_email: Optional[str] = None
    church_id: Optional[UUID] = None
    timestamp: datetime
    metadata: Dict[str, Any]


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events.

    Business Rules:
    - An account sees the events it caused; church admins see the
      events of their church (checked by the caller)
    - Results ordered by newest first, at most limit events
    - Each event includes the acting account's email when it still exists
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def for_account(
        self, account_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> Result[List[AuditEventView]]:
        async with self.uow:
            events = await self.uow.audit_events.list_for_account(
                account_id, action=action, limit=limit
            )
            return Return.ok(await self._views(events))

    async def for_church(
        self, church_id: UUID, action: Optional[str] = None, limit: int = 50
    ) -> Result[List[AuditEventView]]:
        async with self.uow:
            church = await self.uow.churches.get_by_id(church_id)
            if church is None:
                return Return.err(Error("CHURCH_NOT_FOUND", "Church not found"))

            events = await self.uow.audit_events.list_for_church(
                church_id, action=action, limit=limit
            )
            return Return.ok(await self._views(events))

    async def _views(self, events: List[AuditEvent]) -> List[AuditEventView]:
        emails: Dict[UUID, Optional[str]] = {}
        views = []
        for event in events:
            if event.account_id is not None and event.account_id not in emails:
                account = await self.uow.accounts.get_by_id(event.account_id)
                emails[event.account_id] = account.email if account else None

            views.append(
                AuditEventView(
                    action=event.action,
                    account_id=event.account_id,
                    account_email=emails.get(event.account_id),
                    church_id=event.church_id,
                    timestamp=event.created_at,
                    metadata=event.event_metadata or {},
                )
            )
        return views
