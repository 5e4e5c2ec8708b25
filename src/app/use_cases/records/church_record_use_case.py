"""
Church Record Use Case

CRUD, notes and status transitions shared by every church-scoped record.
Subclasses name their UnitOfWork collection and table model and override
the hooks they need.
"""

import uuid
from typing import Any, Dict, Mapping, Optional, Set, Type
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import Page, PageRequest
from src.domain.base import utcnow
from src.domain.entities import ChurchRecord, ChurchRole
from src.domain.lifecycle import append_status_history, can_transition
from src.libs.result import Error, Result, Return

# Columns no command may write directly
PROTECTED_FIELDS = frozenset(
    {
        "id",
        "church_id",
        "created_by",
        "created_at",
        "updated_at",
        "notes",
        "status",
        "status_history",
    }
)


def serialize(record: ChurchRecord) -> Dict[str, Any]:
    return record.model_dump(mode="json")


class ChurchRecordUseCase:
    """
    Base use case for a church-scoped collection.

    Business Rules:
    - Every read and write is scoped by church id; a record of another
      church is reported as not found
    - notes and status_history only grow, except through the note
      edit/delete operations
    - A note may be edited or deleted by its author or a church admin
    """

    collection: str
    model: Type[ChurchRecord]
    not_found_code = "RESOURCE_NOT_FOUND"
    label = "Record"
    transitions: Optional[Mapping[str, Set[str]]] = None
    protected_fields = PROTECTED_FIELDS

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @property
    def repository(self):
        return getattr(self.uow, self.collection)

    def _not_found(self) -> Result[Any]:
        return Return.err(Error(self.not_found_code, f"{self.label} not found"))

    def _view(self, record: ChurchRecord) -> Dict[str, Any]:
        return serialize(record)

    async def _validate(
        self, church_id: UUID, values: Dict[str, Any], record: Optional[ChurchRecord] = None
    ) -> Optional[Error]:
        """Hook: check references and cross-field rules before a write"""
        return None

    async def _after_create(self, record: ChurchRecord, actor_id: UUID) -> None:
        """Hook: side effects of a new record, inside the same transaction"""

    async def _before_delete(self, record: ChurchRecord) -> Optional[Error]:
        """Hook: refuse or prepare a delete"""
        return None

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create(self, church_id: UUID, actor_id: UUID, values: Dict[str, Any]) -> Result[Dict[str, Any]]:
        values = {k: v for k, v in values.items() if k not in self.protected_fields or k == "status"}
        async with self.uow:
            error = await self._validate(church_id, values)
            if error is not None:
                return Return.err(error)

            record = self.model(church_id=church_id, created_by=actor_id, **values)
            record = await self.repository.create(record)
            await self._after_create(record, actor_id)
            await self.uow.commit()

            return Return.ok(self._view(record))

    async def list(
        self,
        church_id: UUID,
        page: PageRequest,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Result[Page[Dict[str, Any]]]:
        async with self.uow:
            records, total = await self.repository.list_in_church(
                church_id, filters=filters, offset=page.offset, limit=page.limit
            )
            items = [self._view(record) for record in records]

        return Return.ok(Page[Dict[str, Any]].build(items, total, page))

    async def get(self, church_id: UUID, record_id: UUID) -> Result[Dict[str, Any]]:
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()
            return Return.ok(self._view(record))

    async def update(
        self, church_id: UUID, record_id: UUID, values: Dict[str, Any]
    ) -> Result[Dict[str, Any]]:
        values = {k: v for k, v in values.items() if k not in self.protected_fields}
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()

            error = await self._validate(church_id, values, record)
            if error is not None:
                return Return.err(error)

            for key, value in values.items():
                setattr(record, key, value)
            record.updated_at = utcnow()
            record = await self.repository.update(record)
            await self.uow.commit()

            return Return.ok(self._view(record))

    async def delete(self, church_id: UUID, record_id: UUID) -> Result[None]:
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()

            error = await self._before_delete(record)
            if error is not None:
                return Return.err(error)

            await self.repository.delete(record)
            await self.uow.commit()
            return Return.ok(None)

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    async def add_note(
        self, church_id: UUID, record_id: UUID, actor_id: UUID, content: str
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()

            note = {
                "id": str(uuid.uuid4()),
                "content": content,
                "created_by": str(actor_id),
                "created_at": utcnow().isoformat(),
            }
            record.notes = [*(record.notes or []), note]
            record.updated_at = utcnow()
            record = await self.repository.update(record)
            await self.uow.commit()

            return Return.ok(self._view(record))

    async def update_note(
        self,
        church_id: UUID,
        record_id: UUID,
        note_id: str,
        actor_id: UUID,
        church_role: Optional[str],
        content: str,
    ) -> Result[Dict[str, Any]]:
        def edit(note):
            return {**note, "content": content, "updated_at": utcnow().isoformat()}

        return await self._change_note(church_id, record_id, note_id, actor_id, church_role, edit)

    async def delete_note(
        self,
        church_id: UUID,
        record_id: UUID,
        note_id: str,
        actor_id: UUID,
        church_role: Optional[str],
    ) -> Result[Dict[str, Any]]:
        return await self._change_note(
            church_id, record_id, note_id, actor_id, church_role, lambda note: None
        )

    async def _change_note(self, church_id, record_id, note_id, actor_id, church_role, change):
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()

            notes = list(record.notes or [])
            index = next((i for i, n in enumerate(notes) if n.get("id") == note_id), None)
            if index is None:
                return Return.err(Error("NOTE_NOT_FOUND", "Note not found"))

            note = notes[index]
            if note.get("created_by") != str(actor_id) and church_role != ChurchRole.admin.value:
                return Return.err(
                    Error("NOTE_FORBIDDEN", "Only the author or a church admin can change this note")
                )

            changed = change(note)
            if changed is None:
                del notes[index]
            else:
                notes[index] = changed
            record.notes = notes
            record.updated_at = utcnow()
            record = await self.repository.update(record)
            await self.uow.commit()

            return Return.ok(self._view(record))

    # ------------------------------------------------------------------
    # Status lifecycle
    # ------------------------------------------------------------------

    async def _on_transition(
        self, record: ChurchRecord, target: str, actor_id: UUID, values: Dict[str, Any]
    ) -> Optional[Error]:
        """Hook: fields and side effects of a specific transition"""
        return None

    async def transition(
        self,
        church_id: UUID,
        record_id: UUID,
        target: str,
        actor_id: UUID,
        reason: Optional[str] = None,
        values: Optional[Dict[str, Any]] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Move a record to target status.

        Illegal transitions fail with INVALID_STATUS_TRANSITION; legal ones
        append to status_history.
        """
        async with self.uow:
            record = await self.repository.get_in_church(record_id, church_id)
            if record is None:
                return self._not_found()

            current = record.status
            if not can_transition(self.transitions, current, target):
                return Return.err(
                    Error(
                        "INVALID_STATUS_TRANSITION",
                        f"Cannot change {self.label.lower()} status from "
                        f"{current.value} to {getattr(target, 'value', target)}",
                        {"from": current.value, "to": getattr(target, "value", target)},
                    )
                )

            error = await self._on_transition(record, target, actor_id, values or {})
            if error is not None:
                return Return.err(error)

            record.status = target
            record.status_history = append_status_history(
                record.status_history or [], current, target, actor_id, reason
            )
            record.updated_at = utcnow()
            record = await self.repository.update(record)
            await self.uow.commit()

            return Return.ok(self._view(record))
