"""
Send Notification Use Case

Fans a church announcement out to a recipient group.
"""

from typing import Set
from uuid import UUID

from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ChurchRole, MemberRole, Notification, RecipientGroup
from src.libs.result import Error, Result, Return
from .dtos import SendNotificationCommand, SendNotificationResponse


class SendNotificationUseCase:
    """
    Use case for sending a notification to church accounts.

    Business Rules:
    - Recipients are accounts related to the church: relationship holders
      and active members linked to an account
    - Group "specific" only accepts accounts related to the church
    - One notification row per recipient; dispatch happens after commit
    """

    def __init__(self, uow: UnitOfWork, dispatcher: NotificationDispatcher):
        self.uow = uow
        self.dispatcher = dispatcher

    async def _recipients(self, church_id: UUID, group: RecipientGroup) -> Set[UUID]:
        relationships = await self.uow.church_relationships.list_by_church(church_id)
        members, _ = await self.uow.members.list_in_church(church_id, filters={"is_active": True})
        linked = [m for m in members if m.account_id is not None]

        if group == RecipientGroup.admins:
            return {r.account_id for r in relationships if r.role == ChurchRole.admin}
        if group == RecipientGroup.volunteers:
            return {
                r.account_id for r in relationships if r.role == ChurchRole.volunteer
            } | {m.account_id for m in linked if m.role == MemberRole.volunteer}
        if group == RecipientGroup.members:
            return {m.account_id for m in linked}
        return {r.account_id for r in relationships} | {m.account_id for m in linked}

    async def execute(
        self, church_id: UUID, sender_id: UUID, command: SendNotificationCommand
    ) -> Result[SendNotificationResponse]:
        async with self.uow:
            if command.recipient_group == RecipientGroup.specific:
                if not command.recipient_ids:
                    return Return.err(
                        Error("RECIPIENTS_REQUIRED", "recipient_ids is required for specific recipients")
                    )
                related = await self._recipients(church_id, RecipientGroup.all)
                outsiders = [r for r in command.recipient_ids if r not in related]
                if outsiders:
                    return Return.err(
                        Error(
                            "INVALID_RECIPIENTS",
                            "Some recipients are not related to this church",
                            {"recipient_ids": [str(r) for r in outsiders]},
                        )
                    )
                recipients = set(command.recipient_ids)
            else:
                recipients = await self._recipients(church_id, command.recipient_group)

            notifications = [
                Notification(
                    church_id=church_id,
                    created_by=sender_id,
                    recipient_id=recipient_id,
                    type=command.type,
                    title=command.title,
                    message=command.message,
                    priority=command.priority,
                    channels=[channel.value for channel in command.channels],
                )
                for recipient_id in sorted(recipients, key=str)
            ]
            await self.uow.notifications.create_many(notifications)
            await self.uow.commit()

            delivered = 0
            for notification in notifications:
                if await self.dispatcher.send(notification):
                    delivered += 1

            return Return.ok(
                SendNotificationResponse(
                    sent=len(notifications),
                    delivered=delivered,
                    recipient_ids=[n.recipient_id for n in notifications],
                )
            )
