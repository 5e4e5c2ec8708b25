from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.use_cases.notifications import (
    RecipientNotificationsUseCase,
    SendNotificationCommand,
    SendNotificationUseCase,
)
from src.domain.entities import ChurchRole, MemberRole, Notification, RecipientGroup


def _notification(recipient_id, **values):
    return Notification(
        church_id=uuid4(),
        recipient_id=recipient_id,
        title="Sunday service",
        message="Service starts at 9am",
        **values,
    )


@pytest.fixture
def dispatcher():
    dispatcher = MagicMock()
    dispatcher.send = AsyncMock(return_value=True)
    return dispatcher


# ============================================================================
# Recipient inbox
# ============================================================================


@pytest.mark.asyncio
async def test_mark_read_sets_read_at(mock_uow):
    recipient_id = uuid4()
    notification = _notification(recipient_id)
    mock_uow.notifications.get_for_recipient.return_value = notification
    mock_uow.notifications.update.side_effect = lambda n: n

    result = await RecipientNotificationsUseCase(mock_uow).mark_read(recipient_id, notification.id)

    assert result.value.is_read is True
    assert result.value.read_at is not None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_mark_read_twice_keeps_first_read_at(mock_uow):
    recipient_id = uuid4()
    first_read = datetime(2024, 3, 1, 8, 30)
    notification = _notification(recipient_id, is_read=True, read_at=first_read)
    mock_uow.notifications.get_for_recipient.return_value = notification

    result = await RecipientNotificationsUseCase(mock_uow).mark_read(recipient_id, notification.id)

    assert result.value.read_at == first_read
    mock_uow.notifications.update.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_someone_elses_notification_is_not_found(mock_uow):
    mock_uow.notifications.get_for_recipient.return_value = None

    result = await RecipientNotificationsUseCase(mock_uow).archive(uuid4(), uuid4())

    assert result.error.code == "NOTIFICATION_NOT_FOUND"


# ============================================================================
# Sending
# ============================================================================


@pytest.mark.asyncio
async def test_specific_group_requires_recipients(mock_uow, dispatcher):
    command = SendNotificationCommand(
        title="Hello", message="World", recipient_group=RecipientGroup.specific
    )

    result = await SendNotificationUseCase(mock_uow, dispatcher).execute(uuid4(), uuid4(), command)

    assert result.error.code == "RECIPIENTS_REQUIRED"


@pytest.mark.asyncio
async def test_specific_recipients_must_belong_to_church(mock_uow, dispatcher):
    insider = uuid4()
    outsider = uuid4()
    mock_uow.church_relationships.list_by_church.return_value = [
        MagicMock(account_id=insider, role=ChurchRole.admin)
    ]
    mock_uow.members.list_in_church.return_value = ([], 0)
    command = SendNotificationCommand(
        title="Hello",
        message="World",
        recipient_group=RecipientGroup.specific,
        recipient_ids=[insider, outsider],
    )

    result = await SendNotificationUseCase(mock_uow, dispatcher).execute(uuid4(), uuid4(), command)

    assert result.error.code == "INVALID_RECIPIENTS"
    assert result.error.details["recipient_ids"] == [str(outsider)]
    mock_uow.notifications.create_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_volunteer_group_fans_out_once_per_account(mock_uow, dispatcher):
    church_id = uuid4()
    staff_volunteer = uuid4()
    member_volunteer = uuid4()
    mock_uow.church_relationships.list_by_church.return_value = [
        MagicMock(account_id=uuid4(), role=ChurchRole.admin),
        MagicMock(account_id=staff_volunteer, role=ChurchRole.volunteer),
    ]
    mock_uow.members.list_in_church.return_value = (
        [
            MagicMock(account_id=member_volunteer, role=MemberRole.volunteer),
            MagicMock(account_id=staff_volunteer, role=MemberRole.volunteer),
            MagicMock(account_id=uuid4(), role=MemberRole.member),
            MagicMock(account_id=None, role=MemberRole.volunteer),
        ],
        4,
    )
    command = SendNotificationCommand(
        title="Rota", message="New rota posted", recipient_group=RecipientGroup.volunteers
    )

    result = await SendNotificationUseCase(mock_uow, dispatcher).execute(church_id, uuid4(), command)

    assert result.value.sent == 2
    assert result.value.delivered == 2
    assert set(result.value.recipient_ids) == {staff_volunteer, member_volunteer}
    created = mock_uow.notifications.create_many.call_args.args[0]
    assert all(n.church_id == church_id for n in created)
    assert all(n.channels == ["in-app"] for n in created)
    assert dispatcher.send.await_count == 2
