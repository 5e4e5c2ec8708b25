from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from src.api.utils.jwt import create_access_token
from src.app.use_cases.access import (
    AuthenticateUseCase,
    ChurchAccess,
    LoadChurchResourceUseCase,
    RequestContext,
    ResolveChurchAccessUseCase,
)
from src.domain.entities import ChurchRole, Member, MemberRole


# ============================================================================
# Tenant access
# ============================================================================


@pytest.mark.asyncio
async def test_missing_church_id(mock_uow):
    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), None)

    assert result.error.code == "CHURCH_ID_REQUIRED"


@pytest.mark.asyncio
async def test_malformed_church_id(mock_uow):
    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), "not-a-uuid")

    assert result.error.code == "INVALID_CHURCH_ID"
    mock_uow.church_relationships.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_relationship_grants_admin(mock_uow):
    church_id = uuid4()
    mock_uow.church_relationships.get.return_value = MagicMock(role=ChurchRole.admin)

    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), str(church_id))

    assert result.value == ChurchAccess(church_id=church_id, role="admin")
    mock_uow.members.get_active_by_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_active_member_grants_member_role(mock_uow):
    church_id = uuid4()
    mock_uow.church_relationships.get.return_value = None
    mock_uow.members.get_active_by_account.return_value = MagicMock(role=MemberRole.volunteer)

    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), str(church_id))

    assert result.value.role == "volunteer"


@pytest.mark.asyncio
async def test_volunteer_relationship_alone_is_denied(mock_uow):
    """Only an admin relationship grants access by itself"""
    mock_uow.church_relationships.get.return_value = MagicMock(role=ChurchRole.volunteer)
    mock_uow.members.get_active_by_account.return_value = None

    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), str(uuid4()))

    assert result.error.code == "CHURCH_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_access_lookup_failure(mock_uow):
    mock_uow.church_relationships.get.side_effect = OperationalError("SELECT", {}, Exception("down"))

    result = await ResolveChurchAccessUseCase(mock_uow).execute(uuid4(), str(uuid4()))

    assert result.error.code == "CHURCH_ACCESS_LOOKUP_FAILED"


# ============================================================================
# Resource ownership
# ============================================================================


@pytest.mark.asyncio
async def test_resource_requires_resolved_church(mock_uow):
    result = await LoadChurchResourceUseCase(mock_uow).execute("members", str(uuid4()), None)

    assert result.error.code == "CHURCH_ACCESS_NOT_VERIFIED"


@pytest.mark.asyncio
async def test_resource_id_must_be_uuid(mock_uow):
    result = await LoadChurchResourceUseCase(mock_uow).execute("members", "42", uuid4())

    assert result.error.code == "INVALID_RESOURCE_ID"


@pytest.mark.asyncio
async def test_record_of_other_church_is_not_found(mock_uow):
    church_id = uuid4()
    member_id = uuid4()
    mock_uow.members.get_in_church.return_value = None

    result = await LoadChurchResourceUseCase(mock_uow).execute("members", str(member_id), church_id)

    assert result.error.code == "RESOURCE_NOT_FOUND"
    mock_uow.members.get_in_church.assert_awaited_once_with(member_id, church_id)


@pytest.mark.asyncio
async def test_record_is_returned_as_plain_data(mock_uow):
    church_id = uuid4()
    member = Member(church_id=church_id, first_name="Ada", last_name="Obi")
    mock_uow.members.get_in_church.return_value = member

    result = await LoadChurchResourceUseCase(mock_uow).execute("members", str(member.id), church_id)

    assert result.value["id"] == str(member.id)
    assert result.value["church_id"] == str(church_id)
    assert result.value["first_name"] == "Ada"


@pytest.mark.asyncio
async def test_unknown_collection_is_a_programming_error(mock_uow):
    with pytest.raises(ValueError):
        await LoadChurchResourceUseCase(mock_uow).execute("sermons", str(uuid4()), uuid4())


# ============================================================================
# Request context
# ============================================================================


def test_context_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        RequestContext(tenant="abc")


def test_context_is_immutable():
    context = RequestContext()
    with pytest.raises(ValidationError):
        context.church_id = uuid4()


def test_with_church_returns_new_context():
    context = RequestContext()
    church_id = uuid4()

    scoped = context.with_church(ChurchAccess(church_id=church_id, role="member"))

    assert scoped.church_id == church_id
    assert scoped.church_role == "member"
    assert context.church_id is None
    assert scoped.is_authenticated is False


# ============================================================================
# Token authentication
# ============================================================================


@pytest.mark.asyncio
async def test_account_lookup_failure_is_not_an_auth_failure(mock_uow):
    mock_uow.accounts.get_by_id.side_effect = OperationalError("select", {}, Exception("gone"))

    result = await AuthenticateUseCase(mock_uow).execute(create_access_token(uuid4(), "member"))

    assert result.error.code == "AUTH_LOOKUP_FAILED"


@pytest.mark.asyncio
async def test_deactivated_account_is_refused(mock_uow):
    mock_uow.accounts.get_by_id.return_value = MagicMock(is_active=False)

    result = await AuthenticateUseCase(mock_uow).execute(create_access_token(uuid4(), "member"))

    assert result.error.code == "ACCOUNT_DISABLED"
