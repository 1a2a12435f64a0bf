from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.api.utils.jwt import verify_jwt
from src.app.services.notifier import Notifier
from src.app.services.security import hash_token
from src.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import (
    Employee,
    EmployeeStatus,
    Invitation,
    InvitationStatus,
    User,
    UserRole,
)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories invitations touch"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.invitations = MagicMock()
    uow.invitations.get_by_token_hash = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.update = AsyncMock()
    uow.invitations.mark_accepted = AsyncMock(return_value=True)

    uow.employees = MagicMock()
    uow.employees.get_by_work_email = AsyncMock(return_value=None)
    uow.employees.create = AsyncMock(side_effect=lambda employee: employee)

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


def pending_invitation(token="invite-token", expires_in=timedelta(days=7)):
    return Invitation(
        id=uuid4(),
        email="jane@x.com",
        first_name="Jane",
        last_name="Doe",
        role=UserRole.viewer,
        token_hash=hash_token(token),
        status=InvitationStatus.pending,
        expires_at=utcnow() + expires_in,
    )


# ============================================================================
# Create
# ============================================================================


@pytest.mark.asyncio
async def test_invite_stores_only_token_hash(mock_uow):
    # Arrange
    notifier = MagicMock(spec=Notifier)
    notifier.send = AsyncMock()
    inviter_id = uuid4()

    # Act
    result = await CreateInvitationUseCase(mock_uow, notifier).execute(
        inviter_id, "hr", " Jane@X.com ", "Jane", "Doe"
    )

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.email == "jane@x.com"
    assert response.status == "pending"
    assert response.invitation_url.endswith(response.token)

    invitation = mock_uow.invitations.create.call_args.args[0]
    assert invitation.token_hash == hash_token(response.token)
    assert invitation.token_hash != response.token
    assert invitation.invited_by == inviter_id
    assert (invitation.expires_at - invitation.created_at).days in (6, 7)
    assert mock_uow.audit_events.create.call_args.args[0].action == "invite_sent"
    mock_uow.commit.assert_called_once()
    notifier.send.assert_called_once()


@pytest.mark.asyncio
async def test_hr_cannot_invite_admin(mock_uow):
    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "hr", "jane@x.com", "Jane", "Doe", role="admin"
    )

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_viewer_cannot_invite(mock_uow):
    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "viewer", "jane@x.com", "Jane", "Doe"
    )

    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invite_requires_names(mock_uow):
    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "admin", "jane@x.com", " ", "Doe"
    )

    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.details == [{"field": "first_name", "message": "First name is required"}]


@pytest.mark.asyncio
async def test_invite_existing_employee_email(mock_uow):
    mock_uow.employees.get_by_work_email.return_value = Employee(
        first_name="Jane", last_name="Doe", work_email="jane@x.com"
    )

    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "admin", "jane@x.com", "Jane", "Doe"
    )

    assert result.error.code == "EMPLOYEE_EXISTS"


@pytest.mark.asyncio
async def test_invite_with_live_pending_invitation(mock_uow):
    mock_uow.invitations.get_pending_by_email.return_value = pending_invitation()

    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "admin", "jane@x.com", "Jane", "Doe"
    )

    assert result.error.code == "INVITE_ALREADY_EXISTS"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_invite_expires_stale_pending_invitation(mock_uow):
    stale = pending_invitation(expires_in=timedelta(days=-1))
    mock_uow.invitations.get_pending_by_email.return_value = stale

    result = await CreateInvitationUseCase(mock_uow).execute(
        uuid4(), "admin", "jane@x.com", "Jane", "Doe"
    )

    assert result.is_ok()
    assert stale.status == InvitationStatus.expired
    mock_uow.invitations.update.assert_called_once_with(stale)


# ============================================================================
# Accept
# ============================================================================


@pytest.mark.asyncio
async def test_accept_creates_prospective_employee_and_account(mock_uow):
    # Arrange
    invitation = pending_invitation()
    mock_uow.invitations.get_by_token_hash.return_value = invitation

    # Act
    result = await AcceptInvitationUseCase(mock_uow).execute(
        "invite-token", "Onboard2024", "Onboard2024"
    )

    # Assert
    assert result.is_ok()
    employee = mock_uow.employees.create.call_args.args[0]
    user = mock_uow.users.create.call_args.args[0]
    assert employee.status == EmployeeStatus.prospective
    assert employee.work_email == "jane@x.com"
    assert user.role == UserRole.prospective_employee
    assert user.employee_id == employee.id
    assert user.password_hash != "Onboard2024"
    invitation_id, employee_id, _ = mock_uow.invitations.mark_accepted.call_args.args
    assert invitation_id == invitation.id
    assert employee_id == employee.id

    claims = verify_jwt(result.value.access_token)
    assert claims["role"] == "prospective_employee"
    assert claims["employee_id"] == str(employee.id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_accept_unknown_token(mock_uow):
    result = await AcceptInvitationUseCase(mock_uow).execute("nope", "Onboard2024")

    assert result.error.code == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_accept_expired_invitation(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation(
        expires_in=timedelta(minutes=-1)
    )

    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", "Onboard2024")

    assert result.error.code == "INVITATION_EXPIRED"
    mock_uow.employees.create.assert_not_called()


@pytest.mark.asyncio
async def test_accept_used_invitation(mock_uow):
    invitation = pending_invitation()
    invitation.status = InvitationStatus.accepted
    mock_uow.invitations.get_by_token_hash.return_value = invitation

    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", "Onboard2024")

    assert result.error.code == "INVITATION_ALREADY_USED"


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["short1", "lettersonly", "12345678"])
async def test_accept_enforces_password_policy(mock_uow, password):
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation()

    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", password)

    assert result.error.code == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_accept_password_confirmation_must_match(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation()

    result = await AcceptInvitationUseCase(mock_uow).execute(
        "invite-token", "Onboard2024", "Onboard2025"
    )

    assert result.error.code == "INVALID_PASSWORD"
    assert result.error.details[0]["field"] == "confirm_password"


@pytest.mark.asyncio
async def test_accept_when_account_exists(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation()
    mock_uow.users.get_by_email.return_value = User(
        email="jane@x.com", password_hash="hash"
    )

    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", "Onboard2024")

    assert result.error.code == "ACCOUNT_EXISTS"


@pytest.mark.asyncio
async def test_accept_loses_race_to_simultaneous_redemption(mock_uow):
    """Both requests read a pending invitation; the conditional update admits one"""
    # Arrange
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation()
    mock_uow.invitations.mark_accepted.return_value = False

    # Act
    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", "Onboard2024")

    # Assert
    assert result.error.code == "INVITATION_ALREADY_USED"
    mock_uow.employees.create.assert_not_called()
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_accept_integrity_error_is_account_exists(mock_uow):
    mock_uow.invitations.get_by_token_hash.return_value = pending_invitation()
    mock_uow.users.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed: users.email")
    )

    result = await AcceptInvitationUseCase(mock_uow).execute("invite-token", "Onboard2024")

    assert result.error.code == "ACCOUNT_EXISTS"
    mock_uow.commit.assert_not_called()
