from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from config import ApplicationConfig
from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.validators import Email, Password, PhoneNumber, RequestModel, page_params
from src.app.services.account_mailer import AccountMailer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.auth import (
    AccountResponse,
    AuthResponse,
    ConfirmPasswordResetUseCase,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    MessageResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    ResendVerificationUseCase,
    VerifyEmailUseCase,
)
from src.app.use_cases.pagination import Page, PageRequest
from src.app.use_cases.users import (
    AccountFilter,
    ChangePasswordUseCase,
    GetProfileUseCase,
    ListAccountsUseCase,
    PasswordChangedResponse,
    SetAccountActiveUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
)
from src.depends import (
    TOKEN_COOKIE,
    get_account_mailer,
    get_request_context,
    get_unit_of_work,
    require_roles,
)
from src.domain.entities import AccountRole

router = APIRouter(prefix="/auth", tags=["Authentication"])

require_admin = require_roles(AccountRole.admin)

AUTH_ERRORS = {
    "ROLE_NOT_ALLOWED": status.HTTP_400_BAD_REQUEST,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_DISABLED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "SESSION_REVOKED": status.HTTP_401_UNAUTHORIZED,
    "SESSION_EXPIRED": status.HTTP_401_UNAUTHORIZED,
}

TOKEN_ERRORS = {
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "TOKEN_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "TOKEN_ALREADY_USED": status.HTTP_400_BAD_REQUEST,
}

ACCOUNT_ERRORS = {
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_UNCHANGED": status.HTTP_400_BAD_REQUEST,
    "CANNOT_DEACTIVATE_SELF": status.HTTP_400_BAD_REQUEST,
}


def _set_token_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        access_token,
        max_age=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )


class RegisterRequest(RequestModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: Email
    password: Password
    phone: Optional[PhoneNumber] = None
    role: AccountRole = AccountRole.member


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[AuthResponse]
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: AccountMailer = Depends(get_account_mailer),
):
    """
    Register a new account.

    Returns an access token and a refresh token, and mails an email
    verification link.

    Raises:
        - 400 Bad Request: Invalid input or a role that cannot be self-assigned
        - 409 Conflict: Email already exists
    """
    command = RegisterCommand(**request.model_dump())
    result = await RegisterUseCase(uow, mailer).execute(command)
    auth = unwrap(result, AUTH_ERRORS)

    _set_token_cookie(response, auth.access_token)
    return ok(auth, "User registered successfully")


class LoginRequest(RequestModel):
    email: Email
    password: str = Field(..., min_length=1)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=ApiResponse[AuthResponse])
async def login(
    request: LoginRequest, response: Response, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Authenticate with email and password.

    Raises:
        - 401 Unauthorized: Invalid credentials or deactivated account
    """
    result = await LoginUseCase(uow).execute(request.email, request.password)
    auth = unwrap(result, AUTH_ERRORS)

    _set_token_cookie(response, auth.access_token)
    return ok(auth, "Login successful")


class RefreshRequest(RequestModel):
    refresh_token: str = Field(..., min_length=1)


@router.post(
    "/refresh-token",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[RefreshTokenResponse],
)
async def refresh_token(
    request: RefreshRequest, response: Response, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Exchange a refresh token for a new token pair.

    The presented refresh token is revoked (rotation).
    """
    result = await RefreshTokenUseCase(uow).execute(request.refresh_token)
    tokens = unwrap(result, AUTH_ERRORS)

    _set_token_cookie(response, tokens.access_token)
    return ok(tokens)


class LogoutRequest(RequestModel):
    refresh_token: Optional[str] = None


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=ApiResponse[LogoutResponse])
async def logout(
    response: Response,
    request: Optional[LogoutRequest] = None,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Revoke the given refresh token, or every session of the account"""
    token = request.refresh_token if request else None
    result = await LogoutUseCase(uow).execute(context.account_id, token)
    data = unwrap(result, AUTH_ERRORS)

    response.delete_cookie(TOKEN_COOKIE)
    return ok(data, "Logged out successfully")


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ApiResponse[AccountResponse])
async def get_me(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetProfileUseCase(uow).execute(context.account_id)
    return ok(unwrap(result, ACCOUNT_ERRORS))


class UpdateProfileRequest(RequestModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[PhoneNumber] = None
    preferences: Optional[Dict[str, Any]] = None


@router.put("/me", status_code=status.HTTP_200_OK, response_model=ApiResponse[AccountResponse])
async def update_me(
    request: UpdateProfileRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    command = UpdateProfileCommand(**request.model_dump())
    result = await UpdateProfileUseCase(uow).execute(context.account_id, command)
    return ok(unwrap(result, ACCOUNT_ERRORS), "Profile updated successfully")


class ChangePasswordRequest(RequestModel):
    current_password: str = Field(..., min_length=1)
    new_password: Password


@router.put(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[PasswordChangedResponse],
)
async def change_password(
    request: ChangePasswordRequest,
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change the account password.

    Every session of the account is revoked; clients must log in again.
    """
    result = await ChangePasswordUseCase(uow).execute(
        context.account_id, request.current_password, request.new_password
    )
    return ok(unwrap(result, ACCOUNT_ERRORS))


class EmailRequest(RequestModel):
    email: Email


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse]
)
async def forgot_password(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: AccountMailer = Depends(get_account_mailer),
):
    """
    Mail a password reset link.

    The response is the same whether or not the email belongs to an account.
    """
    result = await RequestPasswordResetUseCase(uow, mailer).execute(request.email)
    return ok(unwrap(result, TOKEN_ERRORS))


class ResetPasswordRequest(RequestModel):
    token: str = Field(..., min_length=1)
    new_password: Password


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse]
)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Set a new password with a mailed reset token.

    Every session of the account is revoked.

    Raises:
        - 400 Bad Request: Unknown, expired or already used token
    """
    result = await ConfirmPasswordResetUseCase(uow).execute(request.token, request.new_password)
    return ok(unwrap(result, TOKEN_ERRORS))


class VerifyEmailRequest(RequestModel):
    token: str = Field(..., min_length=1)


@router.post(
    "/verify-email", status_code=status.HTTP_200_OK, response_model=ApiResponse[MessageResponse]
)
async def verify_email(request: VerifyEmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Confirm the account email with a mailed verification token.

    Raises:
        - 400 Bad Request: Unknown, expired or already used token
    """
    result = await VerifyEmailUseCase(uow).execute(request.token)
    return ok(unwrap(result, TOKEN_ERRORS))


@router.post(
    "/resend-verification",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[MessageResponse],
)
async def resend_verification(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: AccountMailer = Depends(get_account_mailer),
):
    """Mail a new verification link; earlier links stop working"""
    result = await ResendVerificationUseCase(uow, mailer).execute(request.email)
    return ok(unwrap(result, TOKEN_ERRORS))


# ----------------------------------------------------------------------------
# Account administration (global admin only)
# ----------------------------------------------------------------------------


@router.get(
    "/users", status_code=status.HTTP_200_OK, response_model=ApiResponse[Page[AccountResponse]]
)
async def list_users(
    role: Optional[AccountRole] = None,
    is_active: Optional[bool] = None,
    search: Optional[str] = None,
    page: PageRequest = Depends(page_params),
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    filters = AccountFilter(
        role=role.value if role else None, is_active=is_active, search=search
    )
    result = await ListAccountsUseCase(uow).execute(filters, page)
    return ok(unwrap(result, ACCOUNT_ERRORS))


@router.get(
    "/users/{account_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[AccountResponse]
)
async def get_user(
    account_id: UUID,
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetProfileUseCase(uow).execute(account_id)
    return ok(unwrap(result, ACCOUNT_ERRORS))


class AccountStatusRequest(RequestModel):
    reason: Optional[str] = Field(None, max_length=500)


@router.post(
    "/users/{account_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[AccountResponse],
)
async def activate_user(
    account_id: UUID,
    request: Optional[AccountStatusRequest] = None,
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await SetAccountActiveUseCase(uow).execute(
        context.account_id, account_id, True, request.reason if request else None
    )
    return ok(unwrap(result, ACCOUNT_ERRORS), "User activated successfully")


@router.post(
    "/users/{account_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[AccountResponse],
)
async def deactivate_user(
    account_id: UUID,
    request: Optional[AccountStatusRequest] = None,
    context: RequestContext = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Deactivate an account and revoke all of its sessions"""
    result = await SetAccountActiveUseCase(uow).execute(
        context.account_id, account_id, False, request.reason if request else None
    )
    return ok(unwrap(result, ACCOUNT_ERRORS), "User deactivated successfully")
