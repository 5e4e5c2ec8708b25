import logging
from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.account_mailer import LoggingAccountMailer
from src.adapter.services.notification_dispatcher import LoggingNotificationDispatcher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, ServerError
from src.app.services.account_mailer import AccountMailer
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AuthenticateUseCase, RequestContext
from src.domain.entities import AccountRole
from src.libs.result import Error

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

TOKEN_COOKIE = "token"


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_dispatcher() -> NotificationDispatcher:
    return LoggingNotificationDispatcher()


def get_account_mailer() -> AccountMailer:
    return LoggingAccountMailer()


def _read_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE)


async def get_request_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    """
    Dependency that authenticates the request.

    Reads the access token from the Authorization header, falling back to
    the `token` cookie.

    Raises:
        ClientError: 401 if the token is missing, invalid or expired, or
            the account is missing or deactivated
        ServerError: if the account lookup fails
    """
    result = await AuthenticateUseCase(uow).execute(_read_token(request, credentials))

    if result.is_err():
        error = result.error
        if error.code == "AUTH_LOOKUP_FAILED":
            raise ServerError(error)
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)

    return RequestContext(account=result.value)


async def get_optional_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RequestContext:
    """Like get_request_context, but anonymous instead of failing"""
    token = _read_token(request, credentials)
    if not token:
        return RequestContext()

    result = await AuthenticateUseCase(uow).execute(token)
    if result.is_err():
        logger.debug(f"Optional authentication ignored: {result.error.code}")
        return RequestContext()
    return RequestContext(account=result.value)


def require_roles(*roles: AccountRole):
    """
    Dependency factory restricting a route to accounts with a global role
    in roles.
    """

    async def dependency(
        context: RequestContext = Depends(get_request_context),
    ) -> RequestContext:
        if not context.is_authenticated:
            raise ClientError(
                Error("FORBIDDEN", "Not authorized to access this route"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        if context.account.role not in roles:
            logger.warning(
                f"Account {context.account_id} with role {context.account.role.value} "
                f"denied a route for roles {[r.value for r in roles]}"
            )
            raise ClientError(
                Error(
                    "FORBIDDEN",
                    f"User role {context.account.role.value} is not authorized to access this route",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return context

    return dependency
