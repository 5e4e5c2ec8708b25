"""Session creation shared by register, login and refresh"""

from datetime import timedelta
from typing import Tuple

from config import ApplicationConfig
from src.api.utils.jwt import create_access_token
from src.api.utils.security import generate_refresh_token, hash_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Account, Session


async def issue_tokens(uow: UnitOfWork, account: Account) -> Tuple[str, str]:
    """Create a session and return (access_token, refresh_token). Caller commits."""
    refresh_token = generate_refresh_token()
    await uow.sessions.create(
        Session(
            account_id=account.id,
            refresh_token_hash=hash_refresh_token(refresh_token),
            expires_at=utcnow() + timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
        )
    )
    access_token = create_access_token(account.id, account.role.value)
    return access_token, refresh_token
