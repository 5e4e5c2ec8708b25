"""One-time tokens shared by password reset and email verification"""

from datetime import timedelta

from config import ApplicationConfig
from src.api.utils.security import generate_one_time_token, hash_one_time_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Account, AccountToken, AccountTokenPurpose
from src.libs.result import Error, Result, Return


async def issue_account_token(
    uow: UnitOfWork, account: Account, purpose: AccountTokenPurpose, lifetime: timedelta
) -> str:
    """
    Store a fresh token for purpose and return it in plain text.

    Earlier unused tokens for the same purpose stop working. Caller commits.
    """
    await uow.account_tokens.invalidate_outstanding(account.id, purpose)

    token = generate_one_time_token()
    await uow.account_tokens.create(
        AccountToken(
            account_id=account.id,
            purpose=purpose,
            token_hash=hash_one_time_token(token),
            expires_at=utcnow() + lifetime,
        )
    )
    return token


async def issue_verification_token(uow: UnitOfWork, account: Account) -> str:
    return await issue_account_token(
        uow,
        account,
        AccountTokenPurpose.email_verification,
        timedelta(hours=ApplicationConfig.EMAIL_VERIFICATION_EXPIRE_HOURS),
    )


async def redeem_account_token(
    uow: UnitOfWork, token: str, purpose: AccountTokenPurpose
) -> Result[AccountToken]:
    """Mark a valid token used. Caller commits."""
    stored = await uow.account_tokens.get_by_hash(hash_one_time_token(token), purpose)
    if stored is None:
        return Return.err(Error("INVALID_TOKEN", "Invalid or unknown token"))

    if stored.used_at is not None:
        return Return.err(Error("TOKEN_ALREADY_USED", "This token has already been used"))

    if stored.is_expired(utcnow()):
        return Return.err(Error("TOKEN_EXPIRED", "This token has expired"))

    stored.used_at = utcnow()
    stored = await uow.account_tokens.update(stored)
    return Return.ok(stored)
