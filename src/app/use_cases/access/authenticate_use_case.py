"""
Authenticate Use Case

Resolves a bearer token to an active account.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from src.api.utils.jwt import verify_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import AccountSnapshot


class AuthenticateUseCase:
    """
    Use case for verifying an access token.

    Business Rules:
    - Token must carry a valid signature and an unexpired `exp`
    - The `sub` claim must name an existing, active account
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: Optional[str]) -> Result[AccountSnapshot]:
        if not token:
            return Return.err(
                Error("MISSING_TOKEN", "Not authorized to access this route - No token provided")
            )

        payload = verify_jwt(token)
        if payload is None or "sub" not in payload:
            return Return.err(
                Error("INVALID_TOKEN", "Not authorized to access this route - Invalid token")
            )

        try:
            account_id = UUID(str(payload["sub"]))
        except ValueError:
            return Return.err(
                Error("INVALID_TOKEN", "Not authorized to access this route - Invalid token")
            )

        async with self.uow:
            try:
                account = await self.uow.accounts.get_by_id(account_id)
            except SQLAlchemyError:
                return Return.err(Error("AUTH_LOOKUP_FAILED", "Error verifying credentials"))

            if account is None:
                return Return.err(
                    Error(
                        "ACCOUNT_NOT_FOUND",
                        "Not authorized to access this route - Account not found",
                    )
                )

            if not account.is_active:
                return Return.err(
                    Error(
                        "ACCOUNT_DISABLED",
                        "Not authorized to access this route - Account deactivated",
                    )
                )

            return Return.ok(AccountSnapshot.from_account(account))
