import logging

from src.app.services.account_mailer import AccountMailer
from src.domain.entities import Account

logger = logging.getLogger(__name__)


class LoggingAccountMailer(AccountMailer):
    """
    Mailer that records sends in the log.

    The token itself is never logged; a mail transport plugs in by
    implementing AccountMailer.
    """

    async def send_password_reset(self, account: Account, token: str) -> None:
        logger.info("Password reset mail queued for account %s", account.id)

    async def send_email_verification(self, account: Account, token: str) -> None:
        logger.info("Verification mail queued for account %s", account.id)
