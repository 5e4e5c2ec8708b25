from abc import ABC, abstractmethod

from src.domain.entities import Account


class AccountMailer(ABC):
    """Sends the one-time links of the account lifecycle"""

    @abstractmethod
    async def send_password_reset(self, account: Account, token: str) -> None:
        pass

    @abstractmethod
    async def send_email_verification(self, account: Account, token: str) -> None:
        pass
