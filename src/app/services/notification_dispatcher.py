from abc import ABC, abstractmethod

from src.domain.entities import Notification


class NotificationDispatcher(ABC):
    """Delivers a stored notification over its channels (email, push, sms)"""

    @abstractmethod
    async def send(self, notification: Notification) -> bool:
        """Hand the notification to its transports; True when accepted"""
        pass
