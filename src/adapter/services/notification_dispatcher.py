import logging

from src.app.services.notification_dispatcher import NotificationDispatcher
from src.domain.entities import Notification

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(NotificationDispatcher):
    """
    Dispatcher that records deliveries in the log.

    In-app delivery is the stored row itself; external transports plug in
    by implementing NotificationDispatcher.
    """

    async def send(self, notification: Notification) -> bool:
        logger.info(
            "Notification %s dispatched to %s via %s",
            notification.id,
            notification.recipient_id,
            ",".join(notification.channels or ["in-app"]),
        )
        return True
