import logging

from src.app.services.notifier import Notification, Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Notifier that records outbound messages in the application log"""

    async def send(self, notification: Notification) -> None:
        logger.info(
            f"Notification [{notification.kind}] to {notification.recipient}: "
            f"{notification.subject}"
        )
