"""
Notification Sink

Outbound notifications are best-effort: they run after the state change
has been committed and a delivery failure never undoes it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    kind: str  # e.g. "invitation", "approved", "information_requested"
    recipient: str
    subject: str
    body: str
    context: Dict[str, Any] = field(default_factory=dict)


class Notifier(ABC):
    """Delivers notifications (email, e-signature requests, chat...)"""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        pass


async def notify_safely(
    notifier: Optional[Notifier], notification: Notification
) -> bool:
    """Send a notification, logging instead of raising on failure"""
    if notifier is None:
        return False
    try:
        await notifier.send(notification)
        return True
    except Exception as e:
        logger.error(
            f"Notification '{notification.kind}' to {notification.recipient} failed: {e}"
        )
        return False
