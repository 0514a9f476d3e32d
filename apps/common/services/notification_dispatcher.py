"""
In-app notification dispatcher.

Delivery beyond the in-app inbox (email, push) is handled elsewhere.
Callers treat every send as fire-and-forget.
"""
import logging

from ..models import Message

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Service for sending in-app messages"""

    @staticmethod
    def send_message(user_id, event_type, title, body, priority=Message.PRIORITY_NORMAL):
        """Store a message for one receiver and return it"""
        message = Message.objects.create(
            receiver_id=user_id,
            message_type=event_type,
            title=title,
            content=body,
            priority=priority,
        )
        logger.info(
            f"Message {message.id} sent: receiver={user_id} type={event_type} priority={priority}"
        )
        return message
