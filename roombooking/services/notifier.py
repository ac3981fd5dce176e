# roombooking/services/notifier.py
from typing import Optional

from twilio.rest import Client as TwilioSDKClient

from roombooking.config import get_settings
from roombooking.models.user import User
from roombooking.utils.logger import get_logger

logger = get_logger(__name__)


class Notifier:
    """
    Delivers a notification event to a user outside the app.

    Implementations may raise; the dispatcher logs and swallows failures so
    delivery never affects booking state.
    """

    def send(self, recipient: User, event) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    """Used when no delivery channel is configured."""

    def send(self, recipient: User, event) -> None:
        logger.info(
            "Notification %s for %s (%s): %s",
            event.type.value,
            recipient.full_name,
            recipient.email,
            event.message,
        )


class TwilioSmsNotifier(Notifier):
    """
    Thin wrapper around the Twilio Python SDK sending SMS.

    Users without a phone number are skipped.
    """

    def __init__(self, account_sid: str, auth_token: str, from_number: str):
        self._client = TwilioSDKClient(account_sid, auth_token)
        self._from_number = from_number

    def send(self, recipient: User, event) -> None:
        if not recipient.phone:
            logger.info("User %s has no phone number; SMS skipped", recipient.id)
            return
        message = self._client.messages.create(
            to=recipient.phone,
            from_=self._from_number,
            body=f"{event.title}: {event.message}",
        )
        logger.info("SMS %s sent to user %s", message.sid, recipient.id)


_notifier: Optional[Notifier] = None


def get_notifier() -> Notifier:
    """Twilio SMS when fully configured, logging otherwise."""
    global _notifier
    if _notifier is None:
        settings = get_settings()
        if settings.twilio_configured:
            _notifier = TwilioSmsNotifier(
                account_sid=settings.TWILIO_ACCOUNT_SID,
                auth_token=settings.TWILIO_AUTH_TOKEN,
                from_number=settings.TWILIO_FROM_NUMBER,
            )
        else:
            _notifier = LogNotifier()
    return _notifier
