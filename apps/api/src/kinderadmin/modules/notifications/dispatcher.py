"""
Notification Dispatcher

Sends a message to one or more guardians through the email transport.

The dispatcher is the only place where the "all guardians" sentinel is
expanded: callers pass it through untouched. Delivery is best-effort and
at-most-once. A failure is reported to the caller and never retried, and
it never undoes whatever business action triggered the notification.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from kinderadmin.core import email
from kinderadmin.core.config import settings
from kinderadmin.core.exceptions import ServiceError
from kinderadmin.core.repository import Repository
from kinderadmin.modules.enrollment.models import Guardian

logger = logging.getLogger(__name__)

Transport = Callable[[list[str], str, str], Awaitable[bool]]

DELIVERY_OK = "OK"


class NotificationValidationError(ServiceError):
    """Raised when a notification has no recipients, subject or body."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="INVALID_NOTIFICATION",
            status_code=422,
        )


class DeliveryFailureError(ServiceError):
    """Raised when the transport reports a non-success result."""

    def __init__(self, message: str = "Error al enviar la notificación"):
        super().__init__(
            message=message,
            error_code="DELIVERY_FAILED",
            status_code=502,
        )


@dataclass
class DeliveryReport:
    """Result of a successful hand-off to the transport."""

    recipients: list[str] = field(default_factory=list)
    status: str = DELIVERY_OK


def is_all_sentinel(recipient: str) -> bool:
    return recipient.strip().lower() == settings.notification_all_sentinel.lower()


class NotificationDispatcher:
    """
    Delivers notifications to guardians.

    Args:
        guardians: Guardian directory used to expand the "all" sentinel
        transport: Async callable (recipients, subject, body) -> bool
    """

    def __init__(self, guardians: Repository[Guardian], transport: Transport | None = None):
        self.guardians = guardians
        self.transport = transport or email.send_notification_email

    async def resolve_recipients(self, recipients: list[str]) -> list[str]:
        """
        Resolve the recipient list.

        If any entry is the "all" sentinel, the result is every guardian
        email in the directory. Otherwise the given addresses are used.
        Blank entries are dropped and duplicates removed, keeping order.
        """
        if any(is_all_sentinel(recipient) for recipient in recipients):
            guardians = await self.guardians.list()
            candidates = [guardian.email for guardian in guardians]
            logger.info(
                f"Expanding '{settings.notification_all_sentinel}' "
                f"to {len(candidates)} guardians"
            )
        else:
            candidates = recipients

        resolved: list[str] = []
        for address in candidates:
            address = (address or "").strip()
            if address and address not in resolved:
                resolved.append(address)
        return resolved

    async def send_notification(
        self,
        recipients: list[str],
        subject: str,
        body: str,
    ) -> DeliveryReport:
        """
        Send one notification.

        Args:
            recipients: Email addresses, or the "all guardians" sentinel
            subject: Non-empty subject line
            body: Non-empty message body

        Returns:
            DeliveryReport with the resolved recipients and status "OK"

        Raises:
            NotificationValidationError: If recipients, subject or body is empty
            DeliveryFailureError: If the transport does not report success
        """
        if not subject or not subject.strip():
            raise NotificationValidationError("Subject is required")
        if not body or not body.strip():
            raise NotificationValidationError("Body is required")
        if not recipients:
            raise NotificationValidationError("At least one recipient is required")

        resolved = await self.resolve_recipients(recipients)
        if not resolved:
            raise NotificationValidationError("No recipients to notify")

        try:
            delivered = await self.transport(resolved, subject, body)
        except Exception as e:
            logger.error(f"Notification transport raised: {e}", exc_info=True)
            raise DeliveryFailureError() from e

        if not delivered:
            logger.error(f"Notification delivery failed for {len(resolved)} recipient(s)")
            raise DeliveryFailureError()

        logger.info(f"Notification '{subject}' delivered to {len(resolved)} recipient(s)")
        return DeliveryReport(recipients=resolved)
