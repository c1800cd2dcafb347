"""
Notifications Module

Email notifications to guardians, including the "All" broadcast.

API Endpoints:
- POST /notifications - Send a message (admin only)
"""

from kinderadmin.modules.notifications.dispatcher import (
    DeliveryFailureError,
    DeliveryReport,
    NotificationDispatcher,
    NotificationValidationError,
)

__all__ = [
    "DeliveryFailureError",
    "DeliveryReport",
    "NotificationDispatcher",
    "NotificationValidationError",
]
