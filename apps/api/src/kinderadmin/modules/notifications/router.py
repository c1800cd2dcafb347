"""
Notifications Router

Endpoints:
- POST /notifications - Send a message to guardians (admin only)

Use `"to": ["All"]` to reach every guardian in the directory.
"""

import logging

from fastapi import APIRouter, Depends

from kinderadmin.core.auth import CurrentUser, get_current_admin_user
from kinderadmin.core.exceptions import ServiceError, to_http_exception
from kinderadmin.core.rate_limit import enforce_user_rate_limit
from kinderadmin.dependencies import get_dispatcher
from kinderadmin.modules.notifications.dispatcher import NotificationDispatcher
from kinderadmin.modules.notifications.schemas import (
    SendNotificationRequest,
    SendNotificationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_NOTIFY = (5, 60)  # 5 notifications per minute


@router.post(
    "",
    response_model=SendNotificationResponse,
    summary="Send Notification",
    responses={
        401: {"description": "Unauthorized - invalid or missing token"},
        403: {"description": "Forbidden - not an admin"},
        422: {"description": "Missing recipients, subject or body"},
        429: {"description": "Rate limit exceeded"},
        502: {
            "description": "Email transport failed",
            "content": {
                "application/json": {
                    "example": {
                        "failed": True,
                        "error": "DELIVERY_FAILED",
                        "message": "Error al enviar la notificación",
                    }
                }
            },
        },
    },
)
async def send_notification(
    data: SendNotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    admin: CurrentUser = Depends(get_current_admin_user),
) -> SendNotificationResponse:
    await enforce_user_rate_limit(admin.id, "notify", *RATE_LIMIT_NOTIFY)

    try:
        report = await dispatcher.send_notification(data.to, data.subject, data.body)
    except ServiceError as e:
        raise to_http_exception(e) from e

    logger.info(f"Admin {admin.id} sent '{data.subject}' to {len(report.recipients)} recipient(s)")
    return SendNotificationResponse(status=report.status, recipients=report.recipients)
