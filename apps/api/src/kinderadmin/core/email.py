"""
Email Service using Resend

Delivery transport for guardian notifications.
"""

import asyncio
import logging
from html import escape

import resend

from kinderadmin.core.config import settings

logger = logging.getLogger(__name__)

# Initialize Resend with API key
resend.api_key = settings.resend_api_key

# Resend rejects more addresses than this in one field
MAX_RECIPIENTS_PER_EMAIL = 50


def render_notification_html(subject: str, body: str) -> str:
    """Render a plain-text notification into the HTML email template."""
    # User text is escaped before templating
    safe_subject = escape(subject)
    safe_body = "<br>".join(escape(line) for line in body.splitlines())

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{
                font-family: system-ui, -apple-system, sans-serif;
                line-height: 1.6;
                color: #1f2937;
            }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .header {{ color: #1a365d; margin-bottom: 24px; }}
            .footer {{
                margin-top: 40px;
                padding-top: 20px;
                border-top: 1px solid #e5e7eb;
                color: #6b7280;
                font-size: 14px;
            }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{safe_subject}</h1>

            <p>{safe_body}</p>

            <div class="footer">
                <p>KinderAdminPro - Administración Escolar</p>
            </div>
        </div>
    </body>
    </html>
    """


async def send_email(
    to_emails: list[str],
    subject: str,
    html_content: str,
    bcc_emails: list[str] | None = None,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_emails: Recipient email addresses
        subject: Email subject line
        html_content: HTML content of the email
        bcc_emails: Hidden recipients, if any

    Returns:
        True if email was sent successfully
    """
    recipient_count = len(to_emails) + len(bcc_emails or [])

    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(
            f"EMAIL TO: {', '.join(to_emails)} (+{len(bcc_emails or [])} bcc) | SUBJECT: {subject}"
        )
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": to_emails,
            "subject": subject,
            "html": html_content,
        }
        if bcc_emails:
            params["bcc"] = bcc_emails

        # Resend client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {recipient_count} recipient(s), id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {recipient_count} recipient(s): {e}")
        return False


async def send_bulk_email(recipients: list[str], subject: str, html_content: str) -> bool:
    """
    Send the same email to many recipients without exposing their addresses.

    Recipients are put in bcc, in batches of at most
    MAX_RECIPIENTS_PER_EMAIL, with the sender as the visible recipient.
    Sending stops at the first failed batch.

    Returns:
        True if every batch was sent
    """
    for start in range(0, len(recipients), MAX_RECIPIENTS_PER_EMAIL):
        batch = recipients[start : start + MAX_RECIPIENTS_PER_EMAIL]
        if not await send_email([settings.email_from], subject, html_content, bcc_emails=batch):
            logger.error(
                f"Bulk email '{subject}' stopped after {start} of {len(recipients)} recipient(s)"
            )
            return False
    return True


async def send_notification_email(to_emails: list[str], subject: str, body: str) -> bool:
    """
    Send a plain-text notification wrapped in the standard template.

    A single recipient is addressed directly. Several recipients are
    sent as a bulk email.
    """
    html_content = render_notification_html(subject, body)
    if len(to_emails) == 1:
        return await send_email(to_emails, subject, html_content)
    return await send_bulk_email(to_emails, subject, html_content)
