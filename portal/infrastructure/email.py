"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from portal.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        # Fall back to a JSON string for unrecognised payloads
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        try:
            return "; ".join(str(item) for item in parsed)
        except TypeError:
            return None

    return None


def _log_sendgrid_exception(exc: Exception) -> None:
    """Log a SendGrid API error with helpful troubleshooting details."""

    status_code = getattr(exc, "status_code", None)
    body = getattr(exc, "body", None)
    details = _extract_sendgrid_error_details(body)

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
    elif status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid API request failed: %s", details)
    else:
        logger.exception("Error sending email via SendGrid: %s", exc)


def _log_unsuccessful_response(response: Any) -> None:
    """Log details from an unsuccessful SendGrid response object."""

    status_code = getattr(response, "status_code", None)
    body = getattr(response, "body", None)
    details = _extract_sendgrid_error_details(body)

    if details:
        logger.error(
            "SendGrid API responded with status %s: %s", status_code, details
        )
    else:
        logger.error("SendGrid API responded with status %s", status_code)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_exception(exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_unsuccessful_response(response)
        return False

    return True


def _format_cents(amount_cents: int | None) -> str:
    return f"${(amount_cents or 0) / 100:,.2f}"


def send_project_created_email(
    email: str,
    user_name: str,
    project_title: str,
    project_description: str | None,
    deadline: str | None = None,
) -> bool:
    """Tell the client that a new project was opened for them."""

    subject = f"🚀 New Project Created: {project_title}"
    parts = [
        f"<p>Hi {escape(user_name)},</p>",
        f"<p>A new project <strong>{escape(project_title)}</strong> has been created for you.</p>",
    ]
    if project_description:
        parts.append(f"<p>{escape(project_description)}</p>")
    if deadline:
        parts.append(f"<p><strong>Deadline:</strong> {escape(deadline)}</p>")
    return send_email(subject, "".join(parts), email)


def send_project_completed_email(
    email: str,
    user_name: str,
    project_title: str,
    project_description: str | None,
) -> bool:
    """Congratulate the client once their project is completed."""

    subject = f"🎉 Project Completed: {project_title}"
    parts = [
        f"<p>Hi {escape(user_name)},</p>",
        f"<p>Congratulations! Your project <strong>{escape(project_title)}</strong> "
        "has been completed successfully.</p>",
    ]
    if project_description:
        parts.append(f"<p>{escape(project_description)}</p>")
    return send_email(subject, "".join(parts), email)


def send_estimate_created_email(
    email: str,
    user_name: str,
    estimate_title: str,
    final_price_cents: int | None,
    estimates_url: str,
) -> bool:
    """Send the client a finalized estimate prepared by an administrator."""

    subject = f"📝 New Estimate: {estimate_title}"
    html_content = "".join(
        (
            f"<p>Hi {escape(user_name)},</p>",
            f"<p>An estimate for <strong>{escape(estimate_title)}</strong> is ready for your review.</p>",
            f"<p><strong>Total:</strong> {_format_cents(final_price_cents)}</p>",
            f'<p><a href="{escape(estimates_url)}">Review the estimate</a></p>',
        )
    )
    return send_email(subject, html_content, email)


def send_invoice_created_email(
    email: str,
    user_name: str,
    project_title: str,
    amount_cents: int,
    invoices_url: str,
) -> bool:
    """Send the client the invoice generated for an approved estimate."""

    subject = f"💳 Invoice for {project_title}"
    html_content = "".join(
        (
            f"<p>Hi {escape(user_name)},</p>",
            f"<p>An invoice for <strong>{escape(project_title)}</strong> has been issued.</p>",
            f"<p><strong>Amount due:</strong> {_format_cents(amount_cents)}</p>",
            f'<p><a href="{escape(invoices_url)}">View your invoices</a></p>',
        )
    )
    return send_email(subject, html_content, email)


__all__ = [
    "send_email",
    "send_project_created_email",
    "send_project_completed_email",
    "send_estimate_created_email",
    "send_invoice_created_email",
]
