"""Public helpers for emitting side effects of domain mutations."""

from .events import (
    notify_estimate_status,
    notify_invoice_created,
    notify_invoice_paid,
    notify_project_completed,
    notify_project_created,
)

__all__ = [
    "notify_project_created",
    "notify_project_completed",
    "notify_estimate_status",
    "notify_invoice_created",
    "notify_invoice_paid",
]
