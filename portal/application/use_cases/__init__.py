"""Aggregate application use cases."""

from .estimates import (
    approve_estimate,
    calculate_invoice_total,
    create_estimate,
    reject_estimate,
    update_estimate,
)
from .invoices import mark_invoice_paid
from .projects import create_project, update_project

__all__ = [
    "approve_estimate",
    "calculate_invoice_total",
    "create_estimate",
    "create_project",
    "mark_invoice_paid",
    "reject_estimate",
    "update_estimate",
    "update_project",
]
