"""Billing cycle of a paid subscription."""

from enum import Enum


class BillingCycle(str, Enum):
    """Billing cycle (no payment-provider integration, stored for reference)."""

    MONTHLY = "monthly"
    ANNUAL = "annual"
