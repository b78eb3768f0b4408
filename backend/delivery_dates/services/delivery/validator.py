# backend/delivery_dates/services/delivery/validator.py
"""
Single-date validation at checkout time.

Re-checks a customer-submitted date against the same rules the
availability scan uses, so a stale or tampered selection is rejected.
Checks run in this order and the first failure is reported:

  1. today after the cutoff
  2. blackout
  3. weekend (when disabled)
  4. capacity
  5. more than max_days_ahead days after today / in the past
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from .capacity import count_for
from .clock import days_between, parse_calendar_date
from .overrides import ProductOverride
from .rules import (
    REASON_BEYOND_MAX,
    REASON_CUTOFF,
    REASON_PAST,
    day_exclusion_reason,
    load_snapshot,
    resolve_rules,
    scan_window,
)
from .stores import DeliveryStores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None


def validate_date(
    stores: DeliveryStores,
    shop: str,
    candidate: str,
    now: datetime,
    overrides: ProductOverride | None = None,
) -> ValidationResult:
    """
    Raises InvalidDeliveryDate if candidate is not a YYYY-MM-DD date;
    no rule is evaluated in that case.
    """
    parse_calendar_date(candidate)

    snapshot = load_snapshot(stores, shop)
    rules = resolve_rules(snapshot.settings, overrides)
    window = scan_window(rules, now)

    result = _check(stores, shop, candidate, rules, snapshot, window)
    if not result.valid:
        logger.info(f"Delivery date rejected: {shop} {candidate} ({result.reason})")
    return result


def _check(stores, shop, candidate, rules, snapshot, window) -> ValidationResult:
    if candidate == window.today and window.past_cutoff:
        return ValidationResult(False, REASON_CUTOFF)

    reason = day_exclusion_reason(
        candidate,
        rules,
        snapshot.blackouts,
        lambda d: count_for(stores.capacity, shop, d),
    )
    if reason is not None:
        return ValidationResult(False, reason)

    # Counted from today, not from the window start: past the cutoff the
    # scan's last day (today + max_days_ahead + 1) fails this check
    days_diff = days_between(window.today, candidate)
    if days_diff > rules.max_days_ahead:
        return ValidationResult(False, REASON_BEYOND_MAX)
    if days_diff < 0:
        return ValidationResult(False, REASON_PAST)

    return ValidationResult(True)
