# backend/delivery_dates/services/delivery/availability.py
"""
Availability engine: day-by-day scan of the ordering window.

Produces, for one shop (and optionally one product):
  - available dates in scan order
  - excluded dates, each with exactly one reason
  - the first available date

Settings and blackouts are read once per call; the capacity counter is
read once per scanned day that survives the blackout and weekend rules.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from .capacity import count_for
from .overrides import ProductOverride
from .rules import (
    REASON_CUTOFF,
    day_exclusion_reason,
    load_snapshot,
    resolve_rules,
    scan_window,
)
from .stores import DeliveryStores

logger = logging.getLogger(__name__)


@dataclass
class AvailabilityResult:
    available_dates: list[str] = field(default_factory=list)
    excluded_dates: set[str] = field(default_factory=set)
    next_valid_date: str | None = None
    excluded_reasons: dict[str, str] = field(default_factory=dict)

    def add_available(self, day: str) -> None:
        self.available_dates.append(day)
        if self.next_valid_date is None:
            self.next_valid_date = day

    def exclude(self, day: str, reason: str) -> None:
        self.excluded_dates.add(day)
        self.excluded_reasons[day] = reason


def compute_availability(
    stores: DeliveryStores,
    shop: str,
    now: datetime,
    overrides: ProductOverride | None = None,
) -> AvailabilityResult:
    """
    Compute the delivery dates a customer may pick right now.

    Callers must not invoke this for a product whose override has
    enabled=False; they answer with an empty "disabled" payload instead.
    """
    snapshot = load_snapshot(stores, shop)
    rules = resolve_rules(snapshot.settings, overrides)
    window = scan_window(rules, now)

    result = AvailabilityResult()
    if window.past_cutoff:
        result.exclude(window.today, REASON_CUTOFF)

    for day in window.days():
        reason = day_exclusion_reason(
            day,
            rules,
            snapshot.blackouts,
            lambda d: count_for(stores.capacity, shop, d),
        )
        if reason is None:
            result.add_available(day)
        else:
            result.exclude(day, reason)

    logger.debug(
        f"Availability for {shop}: {window.start}..{window.end} "
        f"available={len(result.available_dates)} excluded={len(result.excluded_dates)}"
    )
    return result
