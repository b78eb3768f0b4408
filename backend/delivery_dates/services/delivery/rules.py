# backend/delivery_dates/services/delivery/rules.py
"""
Shared rule evaluation for the availability scan and the date validator.

Both paths resolve parameters, build the scan window and judge a single
day through the functions below, so an excluded date always fails with
the same reason and an available date validates. The one exception is
the range bound: the validator counts max_days_ahead from today, so
after the cutoff the last scanned day is rejected as too far ahead.

Per-day precedence (first match wins):
  1. blackout
  2. weekend (when weekend delivery is disabled)
  3. capacity (booked count >= daily capacity)
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from .blackout import BlackoutEntry, is_blacked_out
from .capacity import is_fully_booked
from .clock import add_calendar_days, is_weekend, local_date, minutes_since_midnight, parse_cutoff_time
from .overrides import ProductOverride
from .settings import ShopSettingsData, get_shop_settings
from .stores import DeliveryStores

REASON_CUTOFF = "Ordering window closed for today"
REASON_BLACKOUT = "Blackout date"
REASON_WEEKEND = "Weekend delivery disabled"
REASON_FULLY_BOOKED = "This date is fully booked"
REASON_BEYOND_MAX = "Date is beyond the maximum allowed days ahead"
REASON_PAST = "Date is in the past"


@dataclass(frozen=True)
class EffectiveRules:
    cutoff_minutes: int
    max_days_ahead: int
    daily_capacity: int
    allow_weekend_delivery: bool
    timezone: str


@dataclass(frozen=True)
class ShopSnapshot:
    """Settings and blackouts read once at the start of a call."""
    settings: ShopSettingsData
    blackouts: tuple[BlackoutEntry, ...]


@dataclass(frozen=True)
class ScanWindow:
    today: str
    past_cutoff: bool
    start: str
    end: str  # inclusive
    timezone: str

    def days(self) -> list[str]:
        days = []
        current = self.start
        while current <= self.end:
            days.append(current)
            current = add_calendar_days(current, 1, self.timezone)
        return days


def load_snapshot(stores: DeliveryStores, shop: str) -> ShopSnapshot:
    return ShopSnapshot(
        settings=get_shop_settings(stores.settings, shop),
        blackouts=tuple(stores.blackouts.list(shop)),
    )


def resolve_rules(settings: ShopSettingsData, override: ProductOverride | None = None) -> EffectiveRules:
    """Product override values win over shop settings, field by field."""
    override = override or ProductOverride()

    if override.cutoff_hours is not None:
        cutoff_minutes = override.cutoff_hours * 60
    else:
        cutoff_minutes = parse_cutoff_time(settings.cutoff_time)

    return EffectiveRules(
        cutoff_minutes=cutoff_minutes,
        max_days_ahead=(
            override.max_days_ahead if override.max_days_ahead is not None else settings.max_days_ahead
        ),
        daily_capacity=(
            override.daily_capacity if override.daily_capacity is not None else settings.daily_capacity
        ),
        allow_weekend_delivery=settings.allow_weekend_delivery,
        timezone=settings.timezone,
    )


def scan_window(rules: EffectiveRules, now: datetime) -> ScanWindow:
    """
    Today, or tomorrow once the cutoff has passed, through
    max_days_ahead further days.
    """
    today = local_date(now, rules.timezone)
    past_cutoff = minutes_since_midnight(now, rules.timezone) >= rules.cutoff_minutes
    start = add_calendar_days(today, 1, rules.timezone) if past_cutoff else today
    return ScanWindow(
        today=today,
        past_cutoff=past_cutoff,
        start=start,
        end=add_calendar_days(start, rules.max_days_ahead, rules.timezone),
        timezone=rules.timezone,
    )


def day_exclusion_reason(
    day: str,
    rules: EffectiveRules,
    blackouts: Sequence[BlackoutEntry],
    count_for: Callable[[str], int],
) -> str | None:
    """
    Return the single reason `day` is excluded, or None if it is available.

    count_for is only called when blackout and weekend rules pass.
    """
    if is_blacked_out(day, blackouts):
        return REASON_BLACKOUT
    if not rules.allow_weekend_delivery and is_weekend(day, rules.timezone):
        return REASON_WEEKEND
    if is_fully_booked(count_for(day), rules.daily_capacity):
        return REASON_FULLY_BOOKED
    return None
