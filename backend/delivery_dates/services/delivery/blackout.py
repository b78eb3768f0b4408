# backend/delivery_dates/services/delivery/blackout.py
"""
Blackout matching.

One-off entries match their exact date. Recurring entries match by
month-day every year; they may be stored as "YYYY-MM-DD" (year ignored)
or as a bare "MM-DD".

A recurring "02-29" only matches in leap years: matching is plain
month-day equality, there is no calendar-aware fallback to Feb 28.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .stores import BlackoutStore


@dataclass(frozen=True)
class BlackoutEntry:
    date: str
    recurring: bool = False
    label: str | None = None
    id: int | None = None


def month_day(value: str) -> str:
    parts = value.split("-")
    if len(parts) >= 3:
        return f"{parts[1]}-{parts[2]}"
    return value


def is_blacked_out(day: str, entries: Iterable[BlackoutEntry]) -> bool:
    day_md = month_day(day)
    for entry in entries:
        if entry.recurring:
            if month_day(entry.date) == day_md:
                return True
        elif entry.date == day:
            return True
    return False


# ── Store passthrough ────────────────────────────────────────────────────


def list_blackouts(store: BlackoutStore, shop: str) -> list[BlackoutEntry]:
    return list(store.list(shop))


def add_blackout(
    store: BlackoutStore,
    shop: str,
    day: str,
    recurring: bool = False,
    label: str | None = None,
) -> BlackoutEntry:
    return store.add(shop, day, recurring=recurring, label=label)


def remove_blackout(store: BlackoutStore, shop: str, entry_id: int) -> bool:
    return store.remove(shop, entry_id)
