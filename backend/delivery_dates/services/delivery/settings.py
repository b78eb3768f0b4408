# backend/delivery_dates/services/delivery/settings.py
"""
Shop-level delivery settings.

A shop without a stored row gets the documented defaults; that is not
an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .stores import SettingsStore


@dataclass(frozen=True)
class ShopSettingsData:
    """
    Attributes:
        cutoff_time: Local "HH:MM" after which same-day delivery closes
        daily_capacity: Orders per calendar date before it is fully booked
        max_days_ahead: How many days past the first orderable day to offer
        allow_weekend_delivery: Saturdays and Sundays are orderable
        timezone: IANA timezone every calendar date is expressed in
        show_on_cart_page: Storefront flag, not used by the rules
    """
    cutoff_time: str = "14:00"
    daily_capacity: int = 50
    max_days_ahead: int = 30
    allow_weekend_delivery: bool = False
    timezone: str = "UTC"
    show_on_cart_page: bool = False


DEFAULT_SETTINGS = ShopSettingsData()


def get_shop_settings(store: SettingsStore, shop: str) -> ShopSettingsData:
    stored = store.get(shop)
    return stored if stored is not None else DEFAULT_SETTINGS
