# backend/delivery_dates/services/delivery/capacity.py
"""
Capacity gate.

Reads and bumps the per-(shop, date) order counter. The gate makes no
decision itself; callers compare the count to the resolved capacity with
is_fully_booked().
"""

import logging

from .stores import CapacityStore

logger = logging.getLogger(__name__)


def count_for(store: CapacityStore, shop: str, day: str) -> int:
    return store.get(shop, day) or 0


def increment(store: CapacityStore, shop: str, day: str) -> None:
    store.increment(shop, day)
    logger.info(f"Delivery count incremented: {shop} {day}")


def is_fully_booked(count: int, daily_capacity: int) -> bool:
    return count >= daily_capacity
