# backend/delivery_dates/services/delivery/stores.py
"""
Contracts for the persistence collaborators.

The rule code never talks to a database directly: every call receives a
DeliveryStores handle. Production wiring uses the SQLAlchemy stores in
sql_stores.py (optionally with the Redis override cache in front).
"""

from dataclasses import dataclass
from typing import Protocol

from ...schemas.settings import ShopSettingsUpdate
from .blackout import BlackoutEntry
from .overrides import ProductOverride
from .settings import ShopSettingsData


class SettingsStore(Protocol):
    def get(self, shop: str) -> ShopSettingsData | None: ...

    def upsert(self, shop: str, update: ShopSettingsUpdate) -> ShopSettingsData: ...


class BlackoutStore(Protocol):
    def list(self, shop: str) -> list[BlackoutEntry]: ...

    def add(self, shop: str, day: str, recurring: bool = False, label: str | None = None) -> BlackoutEntry: ...

    def remove(self, shop: str, entry_id: int) -> bool: ...


class OverrideStore(Protocol):
    def get(self, shop: str, product_id: str) -> ProductOverride | None: ...

    def upsert(self, shop: str, product_id: str, override: ProductOverride) -> ProductOverride: ...


class CapacityStore(Protocol):
    def get(self, shop: str, day: str) -> int: ...

    def increment(self, shop: str, day: str) -> None: ...


@dataclass(frozen=True)
class DeliveryStores:
    settings: SettingsStore
    blackouts: BlackoutStore
    overrides: OverrideStore
    capacity: CapacityStore
