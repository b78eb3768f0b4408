# backend/delivery_dates/services/delivery/sql_stores.py
"""
SQLAlchemy implementations of the delivery store contracts.

One instance per request, bound to the request's Session. Errors from the
database (sqlalchemy.exc.SQLAlchemyError) are not caught here.
"""

from dataclasses import asdict

from redis import Redis
from sqlalchemy.orm import Session

from ...config import settings as app_settings
from ...models.generated import BlackoutDates, DeliveryDayCounts, ProductDeliveryCache, ShopSettings
from ...schemas.settings import ShopSettingsUpdate
from .blackout import BlackoutEntry
from .override_cache import CachedOverrideStore
from .overrides import ProductOverride
from .settings import DEFAULT_SETTINGS, ShopSettingsData
from .stores import DeliveryStores

_OVERRIDE_FIELDS = ("enabled", "cutoff_hours", "max_days_ahead", "daily_capacity")


def _optional_bool(value) -> bool | None:
    return None if value is None else bool(value)


def _optional_int(value) -> int | None:
    return None if value is None else int(value)


# ── Settings ─────────────────────────────────────────────────────────────


class SqlSettingsStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, shop: str) -> ShopSettings | None:
        return self.db.query(ShopSettings).filter(ShopSettings.shop == shop).first()

    @staticmethod
    def _to_data(row: ShopSettings) -> ShopSettingsData:
        return ShopSettingsData(
            cutoff_time=row.cutoff_time,
            daily_capacity=row.daily_capacity,
            max_days_ahead=row.max_days_ahead,
            allow_weekend_delivery=bool(row.allow_weekend_delivery),
            timezone=row.timezone,
            show_on_cart_page=bool(row.show_on_cart_page),
        )

    def get(self, shop: str) -> ShopSettingsData | None:
        row = self._row(shop)
        return self._to_data(row) if row else None

    def upsert(self, shop: str, update: ShopSettingsUpdate) -> ShopSettingsData:
        row = self._row(shop)
        if row is None:
            row = ShopSettings(shop=shop)
            self.db.add(row)
            changes = {**asdict(DEFAULT_SETTINGS), **update.model_dump(exclude_none=True)}
        else:
            changes = update.model_dump(exclude_none=True)

        for name, value in changes.items():
            # Flags are stored as 0/1 integers
            setattr(row, name, int(value) if isinstance(value, bool) else value)

        self.db.commit()
        self.db.refresh(row)
        return self._to_data(row)


# ── Blackouts ────────────────────────────────────────────────────────────


class SqlBlackoutStore:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_entry(row: BlackoutDates) -> BlackoutEntry:
        return BlackoutEntry(
            id=row.id,
            date=row.date,
            recurring=bool(row.recurring),
            label=row.label,
        )

    def list(self, shop: str) -> list[BlackoutEntry]:
        rows = (
            self.db.query(BlackoutDates)
            .filter(BlackoutDates.shop == shop)
            .order_by(BlackoutDates.date, BlackoutDates.id)
            .all()
        )
        return [self._to_entry(row) for row in rows]

    def add(self, shop: str, day: str, recurring: bool = False, label: str | None = None) -> BlackoutEntry:
        row = BlackoutDates(shop=shop, date=day, recurring=int(recurring), label=label)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._to_entry(row)

    def remove(self, shop: str, entry_id: int) -> bool:
        deleted = (
            self.db.query(BlackoutDates)
            .filter(BlackoutDates.shop == shop, BlackoutDates.id == entry_id)
            .delete()
        )
        self.db.commit()
        return deleted > 0


# ── Product overrides ────────────────────────────────────────────────────


class SqlOverrideStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, shop: str, product_id: str) -> ProductDeliveryCache | None:
        return (
            self.db.query(ProductDeliveryCache)
            .filter(
                ProductDeliveryCache.shop == shop,
                ProductDeliveryCache.product_id == product_id,
            )
            .first()
        )

    @staticmethod
    def _to_override(row: ProductDeliveryCache) -> ProductOverride:
        return ProductOverride(
            enabled=_optional_bool(row.enabled),
            cutoff_hours=_optional_int(row.cutoff_hours),
            max_days_ahead=_optional_int(row.max_days_ahead),
            daily_capacity=_optional_int(row.daily_capacity),
        )

    def get(self, shop: str, product_id: str) -> ProductOverride | None:
        row = self._row(shop, product_id)
        return self._to_override(row) if row else None

    def upsert(self, shop: str, product_id: str, override: ProductOverride) -> ProductOverride:
        """Unset (None) fields of `override` leave stored values untouched."""
        row = self._row(shop, product_id)
        if row is None:
            row = ProductDeliveryCache(shop=shop, product_id=product_id)
            self.db.add(row)

        for name in _OVERRIDE_FIELDS:
            value = getattr(override, name)
            if value is not None:
                setattr(row, name, int(value))

        self.db.commit()
        self.db.refresh(row)
        return self._to_override(row)


# ── Capacity ─────────────────────────────────────────────────────────────


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        # build_engine rejects other backends at startup
        raise ValueError(f"Atomic upsert not supported for dialect {dialect!r}")
    return insert


class SqlCapacityStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, shop: str, day: str) -> int:
        count = (
            self.db.query(DeliveryDayCounts.count)
            .filter(DeliveryDayCounts.shop == shop, DeliveryDayCounts.date == day)
            .scalar()
        )
        return count or 0

    def increment(self, shop: str, day: str) -> None:
        """Single INSERT ... ON CONFLICT DO UPDATE SET count = count + 1."""
        insert = _dialect_insert(self.db)
        stmt = insert(DeliveryDayCounts).values(shop=shop, date=day, count=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=["shop", "date"],
            set_={"count": DeliveryDayCounts.count + 1},
        )
        self.db.execute(stmt)
        self.db.commit()


def sql_delivery_stores(db: Session, redis: Redis | None = None) -> DeliveryStores:
    """Wire the SQL stores; with a Redis client the override store is cached."""
    overrides = SqlOverrideStore(db)
    if redis is not None:
        overrides = CachedOverrideStore(
            overrides,
            redis,
            ttl_seconds=app_settings.override_cache_ttl_seconds,
        )
    return DeliveryStores(
        settings=SqlSettingsStore(db),
        blackouts=SqlBlackoutStore(db),
        overrides=overrides,
        capacity=SqlCapacityStore(db),
    )
