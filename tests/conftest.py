# tests/conftest.py
from dataclasses import asdict, replace
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from delivery_dates.models import Base
from delivery_dates.services.delivery import BlackoutEntry, DeliveryStores, ProductOverride, ShopSettingsData
from delivery_dates.services.delivery.settings import DEFAULT_SETTINGS

SHOP = "test-shop.myshopify.com"
API_SECRET = "test-secret"
ADMIN_TOKEN = "test-admin-token"


# --- In-memory stores (same contracts as the SQL stores) ---
class MemorySettingsStore:
    def __init__(self, data: dict[str, ShopSettingsData] | None = None):
        self.data = dict(data or {})
        self.get_calls = 0

    def get(self, shop):
        self.get_calls += 1
        return self.data.get(shop)

    def upsert(self, shop, update):
        base = self.data.get(shop, DEFAULT_SETTINGS)
        saved = replace(base, **update.model_dump(exclude_none=True))
        self.data[shop] = saved
        return saved


class MemoryBlackoutStore:
    def __init__(self, entries: dict[str, list[BlackoutEntry]] | None = None):
        self.entries = {shop: list(rows) for shop, rows in (entries or {}).items()}
        self.list_calls = 0
        self._next_id = 1000

    def list(self, shop):
        self.list_calls += 1
        return list(self.entries.get(shop, []))

    def add(self, shop, day, recurring=False, label=None):
        self._next_id += 1
        entry = BlackoutEntry(id=self._next_id, date=day, recurring=recurring, label=label)
        self.entries.setdefault(shop, []).append(entry)
        return entry

    def remove(self, shop, entry_id):
        rows = self.entries.get(shop, [])
        kept = [e for e in rows if e.id != entry_id]
        self.entries[shop] = kept
        return len(kept) != len(rows)


class MemoryOverrideStore:
    def __init__(self, data: dict[tuple[str, str], ProductOverride] | None = None):
        self.data = dict(data or {})

    def get(self, shop, product_id):
        return self.data.get((shop, product_id))

    def upsert(self, shop, product_id, override):
        current = self.data.get((shop, product_id), ProductOverride())
        changes = {k: v for k, v in asdict(override).items() if v is not None}
        saved = replace(current, **changes)
        self.data[(shop, product_id)] = saved
        return saved


class MemoryCapacityStore:
    def __init__(self, counts: dict[tuple[str, str], int] | None = None):
        self.counts = dict(counts or {})
        self.get_calls: list[str] = []

    def get(self, shop, day):
        self.get_calls.append(day)
        return self.counts.get((shop, day), 0)

    def increment(self, shop, day):
        self.counts[(shop, day)] = self.counts.get((shop, day), 0) + 1


class FakeRedis:
    """get / set / delete subset of redis.Redis with decode_responses=True."""

    def __init__(self, fail: bool = False):
        self.data: dict[str, str] = {}
        self.fail = fail
        self.ttls: dict[str, int] = {}

    def _check(self):
        if self.fail:
            raise RedisConnectionError("redis down")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self._check()
        self.data[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    def delete(self, *keys):
        self._check()
        return sum(1 for k in keys if self.data.pop(k, None) is not None)

    def ping(self):
        self._check()
        return True


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_stores(
    settings: ShopSettingsData | None = None,
    blackouts: list[BlackoutEntry] | None = None,
    counts: dict[str, int] | None = None,
    overrides: dict[str, ProductOverride] | None = None,
    shop: str = SHOP,
) -> DeliveryStores:
    return DeliveryStores(
        settings=MemorySettingsStore({shop: settings} if settings else None),
        blackouts=MemoryBlackoutStore({shop: blackouts or []}),
        overrides=MemoryOverrideStore({(shop, pid): o for pid, o in (overrides or {}).items()}),
        capacity=MemoryCapacityStore({(shop, day): n for day, n in (counts or {}).items()}),
    )


@pytest.fixture
def june_settings() -> ShopSettingsData:
    """cutoff 14:00, capacity 2, 3 days ahead, weekends off, UTC."""
    return ShopSettingsData(
        cutoff_time="14:00",
        daily_capacity=2,
        max_days_ahead=3,
        allow_weekend_delivery=False,
        timezone="UTC",
    )


# --- SQL ---
@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


# --- API ---
@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def now_holder() -> dict:
    return {"now": utc(2024, 6, 3, 10, 0)}


@pytest.fixture
def client(db_engine, fake_redis, now_holder):
    from delivery_dates.database import get_db
    from delivery_dates.deps import get_admin_token, get_api_secret, get_now
    from delivery_dates.main import app
    from delivery_dates.redis_client import get_redis

    Session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_now] = lambda: now_holder["now"]
    app.dependency_overrides[get_api_secret] = lambda: API_SECRET
    app.dependency_overrides[get_admin_token] = lambda: ADMIN_TOKEN
    with TestClient(app, headers={"X-Internal-Token": ADMIN_TOKEN}) as test_client:
        yield test_client
    app.dependency_overrides.clear()
