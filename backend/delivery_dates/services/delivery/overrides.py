# backend/delivery_dates/services/delivery/overrides.py
"""
Per-product delivery overrides.

Overrides come from product metafields in the "delivery" namespace and are
synced into the override store by the products/update webhook:

  enabled         boolean   false disables the date picker for the product
  cutoff_hours    integer   local hour (0-23) closing same-day ordering
  max_days_ahead  integer
  daily_capacity  integer

Any field left unset falls back to the shop settings.
"""

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

METAFIELD_NAMESPACE = "delivery"
PRODUCT_GID_PREFIX = "gid://shopify/Product/"


@dataclass(frozen=True)
class ProductOverride:
    # None means "not set"; enabled=False is distinct from unset
    enabled: bool | None = None
    cutoff_hours: int | None = None
    max_days_ahead: int | None = None
    daily_capacity: int | None = None

    @property
    def is_disabled(self) -> bool:
        return self.enabled is False


# (key, name, type, description) of the product metafields the app reads
METAFIELD_DEFINITIONS = [
    ("enabled", "Delivery date enabled", "boolean", "Show the delivery date picker for this product"),
    ("cutoff_hours", "Delivery cutoff hour", "number_integer", "Local hour (0-23) after which same-day delivery closes"),
    ("max_days_ahead", "Delivery max days ahead", "number_integer", "How many days ahead customers can pick"),
    ("daily_capacity", "Delivery daily capacity", "number_integer", "Orders accepted per delivery date"),
]

# (low, high); high None means unbounded
_INT_BOUNDS = {"cutoff_hours": (0, 23), "max_days_ahead": (0, None), "daily_capacity": (0, None)}


def normalize_product_id(product_id: str | int) -> str:
    return str(product_id).replace(PRODUCT_GID_PREFIX, "")


def _metafield_value(metafields: list[dict[str, Any]], key: str) -> str | None:
    for field in metafields:
        if field.get("namespace") == METAFIELD_NAMESPACE and field.get("key") == key:
            value = field.get("value")
            return None if value is None else str(value)
    return None


def _decode_int(raw: str, key: str) -> int | None:
    low, high = _INT_BOUNDS[key]
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-integer metafield {key}={raw!r}")
        return None
    if value < low or (high is not None and value > high):
        logger.warning(f"Ignoring out-of-range metafield {key}={value}")
        return None
    return value


def decode_metafields(metafields: list[dict[str, Any]]) -> ProductOverride:
    """
    Build a ProductOverride from raw metafield dicts
    ({"namespace", "key", "value"}). Missing or unparsable keys stay None.
    """
    decoded: dict[str, Any] = {}
    for key, _name, kind, _description in METAFIELD_DEFINITIONS:
        raw = _metafield_value(metafields, key)
        if raw is None:
            continue
        if kind == "boolean":
            decoded[key] = raw.strip().lower() == "true"
        else:
            decoded[key] = _decode_int(raw, key)
    return ProductOverride(**decoded)


def load_product_override(store, shop: str, product_id: str | int | None) -> ProductOverride | None:
    """Fetch the stored override for a product; None when no product or no row."""
    if product_id is None or str(product_id).strip() == "":
        return None
    return store.get(shop, normalize_product_id(product_id))
