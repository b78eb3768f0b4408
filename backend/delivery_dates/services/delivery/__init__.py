# backend/delivery_dates/services/delivery/__init__.py
"""
Delivery date rules.

Range query:       compute_availability() → AvailabilityResult
Checkout re-check: validate_date() → ValidationResult

Both share rules.py, so they never disagree about a date.
"""

from .availability import AvailabilityResult, compute_availability
from .blackout import BlackoutEntry, is_blacked_out
from .errors import InvalidDeliveryDate
from .overrides import ProductOverride, decode_metafields, load_product_override, normalize_product_id
from .settings import DEFAULT_SETTINGS, ShopSettingsData, get_shop_settings
from .stores import DeliveryStores
from .validator import ValidationResult, validate_date

__all__ = [
    "AvailabilityResult",
    "compute_availability",
    "BlackoutEntry",
    "is_blacked_out",
    "InvalidDeliveryDate",
    "ProductOverride",
    "decode_metafields",
    "load_product_override",
    "normalize_product_id",
    "DEFAULT_SETTINGS",
    "ShopSettingsData",
    "get_shop_settings",
    "DeliveryStores",
    "ValidationResult",
    "validate_date",
]
