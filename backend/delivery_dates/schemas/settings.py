# backend/delivery_dates/schemas/settings.py

from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field, field_validator


def _normalize_hhmm(v: str) -> str:
    v = (v or "").strip()
    parts = v.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError("Format must be HH:MM")
    h, m = int(parts[0]), int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError("Invalid HH:MM bounds")
    return f"{h:02d}:{m:02d}"


def _check_timezone(v: str) -> str:
    v = (v or "").strip()
    try:
        ZoneInfo(v)
    except (ValueError, KeyError):
        raise ValueError(f"Unknown IANA timezone: {v!r}") from None
    return v


class ShopSettingsUpdate(BaseModel):
    """Partial update: fields left as None keep their stored value."""
    cutoff_time: Optional[str] = Field(None, description="HH:MM (local) after which same-day delivery closes")
    daily_capacity: Optional[int] = Field(None, ge=0)
    max_days_ahead: Optional[int] = Field(None, ge=0)
    allow_weekend_delivery: Optional[bool] = None
    timezone: Optional[str] = Field(None, description="IANA timezone, e.g. Europe/Berlin")
    show_on_cart_page: Optional[bool] = None

    @field_validator("cutoff_time")
    @classmethod
    def _validate_cutoff(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _normalize_hhmm(v)

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_timezone(v)


class ShopSettingsRead(BaseModel):
    shop: str
    cutoff_time: str
    daily_capacity: int
    max_days_ahead: int
    allow_weekend_delivery: bool
    timezone: str
    show_on_cart_page: bool

    model_config = {"from_attributes": True}
