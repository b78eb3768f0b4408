# backend/delivery_dates/schemas/blackouts.py

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

_FULL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_DAY = re.compile(r"^\d{2}-\d{2}$")


class BlackoutCreate(BaseModel):
    date: str
    recurring: bool = False
    label: Optional[str] = None

    @field_validator("label")
    @classmethod
    def _strip_label(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def _validate_date(self):
        value = self.date.strip()
        if _FULL_DATE.match(value):
            date.fromisoformat(value)
        elif self.recurring and _MONTH_DAY.match(value):
            # Leap year so "02-29" is accepted
            date.fromisoformat(f"2000-{value}")
        else:
            raise ValueError("date must be YYYY-MM-DD (or MM-DD for recurring entries)")
        self.date = value
        return self


class BlackoutRead(BaseModel):
    id: int
    date: str
    recurring: bool
    label: Optional[str] = None

    model_config = {"from_attributes": True}
