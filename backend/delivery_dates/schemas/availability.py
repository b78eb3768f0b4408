# backend/delivery_dates/schemas/availability.py
"""
Pydantic schemas for the storefront-facing delivery endpoints.

Wire keys are camelCase, as consumed by the storefront widget.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AvailabilityResponse(BaseModel):
    """Available and excluded dates for the ordering window."""
    model_config = ConfigDict(populate_by_name=True)

    available_dates: list[str] = Field(default_factory=list, alias="availableDates")
    excluded_dates: list[str] = Field(default_factory=list, alias="excludedDates")
    next_valid_date: Optional[str] = Field(None, alias="nextValidDate")
    excluded_reasons: dict[str, str] = Field(default_factory=dict, alias="excludedReasons")
    message: Optional[str] = None


class ValidateDateRequest(BaseModel):
    """Body of the app proxy validate-date call (shop comes from the signed query)."""
    model_config = ConfigDict(populate_by_name=True)

    delivery_date: Optional[str] = Field(None, alias="deliveryDate")
    product_id: Optional[Union[str, int]] = Field(None, alias="productId")


class ApiValidateDateRequest(ValidateDateRequest):
    shop: Optional[str] = None


class ValidationResponse(BaseModel):
    valid: bool
    reason: Optional[str] = None
