# backend/delivery_dates/services/orders.py
"""
Order payload helpers for the orders/create webhook.

The storefront widget stores the chosen date as the line item property
"Delivery Date".
"""

import logging
from typing import Any

from .delivery.clock import parse_calendar_date
from .delivery.errors import InvalidDeliveryDate

logger = logging.getLogger(__name__)

DELIVERY_DATE_PROPERTY = "Delivery Date"
DELIVERY_SELECTED_TAG = "Delivery-Date-Selected"


def extract_delivery_date(order: dict[str, Any]) -> str | None:
    """First "Delivery Date" line item property holding a valid YYYY-MM-DD date."""
    for item in order.get("line_items") or []:
        for prop in item.get("properties") or []:
            if prop.get("name") != DELIVERY_DATE_PROPERTY or not prop.get("value"):
                continue
            value = str(prop["value"]).strip()
            try:
                parse_calendar_date(value)
            except InvalidDeliveryDate:
                logger.warning(f"Order {order.get('id')}: ignoring malformed delivery date {value!r}")
                continue
            return value
    return None


def delivery_tags(existing_tags: str | None, delivery_date: str) -> list[str]:
    """Existing order tags plus the delivery tags, without duplicates."""
    tags = [t.strip() for t in (existing_tags or "").split(",") if t.strip()]
    for tag in (f"Delivery-{delivery_date}", DELIVERY_SELECTED_TAG):
        if tag not in tags:
            tags.append(tag)
    return tags
