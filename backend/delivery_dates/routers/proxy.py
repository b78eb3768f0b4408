# backend/delivery_dates/routers/proxy.py
"""
App proxy endpoints called by the storefront widget.

GET  /apps/delivery/available-dates?shop=...&signature=...&product_id=...
POST /apps/delivery/validate-date   body: {deliveryDate, productId?}

Shopify signs the proxied query string; unsigned requests get a 401.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request

from ..deps import get_api_secret, get_now, get_stores
from ..schemas.availability import AvailabilityResponse, ValidateDateRequest, ValidationResponse
from ..services.delivery import DeliveryStores, compute_availability, load_product_override
from ..services.shopify_auth import normalize_shop, verify_proxy_signature
from .validate import validate_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/apps/delivery", tags=["app_proxy"])

DISABLED_MESSAGE = "Delivery date picker is disabled for this product."


def proxy_shop(
    request: Request,
    secret: str = Depends(get_api_secret),
) -> str:
    """Verify the proxy signature and return the normalized shop domain."""
    query = dict(request.query_params)
    if not secret:
        logger.error("SHOPIFY_API_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Server misconfiguration")
    if not verify_proxy_signature(query, secret):
        logger.warning(f"Invalid app proxy signature for shop={query.get('shop')!r}")
        raise HTTPException(status_code=401, detail="Invalid signature")

    shop = normalize_shop(query.get("shop"))
    if not shop:
        raise HTTPException(status_code=400, detail="Missing shop")
    return shop


@router.get("/available-dates", response_model=AvailabilityResponse)
def available_dates(
    product_id: str | None = None,
    shop: str = Depends(proxy_shop),
    stores: DeliveryStores = Depends(get_stores),
    now: datetime = Depends(get_now),
):
    overrides = load_product_override(stores.overrides, shop, product_id)
    if overrides is not None and overrides.is_disabled:
        return AvailabilityResponse(message=DISABLED_MESSAGE)

    result = compute_availability(stores, shop, now, overrides)
    return AvailabilityResponse(
        available_dates=result.available_dates,
        excluded_dates=sorted(result.excluded_dates),
        next_valid_date=result.next_valid_date,
        excluded_reasons=result.excluded_reasons,
    )


@router.post("/validate-date", response_model=ValidationResponse, response_model_exclude_none=True)
def proxy_validate_date(
    data: ValidateDateRequest,
    shop: str = Depends(proxy_shop),
    stores: DeliveryStores = Depends(get_stores),
    now: datetime = Depends(get_now),
):
    return validate_request(stores, shop, data, now)
