# backend/delivery_dates/routers/validate.py
"""
Checkout-time validation of a selected delivery date.

POST /api/validate-date  body: {shop, deliveryDate, productId?}

Rejections are normal 200 responses ({valid: false, reason}); only a
missing or malformed request is a 400.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..deps import get_now, get_stores
from ..schemas.availability import ApiValidateDateRequest, ValidateDateRequest, ValidationResponse
from ..services.delivery import DeliveryStores, InvalidDeliveryDate, load_product_override, validate_date
from ..services.shopify_auth import normalize_shop

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


def _bad_request(reason: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"valid": False, "reason": reason})


def validate_request(
    stores: DeliveryStores,
    shop: str,
    data: ValidateDateRequest,
    now: datetime,
) -> ValidationResponse | JSONResponse:
    if not data.delivery_date:
        return _bad_request("Missing deliveryDate")

    overrides = load_product_override(stores.overrides, shop, data.product_id)
    try:
        result = validate_date(stores, shop, data.delivery_date.strip(), now, overrides)
    except InvalidDeliveryDate:
        return _bad_request("Invalid deliveryDate")

    return ValidationResponse(valid=result.valid, reason=result.reason)


@router.post("/validate-date", response_model=ValidationResponse, response_model_exclude_none=True)
def api_validate_date(
    data: ApiValidateDateRequest,
    stores: DeliveryStores = Depends(get_stores),
    now: datetime = Depends(get_now),
):
    shop = normalize_shop(data.shop)
    if not shop or not data.delivery_date:
        return _bad_request("Missing shop or deliveryDate")
    return validate_request(stores, shop, data, now)
