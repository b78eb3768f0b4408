# backend/delivery_dates/routers/webhooks.py
"""
Shopify webhooks.

- orders/create     → bump the daily delivery counter for the chosen date
- products/update   → sync delivery metafields into the override store
- app/uninstalled   → acknowledge

Every request must carry a valid X-Shopify-Hmac-Sha256 header.
Unexpected topics or empty payloads are acknowledged with 200 and ignored.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from ..deps import get_api_secret, get_stores
from ..services.delivery import DeliveryStores, decode_metafields, normalize_product_id
from ..services.delivery.capacity import increment
from ..services.orders import delivery_tags, extract_delivery_date
from ..services.shopify_auth import normalize_shop, verify_webhook_hmac

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@dataclass
class ShopifyWebhook:
    shop: str
    topic: str
    payload: dict[str, Any]


async def verified_webhook(
    request: Request,
    x_shopify_hmac_sha256: str | None = Header(None),
    x_shopify_shop_domain: str | None = Header(None),
    x_shopify_topic: str | None = Header(None),
    secret: str = Depends(get_api_secret),
) -> ShopifyWebhook:
    body = await request.body()
    if not secret:
        logger.error("SHOPIFY_API_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Server misconfiguration")
    if not verify_webhook_hmac(body, x_shopify_hmac_sha256, secret):
        logger.warning(f"Invalid webhook HMAC from shop={x_shopify_shop_domain!r}")
        raise HTTPException(status_code=401, detail="Invalid signature")

    shop = normalize_shop(x_shopify_shop_domain)
    if not shop:
        raise HTTPException(status_code=400, detail="Missing shop")

    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    topic = (x_shopify_topic or "").lower().replace("_", "/")
    return ShopifyWebhook(shop=shop, topic=topic, payload=payload)


def _is_topic(hook: ShopifyWebhook, expected: str) -> bool:
    # Topic header is optional; when present it must match the route
    return not hook.topic or hook.topic == expected


@router.post("/orders/create")
def orders_create(
    hook: ShopifyWebhook = Depends(verified_webhook),
    stores: DeliveryStores = Depends(get_stores),
):
    if not hook.payload or not _is_topic(hook, "orders/create"):
        return {"ok": True}

    delivery_date = extract_delivery_date(hook.payload)
    if delivery_date is None:
        return {"ok": True}

    increment(stores.capacity, hook.shop, delivery_date)
    tags = delivery_tags(hook.payload.get("tags"), delivery_date)
    logger.info(f"Order {hook.payload.get('id')} ({hook.shop}) scheduled for {delivery_date}, tags={tags}")
    return {"ok": True}


@router.post("/products/update")
def products_update(
    hook: ShopifyWebhook = Depends(verified_webhook),
    stores: DeliveryStores = Depends(get_stores),
):
    if not hook.payload or not _is_topic(hook, "products/update"):
        return {"ok": True}

    product_id = hook.payload.get("admin_graphql_api_id") or hook.payload.get("id")
    metafields = hook.payload.get("metafields") or []
    if not product_id or not metafields:
        return {"ok": True}

    product_id = normalize_product_id(product_id)
    override = stores.overrides.upsert(hook.shop, product_id, decode_metafields(metafields))
    logger.info(f"Product {product_id} ({hook.shop}) delivery overrides synced: {override}")
    return {"ok": True}


@router.post("/app/uninstalled")
def app_uninstalled(hook: ShopifyWebhook = Depends(verified_webhook)):
    logger.info(f"App uninstalled from {hook.shop}")
    return {"ok": True}
