# backend/delivery_dates/deps.py
"""
Request-scoped dependencies: stores bound to the request session, the
current instant, the Shopify secret and the admin token guard. Tests
override these.
"""

import hmac
import logging
from datetime import datetime, timezone

from fastapi import Depends, Header, HTTPException
from redis import Redis
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .redis_client import get_redis
from .services.delivery import DeliveryStores
from .services.delivery.sql_stores import sql_delivery_stores
from .services.shopify_auth import normalize_shop

logger = logging.getLogger(__name__)


def get_stores(
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
) -> DeliveryStores:
    return sql_delivery_stores(db, redis)


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_api_secret() -> str:
    return settings.shopify_api_secret


def get_admin_token() -> str:
    return settings.admin_token


def require_admin(
    x_internal_token: str | None = Header(None),
    token: str = Depends(get_admin_token),
) -> None:
    """Guard for the shop owner endpoints (settings, blackouts)."""
    if not token:
        logger.error("ADMIN_TOKEN is not configured")
        raise HTTPException(status_code=500, detail="Server misconfiguration")
    if not x_internal_token or not hmac.compare_digest(x_internal_token.encode(), token.encode()):
        logger.warning("Rejected admin request with missing or invalid X-Internal-Token")
        raise HTTPException(status_code=401, detail="Invalid admin token")


def path_shop(shop: str) -> str:
    """Shop from the URL path, normalized to its myshopify.com domain."""
    normalized = normalize_shop(shop)
    if not normalized:
        raise HTTPException(status_code=400, detail="Missing shop")
    return normalized
