# backend/delivery_dates/services/shopify_auth.py
"""
Shopify request signatures.

- verify_proxy_signature(): app proxy query "signature" (hex HMAC-SHA256)
- verify_webhook_hmac(): X-Shopify-Hmac-Sha256 header (base64 HMAC-SHA256 of the raw body)
- normalize_shop(): "my-store" → "my-store.myshopify.com"
"""

import base64
import hashlib
import hmac
from typing import Mapping


def _proxy_message(query: Mapping[str, str]) -> str:
    # Sorted key=value pairs concatenated with no separator
    return "".join(
        f"{k}={v}" for k, v in sorted(query.items()) if k != "signature"
    )


def sign_proxy_query(query: Mapping[str, str], secret: str) -> str:
    return hmac.new(
        secret.encode(),
        _proxy_message(query).encode(),
        hashlib.sha256,
    ).hexdigest()


def verify_proxy_signature(query: Mapping[str, str], secret: str) -> bool:
    received = query.get("signature")
    if not received or not secret:
        return False
    return hmac.compare_digest(sign_proxy_query(query, secret), received)


def sign_webhook_body(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode(), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_webhook_hmac(body: bytes, received: str | None, secret: str) -> bool:
    if not received or not secret:
        return False
    return hmac.compare_digest(sign_webhook_body(body, secret), received)


def normalize_shop(shop: str | None) -> str | None:
    shop = (shop or "").strip()
    if not shop:
        return None
    return shop if "." in shop else f"{shop}.myshopify.com"
