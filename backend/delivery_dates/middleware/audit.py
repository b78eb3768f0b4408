# writes: method / path / status; shop; IP / UA; processing time
# does NOT block the request; does NOT write to the DB

import time
from fastapi import Request
import json
import logging

logger = logging.getLogger("delivery_dates.audit")


async def audit_middleware(request: Request, call_next):
    start_ts = time.time()

    response = await call_next(request)

    duration_ms = int((time.time() - start_ts) * 1000)

    record = {
        "ts": int(start_ts),
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "shop": request.query_params.get("shop") or request.headers.get("X-Shopify-Shop-Domain"),
        "ip": request.headers.get("X-Real-IP") or (request.client.host if request.client else None),
        "ua": request.headers.get("User-Agent", ""),
        "duration_ms": duration_ms
    }

    logger.info(json.dumps(record, ensure_ascii=False))

    return response
