# backend/delivery_dates/main.py

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from redis import Redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .middleware.audit import audit_middleware
from .redis_client import get_redis
from .routers import blackouts, proxy, settings as settings_router, validate, webhooks

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Delivery Date API")

app.middleware("http")(audit_middleware)

app.include_router(proxy.router)
app.include_router(validate.router)
app.include_router(settings_router.router)
app.include_router(blackouts.router)
app.include_router(webhooks.router)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Storage failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


@app.get("/health")
def health(redis: Redis = Depends(get_redis)):
    try:
        redis_ok = bool(redis.ping())
    except RedisError:
        redis_ok = False
    return {"redis": redis_ok}
