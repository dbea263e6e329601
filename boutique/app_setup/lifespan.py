"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Initialise FastAPILimiter (Redis) si RATE_LIMIT_REDIS_URL est configuré.
- Sans URL Redis ou en cas d'échec, le rate limiting est désactivé proprement
  (LOCAL_RATE_LIMIT_FALLBACK=1 active le fallback mémoire).
"""
import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings
    connection = None
    app.state.rate_limit_enabled = False

    if settings.rate_limit_redis_url:
        try:
            connection = redis.from_url(settings.rate_limit_redis_url, encoding="utf-8", decode_responses=True)
            await FastAPILimiter.init(connection)
            app.state.rate_limit_enabled = True
            logger.info("Rate limiting enabled")
        except Exception as e:
            logger.warning(f"Rate limiting disabled due to init error: {e}")
    elif settings.rate_limit_local_fallback:
        logger.info("Rate limiting using local in-memory fallback")
    else:
        logger.info("Rate limiting disabled (RATE_LIMIT_REDIS_URL absent)")

    if not settings.stripe_enabled:
        logger.warning("STRIPE_SECRET_KEY absent: le checkout répondra 500 jusqu'à configuration")
    if not settings.stripe_webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET absent: webhooks acceptés sans vérification de signature")

    yield

    if app.state.rate_limit_enabled:
        await FastAPILimiter.close()
    elif connection is not None:
        await connection.close()
