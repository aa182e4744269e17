import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from bot_instance import close_bot
from db import create_db_and_tables
from redis_instance import close_redis
from services.payment_gateway import close_payment_gateway
from utils.config_validator import validate_or_exit
from web.payment_router import payment_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    validate_or_exit(config)
    await create_db_and_tables()
    logging.info(f"[Startup] Payment status service ready ({config.RUNTIME_ENVIRONMENT.value})")

    yield

    # Shutdown
    logging.warning('Shutting down..')
    await close_payment_gateway()
    await close_redis()
    await close_bot()
    logging.warning('Bye!')


app = FastAPI(lifespan=lifespan)

if config.WEBHOOK_CORS_ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.WEBHOOK_CORS_ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )
    logging.info(f"[Startup] CORS middleware enabled for origins: {config.WEBHOOK_CORS_ALLOWED_ORIGINS}")
else:
    logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

app.include_router(payment_router)


# Health check endpoint (for Docker container monitoring)
@app.get("/health")
async def health_check():
    """Health check endpoint for Docker healthcheck."""
    return {"status": "healthy"}
