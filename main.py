"""
StreamForge TV content API.

Loads the content seed on startup and serves the TV configuration,
navigation sessions and the CMS endpoints.
"""

import logging
from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv(".env.local")

from core.config import get_log_level, get_port, get_sentry_dsn
from core.content import load_store, set_store
from web_api.routes.cms import router as cms_router
from web_api.routes.tv import router as tv_router

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if get_sentry_dsn():
    sentry_sdk.init(dsn=get_sentry_dsn(), traces_sample_rate=0.0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    set_store(load_store())
    logger.info("Content store loaded")
    yield


app = FastAPI(title="StreamForge TV", lifespan=lifespan)

app.include_router(tv_router)
app.include_router(cms_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    """Serve the API with uvicorn on PORT (default 8000)."""
    uvicorn.run(app, host="0.0.0.0", port=get_port(), log_level=get_log_level().lower())


if __name__ == "__main__":
    run()
