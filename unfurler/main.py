import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from unfurler.api.v1.health import router as health_router
from unfurler.api.v1.router import api_router
from unfurler.config import settings
from unfurler.core.logging_config import configure_logging
from unfurler.services.fetcher import close_shared_async_client, get_shared_async_client

# Logging is configured before any module logs
configure_logging(log_format=settings.LOG_FORMAT, log_level=settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared fetch client on startup and close it on shutdown."""
    get_shared_async_client()
    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION} ready "
        f"(timeout={settings.FETCH_TIMEOUT}s, follow_redirects={settings.FOLLOW_REDIRECTS})"
    )

    yield

    await close_shared_async_client()
    logger.info("Fetch client closed")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Link previews from Open Graph, Twitter Card and HTML metadata.",
    lifespan=lifespan,
)

app.include_router(api_router)
# /health and /metrics live outside /v1
app.include_router(health_router)


@app.get("/")
async def index():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "unfurl": "/v1/unfurl?url=",
        "docs": app.docs_url,
    }
