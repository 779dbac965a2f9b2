import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog_hub.core.config import settings
from catalog_hub.core.middleware import apply_cors, register_exception_handlers
from catalog_hub.routes import api_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    On startup, warn about missing 4over credentials so a misconfigured
    deployment is visible before the first sync fails.
    """
    logger.info("=== Catalog Hub Starting ===")

    if not (settings.fourover_public_key and settings.fourover_private_key):
        logger.warning("4over credentials missing (FOUROVER_PUBLIC_KEY / FOUROVER_PRIVATE_KEY)")
    logger.info(
        "4over base_url=%s item_delay=%ss page_delay=%ss",
        settings.fourover_base_url,
        settings.sync_item_delay_seconds,
        settings.sync_page_delay_seconds,
    )

    logger.info("=== Catalog Hub Ready ===")

    yield

    logger.info("=== Catalog Hub Shutting Down ===")


app = FastAPI(title="Catalog Hub Backend", lifespan=lifespan)
logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")

apply_cors(app)
register_exception_handlers(app)

app.include_router(health_router)
app.include_router(api_router)
