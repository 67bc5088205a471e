# salesboard/main.py

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salesboard.api.routers import analytics, sales, upload
from salesboard.core.cache import SummaryCache
from salesboard.core.config import Settings, configure_logging, load_settings
from salesboard.core.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, cache: Optional[SummaryCache] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        gateway = PersistenceGateway(settings.db)
        gateway.create_schema()
        app.state.gateway = gateway

        app.state.cache = cache
        if app.state.cache is None and settings.redis_url:
            app.state.cache = SummaryCache.from_url(settings.redis_url, settings.cache_ttl_seconds)

        logger.info("Database ready at %s", settings.db.sqlalchemy_url().render_as_string(hide_password=True))
        try:
            yield
        finally:
            if app.state.cache is not None:
                app.state.cache.close()
            gateway.close()

    app = FastAPI(title="Salesboard API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(upload.router)
    app.include_router(sales.router)
    app.include_router(analytics.router)

    @app.get("/")
    def root():
        return {"message": "Salesboard API running"}

    return app


def run():
    uvicorn.run(
        "salesboard.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
