# taskvibe/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskvibe.api.api import api_router
from taskvibe.core.config import settings
from taskvibe.core.error_handlers import register_exception_handlers
from taskvibe.core.middleware import register_middlewares
from taskvibe.db.session import init_db
from taskvibe.services import register_services
from taskvibe.storage import StoreProvider, build_store_provider

logger = logging.getLogger(__name__)


def create_app(store_provider: Optional[StoreProvider] = None) -> FastAPI:
    """
    Build the application.

    Args:
        store_provider: Opens an entity store per request. Defaults to the
            backend named by STORAGE_BACKEND; tests pass their own.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting TaskVibe API {app.version}")
        if store_provider is None and settings.STORAGE_BACKEND == "database":
            init_db()
            logger.info("Database tables ready")

        register_services()
        logger.info("Services registered")

        yield

        logger.info("Shutting down TaskVibe API")

    app = FastAPI(
        title="TaskVibe API",
        description="Personal task tracking with XP, levels and achievements",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store_provider = store_provider or build_store_provider()

    register_exception_handlers(app)
    register_middlewares(app)

    if settings.BACKEND_CORS_ORIGINS:
        allowed_origins = [str(origin) for origin in settings.BACKEND_CORS_ORIGINS]
        logger.info(f"Setting up CORS with allowed origins: {allowed_origins}")

        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def root():
        return {"message": "Welcome to the TaskVibe API"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
