# api/main.py
from dotenv import load_dotenv
import os

env = os.getenv("APP_ENV", "local")
if env == "local":
    load_dotenv(".env.local")
else:
    load_dotenv(".env")

from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
import logging
from database.db import init_db
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies.services import ServiceContainer, build_container
from api.errors import register_exception_handlers
from api.routers import (
    health,
    experiments,
    sections,
    ml,
)
from utils.settings import load_settings, resolve_allowed_origins

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
logger.info(f"🔧 Loaded environment: {env}")


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting NASA Experiment Analysis Backend, initializing services")
        if app.state.container is None:
            app.state.container = build_container(load_settings())
        try:
            init_db(app.state.container.engine)
        except Exception as e:
            logger.error(f"❌ Failed to initialize database: {e}", exc_info=True)
            raise
        yield
        app.state.container.engine.dispose()
        logger.info("🛑 Shutting down NASA Experiment Analysis Backend")

    app = FastAPI(
        title="NASA Bioscience Experiment Analysis API",
        version=health.API_VERSION,
        description="Browse NASA bioscience experiments and generate Gemini analyses of them.",
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=resolve_allowed_origins(env),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(experiments.router, prefix="/api/experiments", tags=["Experiments"])
    app.include_router(sections.router, prefix="/api")
    app.include_router(ml.router, prefix="/api/ml", tags=["ML Models"])

    @app.get("/")
    async def root():
        return {"message": "NASA Experiment Analysis API running 🚀"}

    return app


app = create_app()
