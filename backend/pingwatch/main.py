"""Main FastAPI application - ping results API plus the background poller."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings, get_database_url, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS
from .database import build_engine, build_session_factory, init_db, close_db
from .routers import ping_results_router
from .schemas import HealthResponse
from .services import DockerCLI, ProberService, ResultStore, PollerService

# Configure logging
logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    config: Settings = app.state.settings
    logger.info("Starting PingWatch")

    # Initialize database; failure here aborts startup
    engine = build_engine(get_database_url(config))
    try:
        await init_db(engine)
    except Exception:
        logger.exception("Failed to connect to database")
        await close_db(engine)
        raise
    logger.info("Database initialized")

    store = ResultStore(build_session_factory(engine))
    app.state.store = store

    docker = DockerCLI(config.docker_bin)
    prober = ProberService(docker, config.ping_bin, config.ping_timeout_seconds)
    poller = PollerService(docker, prober, store, config.poll_interval_seconds)
    poller.start()
    logger.info("Poller started")

    yield

    await poller.stop()
    await close_db(engine)
    logger.info("Shutdown complete")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or default_settings

    app = FastAPI(
        title="PingWatch",
        description="Latency to the containers running on this host",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors_origin],
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    app.include_router(ping_results_router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return {"status": "healthy", "service": "pingwatch"}

    return app


# Create the application instance
app = create_app()


def run():
    """Console entry point."""
    import uvicorn

    uvicorn.run(app, host=default_settings.web_host, port=default_settings.web_port)


if __name__ == "__main__":
    run()
