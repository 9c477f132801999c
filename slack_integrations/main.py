from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slack_bolt.adapter.fastapi.async_handler import AsyncSlackRequestHandler
import time

from slack_integrations.core.config import settings
from slack_integrations.core.logging_config import setup_logging, get_logger
from slack_integrations.store import close_table, check_table_health
from slack_integrations.api.deps import get_token_store, reset_services

# Setup logging FIRST
setup_logging()
logger = get_logger("slack_integrations.main")

from slack_integrations.api.integrations import router as integrations_router
from slack_integrations.api.slack import router as slack_router
from slack_integrations.api.store import router as store_router
from slack_integrations.slack.bot import create_bolt_app
from slack_integrations.slack.installation_store import TableInstallationStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.PROJECT_NAME} v{settings.VERSION} starting up (store: {settings.STORE_BACKEND})")

    store_health = await check_table_health()
    if store_health["status"] == "healthy":
        logger.info(f"Store ({store_health['backend']}) is healthy - Response time: {store_health.get('response_time_ms', 0)}ms")
    else:
        logger.warning(f"Store ({store_health['backend']}) is unhealthy: {store_health.get('error', 'Unknown error')}")
        logger.warning("Starting anyway - store operations may fail")

    yield

    # Shutdown
    logger.info("Closing store connections...")
    await close_table()
    reset_services()
    logger.info(f"{settings.PROJECT_NAME} shutting down...")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {response.status_code} - {request.method} {request.url.path} - {process_time:.4f}s"
        )

        return response

    app.include_router(integrations_router)
    app.include_router(slack_router)
    app.include_router(store_router)

    bolt_app = create_bolt_app(settings, TableInstallationStore(get_token_store()))
    app.state.slack_handler = AsyncSlackRequestHandler(bolt_app) if bolt_app else None

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
