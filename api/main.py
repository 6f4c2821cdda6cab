"""
Sales Processor API - Main Application.

FastAPI application receiving point-of-sale webhooks for two product lines
(3D toys, jewelry). Sink clients are created once at startup; missing
configuration stops the process before it serves traffic.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from api import __version__
from api.config import Settings, load_settings
from api.models import HealthResponse
from domain.sale import ProductLine
from repositories.errors import StartupError
from repositories.ledger_repository import SheetsLedger, load_credentials
from repositories.notifier_repository import TelegramNotifier
from services.sale_service import SaleProcessor

logger = logging.getLogger(__name__)

SERVICE_NAME: str = "sales-processor"

ENDPOINTS: Tuple[str, ...] = (
    "POST /3d-toy-sale/",
    "POST /jewelry-sale/",
    "GET  /health",
)


def build_processors(settings: Settings) -> Tuple[SaleProcessor, SaleProcessor, TelegramNotifier]:
    """
    Create the sink clients and one SaleProcessor per product line.

    The Telegram notifier is shared between both product lines.

    Raises:
        StartupError: credentials, bot token, or ledger configuration unusable
    """

    notifier = TelegramNotifier(settings.telegram_bot_token, settings.telegram_chat_id)
    try:
        notifier.verify()
        credentials = load_credentials(settings.credentials_file)
        toy_ledger = SheetsLedger.from_settings(settings.ledger_for(ProductLine.TOY), credentials)
        jewelry_ledger = SheetsLedger.from_settings(settings.ledger_for(ProductLine.JEWELRY), credentials)
    except StartupError:
        notifier.close()
        raise

    return (
        SaleProcessor(toy_ledger, notifier),
        SaleProcessor(jewelry_ledger, notifier),
        notifier,
    )


def create_app(
    toy_processor: Optional[SaleProcessor] = None,
    jewelry_processor: Optional[SaleProcessor] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Processors passed in are used as-is; otherwise they are built from
    `settings` (or the environment) when the application starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "toy_processor", None) is not None:
            yield
            return

        toy, jewelry, notifier = build_processors(settings or load_settings())
        app.state.toy_processor = toy
        app.state.jewelry_processor = jewelry
        try:
            yield
        finally:
            logger.info("Shutting down server...")
            toy.shutdown()
            jewelry.shutdown()
            notifier.close()

    app = FastAPI(
        title="Sales Processor API",
        description="Records 3D toy and jewelry sales to Google Sheets and Telegram",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if toy_processor is not None or jewelry_processor is not None:
        app.state.toy_processor = toy_processor
        app.state.jewelry_processor = jewelry_processor

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.warning("Error decoding request body for %s: %s", request.url.path, exc.errors())
        return PlainTextResponse("Invalid request body", status_code=400)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status and version.
        """
        return HealthResponse(status="healthy", version=__version__, service=SERVICE_NAME)

    @app.get("/", tags=["Root"])
    def root():
        """
        Root endpoint with API information.
        """
        return {
            "message": "Sales Processor API",
            "version": __version__,
            "endpoints": list(ENDPOINTS),
            "health": "/health"
        }

    # Import and include routers
    from api.routers import sales

    app.include_router(sales.router, tags=["Sales"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: load settings, then serve with uvicorn."""

    try:
        settings = load_settings()
    except StartupError as e:
        logging.basicConfig(level=logging.INFO)
        logger.critical("Failed to start: %s", e)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Server starting on port %s", settings.port)
    logger.info("Endpoints:")
    for endpoint in ENDPOINTS:
        logger.info("  %s", endpoint)

    uvicorn.run(
        create_app(settings=settings),
        host="0.0.0.0",
        port=settings.port,
        timeout_keep_alive=60,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    run()
