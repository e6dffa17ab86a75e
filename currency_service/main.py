import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import currency, info
from .services.rates.table import RateTable
from .services.version import VersionProvider


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., custom rates or version). Falls back to cached
    get_settings().
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Rate table is fixed for the process lifetime; bad config is fatal
    try:
        rate_table = RateTable(settings.exchange_rates, settings.base_currency)
    except ValueError:
        logging.getLogger("app").exception("invalid exchange rate configuration")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.rate_table = rate_table
    app.state.version_provider = VersionProvider(settings.version)

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(currency.router)
    app.include_router(info.router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    logging.getLogger("app").info(
        "app ready version=%s base=%s currencies=%s",
        settings.version,
        rate_table.base_currency,
        ",".join(rate_table),
    )
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on settings.host/port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("currency_service.main:app", host=settings.host, port=settings.port)


app = create_app()
