import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from underwriting.api.routes_loans import router as loans_router
from underwriting.api.routes_ready import router as ready_router
from underwriting.api.routes_service import router as service_router
from underwriting.core.errors import install_error_handlers
from underwriting.core.logging import configure_logging
from underwriting.core.metrics import clear_metrics, install_metrics_middleware
from underwriting.core.request_id import install_request_id_middleware
from underwriting.core.settings import get_settings
from underwriting.repo.loan_records_repo import (
    clear_record_store_cache,
    get_record_store,
)

configure_logging()

logger = logging.getLogger(__name__)


def _safe_error_message(message: str, max_length: int = 180) -> str:
    sanitized = " ".join(message.split())
    if not sanitized:
        return "unknown_error"
    return sanitized[:max_length]


def _prepare_record_store(app: FastAPI) -> None:
    settings = get_settings()
    if not settings.db_init_on_startup:
        app.state.startup_store_status = {"ready": True, "detail": None}
        return

    try:
        get_record_store().ensure_schema()
    except Exception as exc:  # pragma: no cover - any driver error keeps the app up
        error_message = _safe_error_message(str(exc))
        app.state.startup_store_status = {"ready": False, "detail": error_message}
        logger.error(
            "startup schema preparation failed",
            extra={
                "event": "startup_schema_failed",
                "record_store": settings.record_store,
                "error_type": exc.__class__.__name__,
                "error_message": error_message,
            },
        )
    else:
        app.state.startup_store_status = {"ready": True, "detail": None}
        logger.info(
            "startup schema ready",
            extra={
                "event": "startup_schema_ready",
                "record_store": settings.record_store,
            },
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    clear_record_store_cache()
    clear_metrics()
    _prepare_record_store(app)

    try:
        yield
    finally:
        logger.info("shutting down", extra={"event": "shutdown"})
        clear_record_store_cache()
        clear_metrics()


app = FastAPI(title="mortgage-underwriting API", lifespan=lifespan)
install_request_id_middleware(app)
install_metrics_middleware(app)
install_error_handlers(app)

app.include_router(service_router)
app.include_router(ready_router)
app.include_router(loans_router)
