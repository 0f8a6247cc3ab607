"""
Main FastAPI application entry point for the supplier data generator.

This module creates and configures the FastAPI application with its routes,
middleware, exception handlers, and startup/shutdown events.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.templating import Jinja2Templates
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.concurrency import run_in_threadpool

from . import __version__
from .api.models import (
    ErrorResponse,
    HealthCheckResponse,
    ValidationErrorResponse,
    VersionResponse,
)
from .config.models import GeneratorConfig
from .generators.pipeline import GenerationPipeline
from .shared.dependencies import (
    get_config,
    get_pipeline,
    parse_year,
    validate_supplier_id,
    validate_upload,
)
from .shared.exceptions import SupplierDataGenException
from .shared.logging_config import configure_structured_logging

logger = logging.getLogger(__name__)

# Application metadata
APP_NAME = "Supplier Transaction Data Generator"
APP_VERSION = __version__
APP_DESCRIPTION = """
**Supplier Transaction Data Generator** turns a supplier's product price list
into a year of synthetic purchase transactions.

Upload a CSV with `ProductID` and `Price` columns, a supplier ID and a year;
the service returns one consolidated CSV with one transaction per product
per month.

All generated data is **synthetic**.
"""

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    config = await get_config()
    configure_structured_logging(level=config.logging.level)

    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")
    if config.seed is not None:
        logger.info(f"Generation seed fixed at {config.seed}")

    yield

    logger.info("Application shutdown completed")


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description=APP_DESCRIPTION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

_templates_dir = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(_templates_dir))


def _error_content(model: ErrorResponse | ValidationErrorResponse) -> dict:
    return model.model_dump(mode="json")


def render_form(
    request: Request,
    error: str | None = None,
    message: str | None = None,
    status_code: int = status.HTTP_200_OK,
):
    """Render the upload form, optionally with an error or info message."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"error": error, "message": message},
        status_code=status_code,
    )


# ================================
# EXCEPTION HANDLERS
# ================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent error format."""
    error_response = ErrorResponse(
        error=f"HTTP_{exc.status_code}", message=str(exc.detail), timestamp=datetime.now(UTC)
    )
    return JSONResponse(status_code=exc.status_code, content=_error_content(error_response))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors with detailed field information."""
    logger.error(f"Validation error for {request.method} {request.url}: {exc.errors()}")

    field_errors = []
    for error in exc.errors():
        field_errors.append(
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    error_response = ValidationErrorResponse(
        error="VALIDATION_ERROR",
        message="Request validation failed",
        field_errors=field_errors,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(error_response),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}")
    logger.error(traceback.format_exc())

    error_response = ErrorResponse(
        error="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"exception_type": type(exc).__name__},
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(error_response),
    )


# ================================
# MIDDLEWARE
# ================================


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all requests and responses."""
    start_time = datetime.now(UTC)
    client = request.client.host if request.client else "unknown"

    logger.info(f"{request.method} {request.url} - Client: {client}")

    response = await call_next(request)

    duration = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(
        f"{request.method} {request.url} - "
        f"Status: {response.status_code} - "
        f"Duration: {duration:.3f}s"
    )

    return response


@app.middleware("http")
async def security_headers_middleware(request: Request, call_next):
    """Attach conservative security headers to every response."""
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


# ================================
# CORE ROUTES
# ================================


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def upload_form(request: Request):
    """Serve the upload form."""
    return render_form(request)


@app.post(
    "/generate",
    summary="Generate transactions",
    description=(
        "Upload a product price CSV and download a year of synthetic "
        "purchase transactions as one consolidated CSV"
    ),
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def generate_transactions(
    request: Request,
    productPrices: UploadFile | None = File(None),
    supplierId: str | None = Form(None),
    specifiedYear: str | None = Form(None),
    config: GeneratorConfig = Depends(get_config),
    pipeline: GenerationPipeline = Depends(get_pipeline),
):
    """Generate the consolidated transactions file for one supplier and year."""
    try:
        if productPrices is None:
            validate_upload(None, None, 0, config.upload)
        # Reject by the spooled size before the body is read into memory
        validate_upload(
            productPrices.filename,
            productPrices.content_type,
            productPrices.size or 0,
            config.upload,
        )
        data = await productPrices.read()
        if productPrices.size is None:
            validate_upload(
                productPrices.filename, productPrices.content_type, len(data), config.upload
            )
        supplier_id = validate_supplier_id(supplierId)
        year = parse_year(specifiedYear)

        result = await run_in_threadpool(
            pipeline.generate_from_upload,
            data,
            supplier_id,
            year,
            productPrices.filename,
        )
    except SupplierDataGenException as e:
        logger.error(f"Error during generation: {e}")
        return render_form(
            request,
            error=f"Error during generation: {e}",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    logger.info(
        f"Consolidated data has been generated and sent for download as {result.filename}"
    )
    return Response(
        content=result.csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={result.filename}"},
    )


@app.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health check",
    description="Health check of configuration and templates",
)
async def health_check():
    """Health check endpoint."""
    checks = {}
    overall_status = "healthy"

    try:
        config = await get_config()
        checks["configuration"] = {
            "status": "healthy",
            "message": "Configuration loaded successfully",
            "seeded": config.seed is not None,
        }
    except Exception as e:
        checks["configuration"] = {"status": "unhealthy", "error": str(e)}
        overall_status = "unhealthy"

    if (_templates_dir / "index.html").exists():
        checks["templates"] = {"status": "healthy"}
    else:
        checks["templates"] = {
            "status": "unhealthy",
            "error": f"index.html not found in {_templates_dir}",
        }
        if overall_status == "healthy":
            overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        checks=checks,
    )


@app.get(
    "/version",
    response_model=VersionResponse,
    summary="Application version",
)
async def get_version():
    """Get application version information."""
    return VersionResponse(name=APP_NAME, version=APP_VERSION, timestamp=datetime.now(UTC))


@app.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Prometheus metrics endpoint for generation runs",
    tags=["Monitoring"],
)
async def prometheus_metrics():
    """Return metrics in Prometheus exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ================================
# DEVELOPMENT SERVER
# ================================


def run_dev_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = False):
    """Run the development server."""
    # Import here to avoid hard dependency during module import in test envs
    import uvicorn

    uvicorn.run(
        "supplier_datagen.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    run_dev_server()
