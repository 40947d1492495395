"""
FastAPI application entry point for the Receipt Ledger backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from receipt_ledger import __version__
from receipt_ledger.config import settings
from receipt_ledger.routes.health import router as health_router
from receipt_ledger.routes.intake import router as intake_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Receipt Ledger API",
    description="Records PIX receipts received over chat into the Google Sheets ledger",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)


# Custom validation error handler to log detailed errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    The request body is not logged: it is usually a receipt image.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_errors(exc),
        }
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    # Multipart errors can carry raw bytes in "input"
    return [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]


# Register routers
app.include_router(health_router)
app.include_router(intake_router)

logger.info(
    f"FastAPI app initialized: environment={settings.ENVIRONMENT}, "
    f"ledger_sheet={settings.GOOGLE_SHEET_NAME}, summary_sheet={settings.GOOGLE_MAIN_SHEET_NAME}"
)
