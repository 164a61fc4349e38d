"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    InsufficientDataException,
    PersistenceException,
    ScoreNotFoundException,
    TransactionValidationException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(ScoreNotFoundException)
    async def score_not_found_handler(
        request: Request,
        exc: ScoreNotFoundException,
    ) -> JSONResponse:
        """Handle score not found errors."""
        return JSONResponse(
            status_code=404,
            content={
                "error": exc.code,
                "message": exc.message,
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(InsufficientDataException)
    async def insufficient_data_handler(
        request: Request,
        exc: InsufficientDataException,
    ) -> JSONResponse:
        """Handle scoring requests blocked by the data-sufficiency gate."""
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.code,
                "message": exc.message,
                "unmet_requirements": list(exc.unmet_requirements),
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(TransactionValidationException)
    async def invalid_transaction_handler(
        request: Request,
        exc: TransactionValidationException,
    ) -> JSONResponse:
        """Handle invalid transaction errors."""
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.code,
                "message": exc.message,
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(PersistenceException)
    async def persistence_error_handler(
        request: Request,
        exc: PersistenceException,
    ) -> JSONResponse:
        """Handle storage failures."""
        logger.error(
            "persistence_error",
            request_id=get_request_id(),
            operation=exc.operation,
            message=exc.message,
        )
        return JSONResponse(
            status_code=503,
            content={
                "error": exc.code,
                "message": "Unable to process request. Please try again later.",
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.code,
                "message": exc.message,
                "request_id": get_request_id(),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
