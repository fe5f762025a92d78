import logging
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .application.errors import (
    AnalysisFailed,
    DanceAnalysisError,
    ExternalCallFailed,
    IncompleteRecord,
    InvalidRole,
    RecordNotFound,
)

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS_CODES = (
    (RecordNotFound, 404),
    (IncompleteRecord, 409),
    (InvalidRole, 422),
    (AnalysisFailed, 502),
    (ExternalCallFailed, 502),
)


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


def create_success_response(data) -> dict:
    """Create a standardized success response"""
    return {
        "success": True,
        "data": data,
        "error": None
    }


def status_code_for(exc: DanceAnalysisError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 400


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    # Convert 403 from HTTPBearer to 401 for missing authentication
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Authentication required", 401)
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def dance_analysis_exception_handler(request: Request, exc: DanceAnalysisError) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=create_error_response(str(exc), status_code)
    )
