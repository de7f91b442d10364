"""RFC 7807 Problem Details helpers."""
from __future__ import annotations

from http import HTTPStatus

from fastapi.responses import JSONResponse

from .domain_errors import DomainError

UNEXPECTED_ERROR_CODE = "REPORT_FAILED"


def build_problem_details_response(exc: DomainError) -> JSONResponse:
    """Render DomainError as RFC 7807 payload with stable domain code."""
    try:
        title = HTTPStatus(exc.http_status).phrase
    except ValueError:
        title = "Domain Error"

    payload: dict[str, object] = {
        "type": f"https://api.production-reports.local/problems/{exc.code.lower()}",
        "title": title,
        "status": exc.http_status,
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.details is not None:
        payload["details"] = exc.details

    return JSONResponse(
        status_code=exc.http_status,
        content=payload,
        media_type="application/problem+json",
    )


def build_unexpected_error_response(exc: Exception) -> JSONResponse:
    """Render an unhandled failure as a generic 500 problem carrying the underlying message."""
    return build_problem_details_response(
        DomainError(
            code=UNEXPECTED_ERROR_CODE,
            http_status=500,
            message=str(exc) or exc.__class__.__name__,
        )
    )
