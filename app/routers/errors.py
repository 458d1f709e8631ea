"""
Error Handlers - CRM Insight Engine
app/routers/errors.py

Structured error bodies for request validation and engine request errors.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.core.exceptions import (
    InsightEngineException,
    InvalidForecastRequestException,
    InvalidScoringRequestException,
    InvalidTestStateException,
)



#  Validation Error Messages


FIELD_MESSAGES = {
    "impressions_a": {
        "greater_than_equal": "Impression counts cannot be negative",
        "int_parsing": "Impression counts must be whole numbers",
    },
    "impressions_b": {
        "greater_than_equal": "Impression counts cannot be negative",
        "int_parsing": "Impression counts must be whole numbers",
    },
    "conversions_a": {
        "greater_than_equal": "Conversion counts cannot be negative",
        "int_parsing": "Conversion counts must be whole numbers",
    },
    "conversions_b": {
        "greater_than_equal": "Conversion counts cannot be negative",
        "int_parsing": "Conversion counts must be whole numbers",
    },
    "status": {
        "enum": "Status must be one of DRAFT, RUNNING, PAUSED, COMPLETED",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "datetime": "Field '{field}' must be an ISO-8601 datetime",
    "list_type": "Field '{field}' must be a list",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    leaf = field.split(".")[-1] if field else field
    if leaf in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[leaf]:
            if key in error_type:
                return FIELD_MESSAGES[leaf][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def _error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


_ERROR_CODES = {
    InvalidTestStateException: "INVALID_TEST_STATE",
    InvalidForecastRequestException: "INVALID_FORECAST_REQUEST",
    InvalidScoringRequestException: "INVALID_SCORING_REQUEST",
}


async def insight_exception_handler(request: Request, exc: InsightEngineException):
    error_code = _ERROR_CODES.get(type(exc), "INVALID_REQUEST")
    details = None
    if isinstance(exc, InvalidTestStateException):
        details = {"test_id": exc.test_id, "status": exc.status}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(error_code, str(exc), details),
    )



#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime


_EXAMPLE_TIMESTAMP = "2026-01-15T12:00:00.000Z"


def _documented(description: str, error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "model": ErrorResponse,
        "description": description,
        "content": {
            "application/json": {
                "example": {
                    "error_code": error_code,
                    "message": message,
                    "details": details,
                    "timestamp": _EXAMPLE_TIMESTAMP,
                }
            }
        },
    }


def error_responses(
    error_code: str = "INVALID_REQUEST",
    message: str = "Malformed JSON request body",
) -> dict:
    """
    OpenAPI ``responses`` for a JSON-body route: 400 for malformed JSON or
    the route's domain error, 422 for field validation.
    """
    return {
        400: _documented("Invalid request", error_code, message),
        422: _documented(
            "Validation error",
            "VALIDATION_ERROR",
            "Field 'value' must be a valid number",
            {"field": "value", "type": "float_parsing"},
        ),
    }
