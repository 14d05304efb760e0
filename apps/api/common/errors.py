"""
Shared API error handlers for ReinfateError contract and deterministic 422 payloads.

Docs:
  - docs/architecture/tables/tables-grid-validation-v1.md
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from reinfate.platform.errors import ReinfateError

log = logging.getLogger(__name__)

_REINFATE_STATUS_BY_CODE: Mapping[str, int] = {
    "validation_error": 422,
    "not_found": 404,
    "unexpected_error": 500,
}


def register_api_error_handlers(*, app: FastAPI) -> None:
    """
    Register global API handlers for ReinfateError and FastAPI request validation errors.

    Args:
        app: FastAPI application instance.
    Returns:
        None.
    Assumptions:
        Handlers are installed once during application startup.
    Raises:
        ValueError: If `app` dependency is missing.
    Side Effects:
        Mutates FastAPI exception-handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_api_error_handlers requires app")

    app.add_exception_handler(ReinfateError, reinfate_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


def reinfate_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert ReinfateError into JSON response payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised ReinfateError instance.
    Returns:
        JSONResponse: Response with contract payload `{"error": ...}`.
    Assumptions:
        `details.errors` order is kept as produced: table issues are already ordered by
        the validator, and FastAPI items are sorted before they get here.
    Raises:
        None.
    Side Effects:
        Writes one warning log record for unexpected errors.
    """
    reinfate_error = cast(ReinfateError, error)
    status_code = _REINFATE_STATUS_BY_CODE.get(reinfate_error.code, 500)
    if status_code >= 500:
        log.warning(
            "api unexpected error code=%s message=%s",
            reinfate_error.code,
            reinfate_error.message,
        )
    return JSONResponse(status_code=status_code, content=reinfate_error.to_payload())


def request_validation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert FastAPI RequestValidationError to canonical `validation_error` payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised validation exception from FastAPI/Pydantic.
    Returns:
        JSONResponse: HTTP 422 payload with sorted `details.errors` list.
    Assumptions:
        Validation errors include `loc`, `type`, and `msg` attributes.
    Raises:
        None.
    Side Effects:
        None.
    """
    validation_error = cast(RequestValidationError, error)
    normalized_errors = _sorted_validation_errors(raw_errors=validation_error.errors())
    reinfate_error = ReinfateError.validation(
        message="Validation failed",
        errors=normalized_errors,
    )
    return reinfate_error_handler(_request, reinfate_error)


def _sorted_validation_errors(*, raw_errors: Any) -> list[dict[str, str]]:
    if not isinstance(raw_errors, Sequence) or isinstance(raw_errors, (str, bytes, bytearray)):
        return []

    normalized_items: list[dict[str, str]] = []
    for raw_error in raw_errors:
        if not isinstance(raw_error, Mapping):
            normalized_items.append(
                {"path": "unknown", "code": "validation_error", "message": str(raw_error)}
            )
            continue
        normalized_items.append(
            {
                "path": _normalize_error_path(loc=raw_error.get("loc")),
                "code": _normalize_error_code(raw_type=raw_error.get("type")),
                "message": str(raw_error.get("msg", "Validation error")),
            }
        )

    return sorted(
        normalized_items,
        key=lambda item: (item["path"], item["code"], item["message"]),
    )


def _normalize_error_path(*, loc: Any) -> str:
    """
    Convert FastAPI/Pydantic `loc` tuple into dot-delimited path string.

    Args:
        loc: Raw location object from validation error.
    Returns:
        str: Dot-delimited path, for example `body.dimensions.rows`.
    Assumptions:
        Location may be tuple/list of path segments and integer indices.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes, bytearray)):
        path_parts = [str(part) for part in loc]
        if path_parts:
            return ".".join(path_parts)
    if loc is None:
        return "unknown"
    return str(loc)


def _normalize_error_code(*, raw_type: Any) -> str:
    if raw_type is None:
        return "validation_error"
    normalized = str(raw_type).strip().lower()
    if not normalized:
        return "validation_error"
    if normalized == "missing" or normalized.endswith(".missing"):
        return "required"
    return normalized
