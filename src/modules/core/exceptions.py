"""Standardised error payloads for framework-raised API exceptions.

Every error raised through DRF (authentication, permissions, parsing,
serializer validation, throttling) is rendered as::

    {
        "type": "validation_error",
        "errors": [{"code": "required", "detail": "...", "attr": "quantity"}]
    }

Domain exceptions are translated by the views themselves and keep the
simple ``{"detail": ...}`` body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


def _error_type(exc: exceptions.APIException) -> str:
    if isinstance(exc, (exceptions.ValidationError, exceptions.ParseError)):
        return "validation_error"
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return "client_error"
    if isinstance(exc, exceptions.Throttled):
        return "throttled"
    if exc.status_code >= 500:
        return "server_error"
    return "client_error"


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                nested = attr
            errors.extend(_flatten(value, nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            nested = attr
            if isinstance(value, dict) and attr is not None:
                nested = f"{attr}.{index}"
            errors.extend(_flatten(value, nested))
        return errors
    code = getattr(detail, "code", "error")
    return [{"code": code, "detail": str(detail), "attr": attr}]


def api_exception_handler(exc: Exception, context: Dict[str, Any]):
    """DRF ``EXCEPTION_HANDLER`` producing the ``{type, errors}`` body."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.APIException):
        error_type = _error_type(exc)
        errors = _flatten(exc.detail)
    else:
        # Http404 / PermissionDenied from django are converted by DRF already
        error_type = "client_error"
        errors = _flatten(response.data.get("detail", "Error."))

    view = context.get("view")
    logger.info(
        "api.error",
        view=view.__class__.__name__ if view else None,
        status_code=response.status_code,
        error_type=error_type,
    )

    response.data = {"type": error_type, "errors": errors}
    return response
