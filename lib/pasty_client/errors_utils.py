from __future__ import annotations

import json
from typing import Any

from .answer import Answer
from .errors import UNKNOWN_ERROR, ApiError

UNKNOWN_MESSAGE = "An unknown error occured"


def parse_api_error_detail(details: str | None) -> dict | None:
    if not details:
        return None
    try:
        data = json.loads(details)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def error_status(error: dict[str, Any], fallback: int | None = None) -> int:
    for key in ("httpCode", "http_code", "statusCode", "status_code"):
        value = error.get(key)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return fallback or 500


def unwrap_error_body(body: dict[str, Any]) -> dict[str, Any]:
    """Return the error object of a structured error body.

    The server sends either a bare error (``{"code": ..., "message": ...}``)
    or a full envelope with an ``error`` member.
    """
    inner = body.get("error")
    if isinstance(inner, dict):
        return inner
    return body


def error_from_answer(answer: Answer, *, error_cls: type[ApiError] = ApiError) -> ApiError:
    """Build the error a failed envelope forwards to the caller."""
    if answer.error:
        status = error_status(answer.error, answer.code)
        message = str(answer.error.get("message") or UNKNOWN_MESSAGE)
        code = answer.error.get("code")
        return error_cls(
            status,
            message,
            answer.error,
            code=code if isinstance(code, str) else None,
        )
    return error_cls(500, UNKNOWN_MESSAGE, answer.raw, code=UNKNOWN_ERROR)
