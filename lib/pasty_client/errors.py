from __future__ import annotations

from typing import Any

UNKNOWN_ERROR = "UnknownError"
UNAUTHORIZED_ERROR = "UnauthorizedError"


class PastyClientError(Exception):
    """Base client error."""


class InvalidUsageError(PastyClientError, TypeError):
    """Malformed call, raised before anything is sent."""


class ProtocolViolationError(PastyClientError):
    """Server answered with success but without the fields the API promises."""


class ApiError(PastyClientError):
    def __init__(
            self,
            status_code: int,
            message: str,
            details: Any | None = None,
            *,
            code: str | None = None,
            status_key: str = "httpCode",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details
        self.code = code
        # envelope errors say httpCode, transport failures statusCode
        self.status_key = status_key

    @property
    def info(self) -> dict[str, Any]:
        data: dict[str, Any] = {self.status_key: self.status_code, "message": self.message}
        if self.code:
            data["code"] = self.code
        return data


class AuthError(ApiError):
    """Credentials rejected by the server."""


class NetworkError(ApiError):
    """Transport/network layer error."""
