from .callbacks import CallbackPastyClient
from .client import PastyClient, create_client
from .config_types import ClientConfig
from .credentials import DEFAULT, Credentials, Token, UsernamePassword
from .errors import (
    ApiError,
    AuthError,
    InvalidUsageError,
    NetworkError,
    PastyClientError,
    ProtocolViolationError,
)

__all__ = [
    "PastyClient",
    "CallbackPastyClient",
    "create_client",
    "ClientConfig",
    "Credentials",
    "DEFAULT",
    "Token",
    "UsernamePassword",
    "PastyClientError",
    "ApiError",
    "AuthError",
    "InvalidUsageError",
    "NetworkError",
    "ProtocolViolationError",
]
