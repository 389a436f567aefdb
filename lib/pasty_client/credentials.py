from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

from .config_types import ClientConfig
from .errors import InvalidUsageError


@dataclass(frozen=True)
class UsernamePassword:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"UsernamePassword(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class Token:
    value: str

    def __repr__(self) -> str:
        return "Token('***')"

    @classmethod
    def from_payload(cls, payload: Any) -> Token:
        """Build a credential from the token object returned by ``GET /user/token``."""
        if isinstance(payload, Token):
            return payload
        if isinstance(payload, dict):
            value = payload.get("token") or payload.get("_id")
            if isinstance(value, str) and value:
                return cls(value)
            raise InvalidUsageError("token object carries no token value")
        return cls(str(payload))


class _Default:
    _instance: _Default | None = None

    def __new__(cls) -> _Default:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DEFAULT"

    def __bool__(self) -> bool:
        return False


DEFAULT = _Default()

Credentials = Union[UsernamePassword, Token, _Default]


@dataclass(frozen=True)
class AuthData:
    username: str = ""
    password: str = ""
    token: str | None = None


def resolve_auth(credentials: Credentials | None, cfg: ClientConfig) -> AuthData:
    if isinstance(credentials, UsernamePassword):
        return AuthData(username=credentials.username or "", password=credentials.password or "")
    if isinstance(credentials, Token):
        if cfg.token_header:
            return AuthData(token=credentials.value)
        # token is not sent on the wire; configured basic credentials apply
        return AuthData(username=cfg.username, password=cfg.password, token=credentials.value)
    return AuthData(username=cfg.username, password=cfg.password)


def credentials_from_args(args: Sequence[Any]) -> Credentials:
    """Map the positional auth arguments of the callback API onto a credential.

    Two or more values are ``(username, password)``; a single value is a token
    (a string or the token object from ``request_token``); nothing or ``None``
    means the configured defaults.
    """
    if len(args) >= 2:
        return UsernamePassword(str(args[0] or ""), str(args[1] or ""))
    if len(args) == 1 and args[0] is not None:
        return Token.from_payload(args[0])
    return DEFAULT
