from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, NoReturn, TypeVar

import typer
from pasty_client import ApiError, AuthError, NetworkError, PastyClient
from pasty_client.config_types import ClientConfig
from pasty_client.credentials import DEFAULT, Credentials, Token

from . import console
from .compat import cli_version
from .config import AppConfig, resolve_host, resolve_password

T = TypeVar("T")


def make_client(
    cfg: AppConfig,
    *,
    host_override: str | None = None,
) -> PastyClient:
    return PastyClient(
        ClientConfig(
            host=(host_override or resolve_host(cfg)).strip(),
            port=int(cfg.port),
            use_tls=cfg.use_tls,
            username=cfg.auth.username,
            password=resolve_password(cfg),
            client_version=cli_version(),
        )
    )


def resolve_credentials(cfg: AppConfig, token: str | None, use_token: bool) -> Credentials:
    if token:
        return Token(token)
    if use_token and cfg.auth.token:
        return Token(cfg.auth.token)
    return DEFAULT


def run_call(client: PastyClient, call: Callable[[PastyClient], Awaitable[T]]) -> T:
    """Run one client call to completion and close the client."""

    async def _run() -> T:
        try:
            return await call(client)
        finally:
            await client.aclose()

    return asyncio.run(_run())


def fail(action: str, exc: Exception) -> NoReturn:
    """Report a failed call and exit with code 2."""
    if isinstance(exc, AuthError):
        console.err(f"{action}: {exc}. Check username/password or token (pasty config set).")
    elif isinstance(exc, NetworkError):
        console.err(f"{action}: server unreachable ({exc.details or exc}).")
    elif isinstance(exc, ApiError):
        console.err(f"{action}: {exc} (status {exc.status_code}).")
    else:
        console.err(f"{action}: {exc}")
    raise typer.Exit(code=2)
