from __future__ import annotations

from importlib import metadata
from typing import Any

from pasty_client.config_types import API_VERSION, CLIENT_VERSION


def cli_version() -> str:
    try:
        return metadata.version("pasty-client")
    except metadata.PackageNotFoundError:
        return CLIENT_VERSION


def _major(version: str) -> int | None:
    head = version.strip().lstrip("v").split(".", 1)[0]
    return int(head) if head.isdigit() else None


def server_api_version(payload: Any) -> str | None:
    if isinstance(payload, str):
        return payload.strip() or None
    if not isinstance(payload, dict):
        return None
    for key in ("api_version", "apiVersion", "version"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def compatibility_warning(payload: Any, *, client_api_version: str = API_VERSION) -> str | None:
    """Return a warning when the server speaks another major API version."""
    server_version = server_api_version(payload)
    if not server_version:
        return None
    server_major = _major(server_version)
    client_major = _major(client_api_version)
    if server_major is None or client_major is None or server_major == client_major:
        return None
    return f"Server API version {server_version} may be incompatible with client API {client_api_version}."
