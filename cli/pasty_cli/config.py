from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

APP_NAME = "pasty"
CONFIG_FILENAME = "config.toml"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4444
ENV_HOST = "PASTY_HOST"
ENV_PASSWORD = "PASTY_PASSWORD"


@dataclass
class AuthConfig:
    username: str = ""
    password: str = ""
    token: str = ""


@dataclass
class AppConfig:
    host: str
    port: int
    auth: AuthConfig
    use_tls: bool = False


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(host=DEFAULT_HOST, port=DEFAULT_PORT, auth=AuthConfig(), use_tls=False)


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "host": cfg.host,
        "port": int(cfg.port),
        "use_tls": bool(cfg.use_tls),
        "auth": {
            "username": cfg.auth.username,
            "password": cfg.auth.password,
            "token": cfg.auth.token,
        },
    }


def _parse_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PORT
    if 0 < port < 65536:
        return port
    return DEFAULT_PORT


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    host = str(data.get("host") or "").strip()
    if host:
        cfg.host = host
    if "port" in data:
        cfg.port = _parse_port(data.get("port"))
    use_tls = data.get("use_tls")
    if isinstance(use_tls, bool):
        cfg.use_tls = use_tls
    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            username=str(auth_raw.get("username") or ""),
            password=str(auth_raw.get("password") or ""),
            token=str(auth_raw.get("token") or ""),
        )
    return cfg


def resolve_host(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_HOST, "").strip()
    if env_value:
        return env_value
    return cfg.host


def resolve_password(cfg: AppConfig) -> str:
    return os.getenv(ENV_PASSWORD) or cfg.auth.password


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
