from __future__ import annotations

import typer

from .. import console
from ..config import config_path, load_config, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/pasty/config.toml).")


@app.command("show")
def show_config():
    cfg = load_config()
    password_state = "(set)" if cfg.auth.password else "(empty)"
    token_state = "(set)" if cfg.auth.token else "(empty)"
    console.console.print(
        f"host={cfg.host} port={cfg.port} use_tls={str(cfg.use_tls).lower()} "
        f"username={cfg.auth.username or '-'} password={password_state} token={token_state}"
    )
    console.info(f"config: {config_path()}")


@app.command("set")
def set_config(
        host: str | None = typer.Option(None, "--host", help="Server host name."),
        port: int | None = typer.Option(None, "--port", min=1, max=65535, help="Server TCP port."),
        tls: bool | None = typer.Option(None, "--tls/--no-tls", help="Use HTTPS."),
        username: str | None = typer.Option(None, "--username", help="Default username."),
        password: str | None = typer.Option(None, "--password", help="Default password."),
        clear_token: bool = typer.Option(False, "--clear-token", help="Forget the stored token."),
):
    cfg = load_config()
    if host is not None:
        host = host.strip()
        if not host:
            console.err("Host cannot be empty.")
            raise typer.Exit(code=2)
        cfg.host = host
    if port is not None:
        cfg.port = port
    if tls is not None:
        cfg.use_tls = tls
    if username is not None:
        cfg.auth.username = username
    if password is not None:
        cfg.auth.password = password
    if clear_token:
        cfg.auth.token = ""
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
