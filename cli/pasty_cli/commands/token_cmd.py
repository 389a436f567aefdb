from __future__ import annotations

import typer
from pasty_client import PastyClientError, ProtocolViolationError
from pasty_client.credentials import Token

from .. import console
from ..config import load_config, save_config
from ..formatting import format_timestamp
from ..http import fail, make_client, run_call

app = typer.Typer(help="Pasty user tokens.")


@app.command("request")
def request_token(
        username: str = typer.Option(..., "--username", prompt=True, help="Pasty username."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Pasty password."),
        save: bool = typer.Option(True, "--save/--no-save", help="Store the token in the config file."),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, host_override=host)
    try:
        token = run_call(client, lambda c: c.request_token(username, password))
    except PastyClientError as e:
        fail("Token request failed", e)

    if json_out:
        console.print_json(token)
    if save:
        try:
            cfg.auth.token = Token.from_payload(token).value
        except PastyClientError:
            console.warn("Server returned a token object without a token value; not saved.")
            return
        save_path = save_config(cfg)
        if not json_out:
            console.ok(f"Token saved to {save_path}.")
    elif not json_out:
        console.ok("Token received.")

    expires = token.get("expires") if isinstance(token, dict) else None
    if expires is not None and not json_out:
        console.info(f"expires: {format_timestamp(expires)}")


@app.command("check")
def check_token(
        token: str | None = typer.Argument(None, help="Token to check. Defaults to the stored token."),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
):
    cfg = load_config()
    value = token or cfg.auth.token
    if not value:
        console.err("No token given and none stored. Run: pasty token request")
        raise typer.Exit(code=2)

    client = make_client(cfg, host_override=host)
    try:
        expires = run_call(client, lambda c: c.check_token_validity(value))
    except ProtocolViolationError as e:
        console.err(f"Unexpected server answer: {e}")
        raise typer.Exit(code=1)
    except PastyClientError as e:
        fail("Token is not valid", e)
    console.ok(f"Token valid until {format_timestamp(expires)}")
