from __future__ import annotations

import typer
from pasty_client import PastyClientError

from .. import console
from ..config import load_config, save_config
from ..http import fail, make_client, resolve_credentials, run_call

app = typer.Typer(help="Pasty user account.")


@app.command("available")
def username_available(
        username: str = typer.Argument(..., help="Username to check."),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    client = make_client(cfg, host_override=host)
    try:
        data = run_call(client, lambda c: c.check_username_available(username))
    except PastyClientError as e:
        fail("Availability check failed", e)

    if json_out or not isinstance(data, dict) or "available" not in data:
        console.print_json(data)
        return
    if data.get("available"):
        console.ok(f"Username '{username}' is available.")
    else:
        console.warn(f"Username '{username}' is taken.")


@app.command("show")
def show_user(
        token: str | None = typer.Option(None, "--token", help="Authenticate with a Pasty user token."),
        use_token: bool = typer.Option(False, "--use-token", help="Authenticate with the stored token."),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    credentials = resolve_credentials(cfg, token, use_token)
    client = make_client(cfg, host_override=host)
    try:
        user = run_call(client, lambda c: c.get_user(credentials))
    except PastyClientError as e:
        fail("Failed to fetch user", e)

    if json_out or not isinstance(user, dict):
        console.print_json(user)
        return
    console.ok("User:")
    for key in ("_id", "username", "email", "created"):
        if key in user:
            console.console.print(f"  {key}: {user.get(key)}", markup=False)


@app.command("passwd")
def change_password(
        uid: str = typer.Argument(..., help="User object id."),
        username: str | None = typer.Option(None, "--username", help="Username. Defaults to the configured one."),
        current: str = typer.Option(..., "--current", prompt=True, hide_input=True, help="Current password."),
        new: str = typer.Option(
            ..., "--new", prompt=True, hide_input=True, confirmation_prompt=True, help="New password."
        ),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
):
    cfg = load_config()
    user = username or cfg.auth.username
    if not user:
        console.err("Username is required. Pass --username or run: pasty config set --username")
        raise typer.Exit(code=2)

    client = make_client(cfg, host_override=host)
    try:
        run_call(client, lambda c: c.update_user_password(user, uid, current, new))
    except PastyClientError as e:
        fail("Password change failed", e)

    if cfg.auth.password and user == cfg.auth.username:
        cfg.auth.password = new
        save_config(cfg)
    console.ok("Password updated.")


@app.command("delete")
def delete_user(
        uid: str = typer.Argument(..., help="User object id."),
        username: str | None = typer.Option(None, "--username", help="Username. Defaults to the configured one."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Password."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        host: str | None = typer.Option(None, "--host", help="Override server host."),
):
    cfg = load_config()
    user = username or cfg.auth.username
    if not user:
        console.err("Username is required. Pass --username or run: pasty config set --username")
        raise typer.Exit(code=2)
    if not yes and not typer.confirm(f"Delete user '{user}' ({uid})? This cannot be undone.", default=False):
        raise typer.Exit(code=0)

    client = make_client(cfg, host_override=host)
    try:
        run_call(client, lambda c: c.delete_user(user, password, uid))
    except PastyClientError as e:
        fail("Failed to delete user", e)
    console.ok(f"User deleted: {user}")
