from __future__ import annotations

import sys

import typer
from pasty_client import PastyClientError
from rich.markup import escape
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import shorten
from ..http import fail, make_client, resolve_credentials, run_call

app = typer.Typer(help="Clipboard items.")

TOKEN_OPTION = typer.Option(None, "--token", help="Authenticate with a Pasty user token.")
USE_TOKEN_OPTION = typer.Option(False, "--use-token", help="Authenticate with the stored token.")
HOST_OPTION = typer.Option(None, "--host", help="Override server host.")


@app.command("list")
def list_items(
        token: str | None = TOKEN_OPTION,
        use_token: bool = USE_TOKEN_OPTION,
        host: str | None = HOST_OPTION,
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    credentials = resolve_credentials(cfg, token, use_token)
    client = make_client(cfg, host_override=host)
    try:
        items = run_call(client, lambda c: c.list_items(credentials))
    except PastyClientError as e:
        fail("Failed to list items", e)

    if json_out:
        console.print_json(items)
        return
    if not items:
        console.info("Clipboard is empty.")
        return

    table = Table(title="Clipboard")
    table.add_column("id", style="bold")
    table.add_column("item")
    for entry in items:
        if isinstance(entry, dict):
            item_id = str(entry.get("_id") or "-")
            text = entry.get("item")
        else:
            item_id, text = "-", entry
        table.add_row(escape(item_id), escape(shorten(text if isinstance(text, str) else str(text))))
    console.console.print(table)


@app.command("get")
def get_item(
        item_id: str = typer.Argument(..., help="Item id."),
        token: str | None = TOKEN_OPTION,
        use_token: bool = USE_TOKEN_OPTION,
        host: str | None = HOST_OPTION,
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    cfg = load_config()
    credentials = resolve_credentials(cfg, token, use_token)
    client = make_client(cfg, host_override=host)
    try:
        item = run_call(client, lambda c: c.get_item(item_id, credentials))
    except PastyClientError as e:
        fail("Failed to fetch item", e)

    if json_out or not isinstance(item, dict):
        console.print_json(item)
        return
    # plain text so the output can be piped
    console.console.print(str(item.get("item", "")), markup=False, highlight=False)


@app.command("add")
def add_item(
        text: str | None = typer.Argument(None, help="Text to store. Reads stdin when omitted."),
        token: str | None = TOKEN_OPTION,
        use_token: bool = USE_TOKEN_OPTION,
        host: str | None = HOST_OPTION,
):
    if text is None:
        text = sys.stdin.read()
    if not text:
        console.err("Nothing to add.")
        raise typer.Exit(code=2)

    cfg = load_config()
    credentials = resolve_credentials(cfg, token, use_token)
    client = make_client(cfg, host_override=host)
    try:
        item_id = run_call(client, lambda c: c.add_item(text, credentials))
    except PastyClientError as e:
        fail("Failed to add item", e)
    console.ok(f"Item added: {item_id}")


@app.command("delete")
def delete_item(
        item_id: str = typer.Argument(..., help="Item id."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        token: str | None = TOKEN_OPTION,
        use_token: bool = USE_TOKEN_OPTION,
        host: str | None = HOST_OPTION,
):
    if not yes and not typer.confirm(f"Delete item {item_id}?", default=False):
        raise typer.Exit(code=0)

    cfg = load_config()
    credentials = resolve_credentials(cfg, token, use_token)
    client = make_client(cfg, host_override=host)
    try:
        run_call(client, lambda c: c.delete_item(item_id, credentials))
    except PastyClientError as e:
        fail("Failed to delete item", e)
    console.ok(f"Item deleted: {item_id}")
