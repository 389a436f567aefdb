from __future__ import annotations

import typer
from pasty_client import PastyClientError

from . import console
from .commands import config_cmd, items_cmd, token_cmd, user_cmd
from .compat import compatibility_warning
from .config import load_config
from .http import fail, make_client, run_call
from .logging_ import setup_logging


def version(
        host: str | None = typer.Option(None, "--host", help="Override server host."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show the server version."""
    cfg = load_config()
    client = make_client(cfg, host_override=host)
    try:
        data = run_call(client, lambda c: c.get_server_version())
    except PastyClientError as e:
        fail("Failed to query server version", e)

    if json_out:
        console.print_json(data)
        return
    warning = compatibility_warning(data)
    text = ", ".join(f"{k}={v}" for k, v in data.items()) if isinstance(data, dict) else str(data)
    console.console.print(text, markup=False)
    if warning:
        console.warn(warning)


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="pasty",
        help="Pasty clipboard CLI",
        no_args_is_help=True,
    )

    app.command("version")(version)
    app.add_typer(items_cmd.app, name="items")
    app.add_typer(token_cmd.app, name="token")
    app.add_typer(user_cmd.app, name="user")
    app.add_typer(config_cmd.app, name="config")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
