"""Root Typer application for the vhostkit CLI."""

from __future__ import annotations

import logging

import typer

from vhostkit.commands import site, vhost

app = typer.Typer(
    name="vhostkit",
    help="Provision NGINX + PHP-FPM virtual hosts (config, hosts entry, database, WordPress).",
    no_args_is_help=True,
)

app.add_typer(site.app, name="site", help="Create and list virtual hosts.")
app.add_typer(vhost.app, name="vhost", help="Render and inspect vhost configs.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    app()
