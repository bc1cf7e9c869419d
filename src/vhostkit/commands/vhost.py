"""NGINX vhost rendering and inspection commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.syntax import Syntax

from vhostkit_common import DomainSpec, PhpTarget

from vhostkit.config import get_config
from vhostkit.services import vhost_renderer

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command()
def render(
    domain: str = typer.Option(..., help="Domain name (e.g., example.com)"),
    php: str = typer.Option("php", help="PHP-FPM version token ('php', '5.6', '7.0'-'7.4', '8.0'-'8.4')"),
) -> None:
    """Print the vhost config for a domain without touching the system."""
    cfg = get_config()
    try:
        site = DomainSpec(name=domain)
        target = PhpTarget(version_token=php, socket_dir=cfg.php_socket_dir)
    except ValidationError as exc:
        for err in exc.errors():
            typer.echo(f"Error: {err['msg']}", err=True)
        raise typer.Exit(1)

    content = vhost_renderer.render_vhost_config(
        site,
        target.socket_path,
        cfg.web_root(site.name),
        logs_dir=cfg.logs_dir(site.name),
    )
    typer.echo(content, nl=False)


@app.command()
def show(
    domain: str = typer.Argument(help="Domain name to show config for"),
) -> None:
    """Display the NGINX vhost config for a domain."""
    cfg = get_config()
    vhost_file = cfg.available_conf(domain)

    if not vhost_file.exists():
        console.print(f"[red]No vhost found for {domain}[/red]")
        raise typer.Exit(1)

    content = vhost_file.read_text()
    syntax = Syntax(content, "nginx", theme="monokai")
    console.print(syntax)
