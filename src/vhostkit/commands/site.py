"""Virtual host provisioning commands."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from vhostkit_common import (
    AuditEvent,
    DomainSpec,
    PhpTarget,
    VhostkitConfig,
    is_valid_domain,
    is_valid_php_version,
)

from vhostkit.audit import audit, step
from vhostkit.config import get_config
from vhostkit.errors import CommandError, ProvisionError, VhostkitError
from vhostkit.prompts import ask_yes, prompt_until_valid
from vhostkit.services import hosts, mysql, nginx, system, vhost_renderer, wordpress

app = typer.Typer(no_args_is_help=True)
console = Console()

_DOWNLOAD_TIMEOUT = 120.0


def _prompt_domain() -> DomainSpec:
    name = prompt_until_valid(
        console,
        "Enter your domain name (e.g. mysite.local or example.com; lowercase letters, digits and hyphens only)",
        is_valid_domain,
        "Invalid domain name. Use ONLY lowercase English letters (a-z), numbers (0-9) and hyphens (-), "
        "with no hyphen at the start/end of a label and a valid TLD.",
        empty_error="Domain name cannot be empty.",
    )
    return DomainSpec(name=name)


def _prompt_php(cfg: VhostkitConfig) -> PhpTarget:
    token = prompt_until_valid(
        console,
        "Enter your PHP-FPM socket version (e.g. 8.3, 7.4, 5.6, or 'php' for default)",
        is_valid_php_version,
        "Invalid or empty PHP-FPM version. Enter 'php', '5.6', '7.0'-'7.4', or '8.0'-'8.4'.",
    )
    return PhpTarget(version_token=token, socket_dir=cfg.php_socket_dir)


def _install_wordpress(cfg: VhostkitConfig, domain: DomainSpec, event: AuditEvent) -> None:
    web_root = cfg.web_root(domain.name)

    console.print("Downloading the latest WordPress version...")
    with httpx.Client(follow_redirects=True, timeout=_DOWNLOAD_TIMEOUT) as client:
        archive = wordpress.download_archive(client, cfg.wordpress_url, web_root)

    console.print("Unzipping WordPress files...")
    wp_dir = wordpress.extract_archive(archive, web_root)
    wordpress.prune_distribution(wp_dir)

    choice = prompt_until_valid(
        console,
        "Install WordPress with the standard structure or a custom structure? (s/c)",
        lambda v: v.lower() in ("s", "c"),
        "Please enter 's' (standard) or 'c' (custom).",
    ).lower()
    event.layout = "standard" if choice == "s" else "custom"
    if event.layout == "standard":
        wordpress.install_standard(web_root, wp_dir, archive)
    else:
        wordpress.install_custom(web_root, wp_dir, archive, domain)
        console.print("Add these constants to wp-config.php for the custom layout:")
        console.print(Syntax(wordpress.wp_config_constants(domain), "php", theme="monokai"))

    console.print(f"[green]WordPress installed in {web_root}.[/green]")

    console.print("Setting file ownership for WordPress...")
    try:
        system.chown_recursive(cfg.web_owner, web_root, cfg.logs_dir(domain.name))
    except CommandError as exc:
        raise ProvisionError(f"Setting file ownership failed: {exc}") from exc


def _provision(cfg: VhostkitConfig, domain: DomainSpec, php: PhpTarget, event: AuditEvent) -> None:
    web_root = cfg.web_root(domain.name)
    logs_dir = cfg.logs_dir(domain.name)
    conf_path = cfg.available_conf(domain.name)
    total = 6

    # Step 1: Directories
    console.print(f"[bold][1/{total}][/bold] Creating necessary directories")
    with step(event, "directories"):
        for d in (web_root, logs_dir):
            try:
                d.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ProvisionError(f"Failed to create {d}. Check permissions. ({exc})") from exc

    # Step 2: Vhost config
    console.print(f"[bold][2/{total}][/bold] Writing NGINX configuration to {conf_path}")
    with step(event, "vhost"):
        content = vhost_renderer.render_vhost_config(
            domain, php.socket_path, web_root, logs_dir=logs_dir
        )
        try:
            vhost_renderer.write_vhost(conf_path, content)
        except OSError as exc:
            raise ProvisionError(f"Failed to write {conf_path}: {exc}") from exc

    # Step 3: Enable and reload
    console.print(f"[bold][3/{total}][/bold] Enabling site and reloading NGINX")
    with step(event, "nginx"):
        if nginx.enable_site(conf_path, cfg.sites_enabled_dir):
            console.print(f"  Symlink created in {cfg.sites_enabled_dir}")
        else:
            console.print("  Symlink for this site already exists. Skipping.")
        nginx.reload()
    summary = nginx.status_summary()
    if summary:
        console.print(summary, markup=False, highlight=False)

    # Step 4: Hosts file
    console.print(f"[bold][4/{total}][/bold] Adding {domain} to {cfg.hosts_file}")
    with step(event, "hosts"):
        if hosts.add_entry(cfg.hosts_file, cfg.loopback_ip, domain):
            console.print(f"  Entry for '{domain}' added.")
        else:
            console.print(f"  Entry for '{domain}' already exists. Skipping.")

    # Step 5: Database
    console.print(f"[bold][5/{total}][/bold] Creating database `{domain.db_name}`")
    console.print("Enter the credentials of a MySQL user allowed to create databases (e.g. root).")
    db_user = typer.prompt("MySQL Username", default="root")
    db_password = typer.prompt("MySQL Password", default="", hide_input=True, show_default=False)
    with step(event, "database"):
        mysql.create_database(
            domain.db_name,
            db_user,
            db_password,
            charset=cfg.db_charset,
            collation=cfg.db_collation,
        )
    console.print(f"  Database `{domain.db_name}` created.")

    # Step 6: WordPress
    console.print(f"[bold][6/{total}][/bold] WordPress")
    if ask_yes("Is this a WordPress site? Do you want to install it now?"):
        with step(event, "wordpress"):
            _install_wordpress(cfg, domain, event)
    else:
        console.print("  WordPress installation skipped.")


@app.command()
def create() -> None:
    """Interactively provision an NGINX + PHP-FPM virtual host."""
    cfg = get_config()

    console.print("[bold]Create NGINX Virtual Host[/bold]")
    domain = _prompt_domain()
    php = _prompt_php(cfg)
    console.print(f"Using PHP-FPM socket: [cyan]{php.socket_path}[/cyan]")

    web_root = cfg.web_root(domain.name)
    console.print(f"Web files path: [cyan]{web_root}[/cyan]")
    console.print(f"Logs path: [cyan]{cfg.logs_dir(domain.name)}[/cyan]")
    console.print(f"Database name: [cyan]{domain.db_name}[/cyan]")

    if web_root.is_dir():
        console.print(f"[yellow]Warning:[/yellow] The web root directory '{web_root}' already exists.")
        if not ask_yes("Do you want to continue? (Files might be overwritten)"):
            console.print("Operation cancelled. Exiting.")
            raise typer.Exit(0)

    conf_path = cfg.available_conf(domain.name)
    if conf_path.exists():
        console.print(
            f"[yellow]Warning:[/yellow] NGINX configuration file '{conf_path}' already exists. "
            "It will be overwritten."
        )

    try:
        with audit("site.create", domain.name, php=php) as event:
            _provision(cfg, domain, php, event)
    except VhostkitError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(exc.exit_code) from exc

    console.print(f"\n[green bold]Done![/green bold] Virtual host for {domain} is set up.")
    console.print(f"  Visit https://{domain}/ (finish WordPress at https://{domain}/wp-admin/install.php)")
    console.print("  Make sure the NGINX SSL and fastcgi snippets exist and are configured.")


@app.command(name="list")
def list_sites() -> None:
    """List virtual hosts in sites-available."""
    cfg = get_config()
    available = cfg.sites_available_dir

    if not available.exists():
        console.print("No sites-available directory found.")
        return

    table = Table(title="Virtual Hosts")
    table.add_column("Domain", style="cyan")
    table.add_column("Enabled", style="green")
    table.add_column("Web root", style="yellow")

    for conf in sorted(p for p in available.iterdir() if p.is_file()):
        domain = conf.name
        enabled = cfg.enabled_link(domain).is_symlink()
        has_root = cfg.web_root(domain).is_dir()
        table.add_row(domain, "yes" if enabled else "no", "yes" if has_root else "missing")

    console.print(table)
