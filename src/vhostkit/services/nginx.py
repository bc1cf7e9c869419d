"""NGINX config validation, site activation and reload."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostkit.errors import CommandError, NginxConfigError, ProvisionError
from vhostkit.services import system

log = logging.getLogger(__name__)


def validate_config() -> None:
    """Run ``nginx -t``. Raises NginxConfigError on failure."""
    try:
        result = system._run(["nginx", "-t"], check=False)
    except CommandError as exc:
        raise NginxConfigError(str(exc)) from exc
    if result.returncode != 0:
        raise NginxConfigError(f"NGINX config test failed:\n{result.stderr}")


def reload() -> None:
    """Validate config, then reload NGINX through systemd."""
    validate_config()
    result = system._run(["systemctl", "reload", "nginx"], check=False)
    if result.returncode != 0:
        raise NginxConfigError(
            "NGINX failed to reload. Please check the NGINX configuration manually.\n"
            f"{result.stderr}"
        )


def status_summary(lines: int = 3) -> str:
    """First ``lines`` lines of ``systemctl status nginx`` (best effort)."""
    try:
        result = system._run(["systemctl", "status", "nginx", "--no-pager"], check=False)
    except CommandError:
        return ""
    return "\n".join(result.stdout.splitlines()[:lines])


def enable_site(conf_path: Path, enabled_dir: Path) -> bool:
    """Symlink ``conf_path`` into ``enabled_dir``.

    Returns False when a link with that name already exists.
    """
    link = enabled_dir / conf_path.name
    if link.is_symlink():
        return False
    try:
        enabled_dir.mkdir(parents=True, exist_ok=True)
        link.symlink_to(conf_path)
    except OSError as exc:
        raise ProvisionError(f"Failed to create symlink {link}: {exc}") from exc
    log.debug("linked %s -> %s", link, conf_path)
    return True
