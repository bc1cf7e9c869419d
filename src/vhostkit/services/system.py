"""Subprocess wrappers for host commands (chown, systemctl, ...)."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path

from vhostkit.errors import CommandError

log = logging.getLogger(__name__)


def _run(
    cmd: list[str],
    *,
    check: bool = True,
    capture: bool = True,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    log.debug("running: %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            check=check,
            capture_output=capture,
            text=True,
            env=dict(env) if env is not None else None,
        )
    except subprocess.CalledProcessError as exc:
        raise CommandError(
            f"Command failed: {' '.join(cmd)}\nstderr: {exc.stderr}"
        ) from exc
    except FileNotFoundError as exc:
        raise CommandError(f"Command not found: {cmd[0]}") from exc


def chown_recursive(owner: str, *paths: Path) -> None:
    """``chown -R owner path...``."""
    _run(["chown", "-R", owner, *(str(p) for p in paths)])
