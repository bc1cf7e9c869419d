"""Local DNS overrides in /etc/hosts."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostkit_common import DomainSpec

from vhostkit.errors import HostsFileError

log = logging.getLogger(__name__)


def host_line(ip: str, domain: DomainSpec) -> str:
    """``<ip> <domain> www.<domain> uploads.<domain>``."""
    return f"{ip} {domain.name} {domain.www} {domain.uploads}"


def has_entry(path: Path, domain: str) -> bool:
    """True if a non-comment line maps ``domain``, ``www.<domain>`` or ``uploads.<domain>``."""
    if not path.exists():
        return False
    names = {domain, f"www.{domain}", f"uploads.{domain}"}
    for line in path.read_text().splitlines():
        hostnames = line.split("#", 1)[0].split()[1:]
        if names.intersection(hostnames):
            return True
    return False


def add_entry(path: Path, ip: str, domain: DomainSpec) -> bool:
    """Append the loopback mapping for ``domain``.

    Returns False (and leaves the file untouched) if an entry already exists.
    """
    try:
        if has_entry(path, domain.name):
            return False
        existing = path.read_text() if path.exists() else ""
        with open(path, "a") as f:
            if existing and not existing.endswith("\n"):
                f.write("\n")
            f.write(host_line(ip, domain) + "\n")
    except OSError as exc:
        raise HostsFileError(f"Failed to update {path}: {exc}") from exc
    log.debug("added %s to %s", domain.name, path)
    return True
