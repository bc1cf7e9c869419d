"""Syntactic checks for operator input.

Both predicates are pure: no DNS lookups, no socket probing. They are
deliberately stricter than the underlying standards (lowercase-only domains,
a closed list of PHP releases).
"""

from __future__ import annotations

import re

MAX_DOMAIN_LENGTH = 253

_DOMAIN_RE = re.compile(r"([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}")
_PHP_VERSION_RE = re.compile(r"php|5\.6|7\.[0-4]|8\.[0-4]")


def is_valid_domain(candidate: str) -> bool:
    """Return True for a lowercase FQDN such as ``example.com`` or ``my-site.local``."""
    if not candidate or len(candidate) > MAX_DOMAIN_LENGTH:
        return False
    return _DOMAIN_RE.fullmatch(candidate) is not None


def is_valid_php_version(candidate: str) -> bool:
    """Return True for ``php`` or a supported ``X.Y`` PHP-FPM release."""
    if not candidate:
        return False
    return _PHP_VERSION_RE.fullmatch(candidate) is not None
