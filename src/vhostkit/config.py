"""CLI configuration — singleton VhostkitConfig resolved at startup."""

from __future__ import annotations

from functools import lru_cache

from vhostkit_common import VhostkitConfig


@lru_cache(maxsize=1)
def get_config() -> VhostkitConfig:
    """Return the global VhostkitConfig (resolved once, cached)."""
    return VhostkitConfig()
