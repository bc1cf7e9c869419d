"""PHP-FPM socket resolution."""

from __future__ import annotations

from pathlib import PurePosixPath

from vhostkit_common.constants import DEFAULT_PHP_SOCKET, PHP_SOCKET_DIR


def socket_name(version_token: str) -> str:
    if version_token == "php":
        return DEFAULT_PHP_SOCKET
    return f"php{version_token}-fpm.sock"


def resolve_socket_path(version_token: str, socket_dir: str | PurePosixPath = PHP_SOCKET_DIR) -> str:
    """Map a version token to its FPM socket path. No existence check is made."""
    return str(PurePosixPath(socket_dir) / socket_name(version_token))
