"""Central configuration for vhostkit."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from vhostkit_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    DB_CHARSET,
    DB_COLLATION,
    HOSTS_FILE,
    LOOPBACK_IP,
    NGINX_DIR,
    PHP_SOCKET_DIR,
    PUBLIC_HTML_DIR,
    SITE_LOGS_DIR,
    WEB_GROUP,
    WEB_USER,
    WORDPRESS_URL,
    WWW_ROOT,
)


def _env_path(name: str, default: Path) -> Path:
    env = os.environ.get(name)
    return Path(env) if env else default


def _default_host_id() -> str:
    env = os.environ.get("VHOSTKIT_HOST_ID")
    if env:
        return env
    return os.uname().nodename or "localhost"


class VhostkitConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    www_root: Path = Field(default_factory=lambda: _env_path("VHOSTKIT_WWW_ROOT", WWW_ROOT))
    nginx_dir: Path = Field(default_factory=lambda: _env_path("VHOSTKIT_NGINX_DIR", NGINX_DIR))
    hosts_file: Path = Field(default_factory=lambda: _env_path("VHOSTKIT_HOSTS_FILE", HOSTS_FILE))
    php_socket_dir: Path = Field(default_factory=lambda: _env_path("VHOSTKIT_PHP_SOCKET_DIR", PHP_SOCKET_DIR))
    wordpress_url: str = Field(default_factory=lambda: os.environ.get("VHOSTKIT_WORDPRESS_URL", WORDPRESS_URL))
    host_id: str = Field(default_factory=_default_host_id)
    loopback_ip: str = Field(default=LOOPBACK_IP)
    web_user: str = Field(default=WEB_USER)
    web_group: str = Field(default=WEB_GROUP)
    db_charset: str = Field(default=DB_CHARSET)
    db_collation: str = Field(default=DB_COLLATION)
    audit_jsonl_path: Path = Field(default=AUDIT_JSONL_PATH)
    audit_db_path: Path = Field(default=AUDIT_DB_PATH)

    @property
    def sites_available_dir(self) -> Path:
        return self.nginx_dir / "sites-available"

    @property
    def sites_enabled_dir(self) -> Path:
        return self.nginx_dir / "sites-enabled"

    @property
    def web_owner(self) -> str:
        return f"{self.web_user}:{self.web_group}"

    def site_dir(self, domain: str) -> Path:
        return self.www_root / domain

    def web_root(self, domain: str) -> Path:
        return self.site_dir(domain) / PUBLIC_HTML_DIR

    def logs_dir(self, domain: str) -> Path:
        return self.site_dir(domain) / SITE_LOGS_DIR

    def available_conf(self, domain: str) -> Path:
        return self.sites_available_dir / domain

    def enabled_link(self, domain: str) -> Path:
        return self.sites_enabled_dir / domain
