"""Shared constants for the vhostkit ecosystem."""

from pathlib import Path

# Default paths (overridable via VhostkitConfig / env vars)
WWW_ROOT = Path("/var/www")
NGINX_DIR = Path("/etc/nginx")
HOSTS_FILE = Path("/etc/hosts")
PHP_SOCKET_DIR = Path("/var/run/php")

# Site layout (relative to WWW_ROOT / <domain>)
PUBLIC_HTML_DIR = "public_html"
SITE_LOGS_DIR = "logs"

# Audit / logging
LOG_DIR = Path("/var/log/vhostkit")
AUDIT_JSONL_PATH = LOG_DIR / "audit.jsonl"
AUDIT_DB_PATH = Path("/var/lib/vhostkit/audit.db")

# Local DNS override
LOOPBACK_IP = "127.0.0.1"

# Web server account
WEB_USER = "www-data"
WEB_GROUP = "www-data"

# PHP-FPM
DEFAULT_PHP_SOCKET = "php-fpm.sock"
PHP_VERSION_TOKENS = (
    "php",
    "5.6",
    "7.0", "7.1", "7.2", "7.3", "7.4",
    "8.0", "8.1", "8.2", "8.3", "8.4",
)

# NGINX defaults
SSL_CERTIFICATE_SNIPPET = "snippets/self-signed.conf"
SSL_PARAMS_SNIPPET = "snippets/ssl-params.conf"
FASTCGI_SNIPPET = "snippets/fastcgi-php.conf"
HSTS_MAX_AGE = 63072000
DEFAULT_CLIENT_MAX_BODY_SIZE = "1000M"
NGINX_LOG_DIR = Path("/var/log/nginx")

# MySQL / MariaDB
DB_CHARSET = "utf8mb4"
DB_COLLATION = "utf8mb4_general_ci"

# WordPress
WORDPRESS_URL = "https://wordpress.org/latest.zip"
WORDPRESS_CUSTOM_DIRS = ("config", "core", "plugins", "public", "template", "uploads", "languages")
