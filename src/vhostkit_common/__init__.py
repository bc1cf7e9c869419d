"""vhostkit common — shared models, validators and constants."""

from vhostkit_common.constants import (
    AUDIT_DB_PATH,
    AUDIT_JSONL_PATH,
    DB_CHARSET,
    DB_COLLATION,
    DEFAULT_CLIENT_MAX_BODY_SIZE,
    HOSTS_FILE,
    HSTS_MAX_AGE,
    NGINX_DIR,
    PHP_SOCKET_DIR,
    PHP_VERSION_TOKENS,
    WORDPRESS_URL,
    WWW_ROOT,
)
from vhostkit_common.config import VhostkitConfig
from vhostkit_common.models.audit_event import AuditEvent, StepRecord
from vhostkit_common.models.site import DomainSpec, PhpTarget
from vhostkit_common.php import resolve_socket_path
from vhostkit_common.validators import is_valid_domain, is_valid_php_version

__all__ = [
    "AUDIT_DB_PATH",
    "AUDIT_JSONL_PATH",
    "AuditEvent",
    "DB_CHARSET",
    "DB_COLLATION",
    "DEFAULT_CLIENT_MAX_BODY_SIZE",
    "DomainSpec",
    "HOSTS_FILE",
    "HSTS_MAX_AGE",
    "NGINX_DIR",
    "PHP_SOCKET_DIR",
    "PHP_VERSION_TOKENS",
    "PhpTarget",
    "StepRecord",
    "VhostkitConfig",
    "WORDPRESS_URL",
    "WWW_ROOT",
    "is_valid_domain",
    "is_valid_php_version",
    "resolve_socket_path",
]
