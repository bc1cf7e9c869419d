"""Jinja2-based NGINX vhost config renderer."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict

from vhostkit_common import DomainSpec
from vhostkit_common.constants import (
    DEFAULT_CLIENT_MAX_BODY_SIZE,
    FASTCGI_SNIPPET,
    HSTS_MAX_AGE,
    NGINX_LOG_DIR,
    SSL_CERTIFICATE_SNIPPET,
    SSL_PARAMS_SNIPPET,
)

log = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class VhostOptions(BaseModel):
    """Server-wide settings baked into every rendered vhost.

    The snippets are referenced, not generated; they must already exist
    under the NGINX config directory.
    """

    model_config = ConfigDict(frozen=True)

    ssl_certificate_snippet: str = SSL_CERTIFICATE_SNIPPET
    ssl_params_snippet: str = SSL_PARAMS_SNIPPET
    fastcgi_snippet: str = FASTCGI_SNIPPET
    hsts_max_age: int = HSTS_MAX_AGE
    client_max_body_size: str = DEFAULT_CLIENT_MAX_BODY_SIZE
    redirect_log_dir: str = str(NGINX_LOG_DIR)


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_vhost_config(
    domain: DomainSpec,
    socket_path: str,
    web_root: str | PurePosixPath,
    *,
    logs_dir: str | PurePosixPath | None = None,
    options: VhostOptions | None = None,
) -> str:
    """Render the four-server vhost: HTTPS main + uploads, HTTP redirects for both.

    ``logs_dir`` defaults to ``logs`` beside the web root.
    """
    web_root = PurePosixPath(web_root)
    if logs_dir is None:
        logs_dir = web_root.parent / "logs"
    template = _get_env().get_template("vhost.conf.j2")
    return template.render(
        domain=domain,
        socket_path=socket_path,
        web_root=str(web_root),
        logs_dir=str(PurePosixPath(logs_dir)),
        options=options or VhostOptions(),
    )


def render_template(name: str, **context: object) -> str:
    """Render any other bundled template (WordPress must-use plugins etc.)."""
    return _get_env().get_template(name).render(**context)


def write_vhost(path: Path, content: str) -> None:
    """Write vhost config to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    log.debug("wrote %s (%d bytes)", path, len(content))
