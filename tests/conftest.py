"""Shared test fixtures."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from vhostkit_common import VhostkitConfig

WP_INDEX = """<?php
/**
 * Front to the WordPress application. This file doesn't do anything, but loads
 * wp-blog-header.php which does and tells WordPress to load the theme.
 *
 * @package WordPress
 */

/**
 * Tells WordPress to load the WordPress theme and output it.
 *
 * @var bool
 */
define( 'WP_USE_THEMES', true );

/** Loads the WordPress Environment and Template */
require __DIR__ . '/wp-blog-header.php';
"""

SILENCE = "<?php\n// Silence is golden.\n"


@pytest.fixture
def tmp_config(tmp_path: Path) -> VhostkitConfig:
    """Return a VhostkitConfig pointing at temp directories."""
    (tmp_path / "nginx" / "sites-available").mkdir(parents=True)
    (tmp_path / "nginx" / "sites-enabled").mkdir(parents=True)
    (tmp_path / "www").mkdir()
    hosts_file = tmp_path / "hosts"
    hosts_file.write_text("127.0.0.1 localhost\n")
    return VhostkitConfig(
        www_root=tmp_path / "www",
        nginx_dir=tmp_path / "nginx",
        hosts_file=hosts_file,
        php_socket_dir=Path("/var/run/php"),
        host_id="test-host",
        audit_jsonl_path=tmp_path / "log" / "audit.jsonl",
        audit_db_path=tmp_path / "lib" / "audit.db",
    )


@pytest.fixture
def wordpress_zip() -> bytes:
    """A miniature release archive shaped like wordpress.org/latest.zip."""
    files = {
        "wordpress/index.php": WP_INDEX,
        "wordpress/readme.html": "<html></html>",
        "wordpress/license.txt": "GPL",
        "wordpress/wp-login.php": "<?php\n",
        "wordpress/wp-blog-header.php": "<?php\n",
        "wordpress/wp-admin/index.php": "<?php\n",
        "wordpress/wp-includes/version.php": "<?php\n$wp_version = '6.6';\n",
        "wordpress/wp-content/index.php": SILENCE,
        "wordpress/wp-content/plugins/index.php": SILENCE,
        "wordpress/wp-content/plugins/hello.php": "<?php\n",
        "wordpress/wp-content/plugins/akismet/akismet.php": "<?php\n",
        "wordpress/wp-content/themes/index.php": SILENCE,
        "wordpress/wp-content/themes/twentytwentyfour/style.css": "/* theme */\n",
    }
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()
