"""WordPress download, unpacking and directory layouts.

Two layouts are supported:

* standard -- the release archive's contents placed directly in the web root;
* custom -- WordPress split into ``config core plugins public template
  uploads languages`` with the front controller left in the web root and
  must-use plugins in ``config/`` pointing themes and uploads at the new
  locations.

The custom layout depends on the structure of the upstream archive. Any
mismatch raises WordPressError rather than leaving a half-patched tree
unnoticed.
"""

from __future__ import annotations

import logging
import re
import shutil
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

import httpx

from vhostkit_common import DomainSpec
from vhostkit_common.constants import WORDPRESS_CUSTOM_DIRS

from vhostkit.errors import DownloadError, WordPressError
from vhostkit.services.vhost_renderer import render_template

log = logging.getLogger(__name__)

EXTRACTED_DIR = "wordpress"
FRONT_CONTROLLER = "index.php"
_BLOG_HEADER_RE = re.compile(r"^.*\brequire\b.*wp-blog-header\.php.*$", re.MULTILINE)
_CUSTOM_BLOG_HEADER = "require __DIR__ . '/core/wp-blog-header.php';"
_SILENCE_TARGETS = ("uploads", "config", "template", "core")


@contextmanager
def _step(description: str) -> Iterator[None]:
    try:
        yield
    except OSError as exc:
        raise WordPressError(f"{description} failed: {exc}") from exc


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _move_contents(src: Path, dst: Path) -> None:
    """Move every entry of ``src`` into ``dst``, replacing same-named entries."""
    dst.mkdir(parents=True, exist_ok=True)
    for child in sorted(src.iterdir()):
        target = dst / child.name
        if target.exists() or target.is_symlink():
            _remove(target)
        shutil.move(str(child), str(target))


def download_archive(client: httpx.Client, url: str, dest_dir: Path) -> Path:
    """Stream ``url`` into ``dest_dir`` and return the saved file."""
    filename = PurePosixPath(httpx.URL(url).path).name or "latest.zip"
    target = dest_dir / filename
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with open(target, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
    except httpx.HTTPError as exc:
        raise DownloadError(f"WordPress download failed: {exc}") from exc
    except OSError as exc:
        raise DownloadError(f"Could not save {target}: {exc}") from exc
    log.debug("downloaded %s to %s", url, target)
    return target


def extract_archive(archive: Path, dest_dir: Path) -> Path:
    """Unzip ``archive`` into ``dest_dir``; return the extracted ``wordpress/`` dir."""
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(dest_dir)
    except (zipfile.BadZipFile, OSError) as exc:
        raise WordPressError(f"Unzipping WordPress failed: {exc}") from exc
    wp_dir = dest_dir / EXTRACTED_DIR
    if not wp_dir.is_dir():
        raise WordPressError(f"Archive {archive.name} has no {EXTRACTED_DIR}/ directory")
    return wp_dir


def prune_distribution(wp_dir: Path) -> None:
    """Drop readme/license and the bundled plugins and themes (keeping their index.php)."""
    with _step("Cleaning up WordPress files"):
        for name in ("readme.html", "license.txt"):
            (wp_dir / name).unlink(missing_ok=True)
    for sub in ("plugins", "themes"):
        with _step(f"Cleaning up {sub}"):
            for child in (wp_dir / "wp-content" / sub).iterdir():
                if child.name != "index.php":
                    _remove(child)


def install_standard(web_root: Path, wp_dir: Path, archive: Path) -> None:
    """Flatten ``wordpress/`` into the web root."""
    with _step("Moving WordPress files"):
        _move_contents(wp_dir, web_root)
    with _step("Cleaning up temporary WordPress files"):
        wp_dir.rmdir()
        archive.unlink(missing_ok=True)


def patch_front_controller(index_file: Path) -> None:
    """Point the front controller's ``wp-blog-header.php`` require at ``core/``."""
    with _step(f"Reading {index_file.name}"):
        content = index_file.read_text()
    patched, count = _BLOG_HEADER_RE.subn(_CUSTOM_BLOG_HEADER, content, count=1)
    if count == 0:
        raise WordPressError(f"No wp-blog-header.php require found in {index_file}")
    with _step(f"Patching {index_file.name}"):
        index_file.write_text(patched)


def install_custom(web_root: Path, wp_dir: Path, archive: Path, domain: DomainSpec) -> None:
    """Split WordPress into the custom directory layout under ``web_root``."""
    with _step("Creating required directories"):
        for name in WORDPRESS_CUSTOM_DIRS:
            (web_root / name).mkdir(parents=True, exist_ok=True)

    content_dir = wp_dir / "wp-content"
    with _step("Moving plugins"):
        _move_contents(content_dir / "plugins", web_root / "plugins")
        (content_dir / "plugins").rmdir()
    with _step("Moving public content"):
        _move_contents(content_dir, web_root / "public")
        content_dir.rmdir()
    with _step("Moving core files"):
        _move_contents(wp_dir, web_root / "core")
    with _step("Moving index.php from core"):
        front = web_root / FRONT_CONTROLLER
        if front.exists():
            front.unlink()
        shutil.move(str(web_root / "core" / FRONT_CONTROLLER), str(front))
    for name in _SILENCE_TARGETS:
        with _step(f"Copying index.php to {name}"):
            shutil.copy2(web_root / "public" / "index.php", web_root / name / "index.php")
    with _step("Cleaning up temporary WordPress files"):
        wp_dir.rmdir()
        archive.unlink(missing_ok=True)

    patch_front_controller(web_root / FRONT_CONTROLLER)

    with _step("Creating must-use plugins"):
        (web_root / "config" / "theme-path.php").write_text(
            render_template("mu_theme_path.php.j2")
        )
        (web_root / "config" / "upload-path.php").write_text(
            render_template(
                "mu_upload_path.php.j2",
                domain=domain,
                upload_path=str(web_root / "uploads"),
            )
        )


def wp_config_constants(domain: DomainSpec) -> str:
    """``define()`` lines wp-config.php needs for the custom layout."""
    return render_template("wp_config_constants.php.j2", domain=domain)
