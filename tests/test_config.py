"""Tests for VhostkitConfig."""

from __future__ import annotations

from pathlib import Path

from vhostkit_common import VhostkitConfig


class TestVhostkitConfig:
    def test_site_paths(self, tmp_config: VhostkitConfig):
        root = tmp_config.www_root
        assert tmp_config.web_root("example.com") == root / "example.com" / "public_html"
        assert tmp_config.logs_dir("example.com") == root / "example.com" / "logs"

    def test_nginx_paths(self, tmp_config: VhostkitConfig):
        assert tmp_config.available_conf("example.com") == tmp_config.nginx_dir / "sites-available/example.com"
        assert tmp_config.enabled_link("example.com") == tmp_config.nginx_dir / "sites-enabled/example.com"

    def test_defaults(self, monkeypatch):
        for var in ("VHOSTKIT_WWW_ROOT", "VHOSTKIT_NGINX_DIR", "VHOSTKIT_HOSTS_FILE"):
            monkeypatch.delenv(var, raising=False)
        cfg = VhostkitConfig()
        assert cfg.web_root("example.com") == Path("/var/www/example.com/public_html")
        assert cfg.sites_available_dir == Path("/etc/nginx/sites-available")
        assert cfg.hosts_file == Path("/etc/hosts")
        assert cfg.web_owner == "www-data:www-data"
        assert cfg.db_collation == "utf8mb4_general_ci"

    def test_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VHOSTKIT_WWW_ROOT", str(tmp_path / "www"))
        monkeypatch.setenv("VHOSTKIT_HOST_ID", "box-7")
        monkeypatch.setenv("VHOSTKIT_WORDPRESS_URL", "https://mirror.example/latest.zip")
        cfg = VhostkitConfig()
        assert cfg.www_root == tmp_path / "www"
        assert cfg.host_id == "box-7"
        assert cfg.wordpress_url == "https://mirror.example/latest.zip"
