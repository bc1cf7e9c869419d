"""End-to-end tests for ``vhostkit site create`` with external services stubbed."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from vhostkit_common import VhostkitConfig
from vhostkit.cli import app
from vhostkit.errors import NginxConfigError

runner = CliRunner()


@pytest.fixture
def services(tmp_config: VhostkitConfig) -> Iterator[dict[str, MagicMock]]:
    with (
        patch("vhostkit.commands.site.get_config", return_value=tmp_config),
        patch("vhostkit.audit.get_config", return_value=tmp_config),
        patch("vhostkit.services.nginx.reload") as reload,
        patch("vhostkit.services.nginx.status_summary", return_value="") as status,
        patch("vhostkit.services.mysql.create_database") as create_db,
        patch("vhostkit.services.system.chown_recursive") as chown,
    ):
        yield {"reload": reload, "status": status, "create_db": create_db, "chown": chown}


def _answers(*lines: str) -> str:
    return "\n".join(lines) + "\n"


class TestSiteCreate:
    def test_without_wordpress(self, tmp_config: VhostkitConfig, services):
        result = runner.invoke(
            app, ["site", "create"], input=_answers("example.com", "8.3", "root", "s3cret", "n")
        )

        assert result.exit_code == 0, result.output
        assert tmp_config.web_root("example.com").is_dir()
        assert tmp_config.logs_dir("example.com").is_dir()

        conf = tmp_config.available_conf("example.com").read_text()
        assert "fastcgi_pass unix:/var/run/php/php8.3-fpm.sock;" in conf
        assert f"root {tmp_config.web_root('example.com')};" in conf
        assert "server_name example.com www.example.com;" in conf
        assert "server_name uploads.example.com;" in conf

        link = tmp_config.enabled_link("example.com")
        assert link.is_symlink()

        assert "127.0.0.1 example.com www.example.com uploads.example.com" in tmp_config.hosts_file.read_text()

        services["reload"].assert_called_once()
        services["create_db"].assert_called_once_with(
            "example_com", "root", "s3cret",
            charset="utf8mb4", collation="utf8mb4_general_ci",
        )
        services["chown"].assert_not_called()
        assert "WordPress installation skipped" in result.output

    def test_reprompts_on_invalid_input(self, tmp_config: VhostkitConfig, services):
        result = runner.invoke(
            app,
            ["site", "create"],
            input=_answers("", "UPPER.com", "bad-.com", "example.com", "8.5", "php", "root", "", "n"),
        )

        assert result.exit_code == 0, result.output
        assert "Domain name cannot be empty" in result.output
        assert result.output.count("Invalid domain name") == 2
        assert "Invalid or empty PHP-FPM version" in result.output
        conf = tmp_config.available_conf("example.com").read_text()
        assert "fastcgi_pass unix:/var/run/php/php-fpm.sock;" in conf

    def test_existing_web_root_declined(self, tmp_config: VhostkitConfig, services):
        tmp_config.web_root("example.com").mkdir(parents=True)

        result = runner.invoke(app, ["site", "create"], input=_answers("example.com", "8.3", "n"))

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert not tmp_config.available_conf("example.com").exists()
        services["reload"].assert_not_called()

    def test_existing_web_root_confirmed(self, tmp_config: VhostkitConfig, services):
        tmp_config.web_root("example.com").mkdir(parents=True)

        result = runner.invoke(
            app, ["site", "create"], input=_answers("example.com", "8.3", "y", "root", "", "n")
        )

        assert result.exit_code == 0, result.output
        assert tmp_config.available_conf("example.com").exists()

    def test_existing_hosts_entry_kept(self, tmp_config: VhostkitConfig, services):
        tmp_config.hosts_file.write_text("127.0.0.1 localhost\n127.0.0.1 example.com\n")

        result = runner.invoke(
            app, ["site", "create"], input=_answers("example.com", "8.3", "root", "", "n")
        )

        assert result.exit_code == 0, result.output
        assert tmp_config.hosts_file.read_text() == "127.0.0.1 localhost\n127.0.0.1 example.com\n"

    def test_nginx_failure_aborts(self, tmp_config: VhostkitConfig, services):
        services["reload"].side_effect = NginxConfigError("NGINX config test failed:\nbad directive")

        result = runner.invoke(app, ["site", "create"], input=_answers("example.com", "8.3"))

        assert result.exit_code == 1
        assert "NGINX config test failed" in result.output
        services["create_db"].assert_not_called()
        assert "example.com" not in tmp_config.hosts_file.read_text()

        event = json.loads(tmp_config.audit_jsonl_path.read_text().strip())
        assert event["action"] == "site.create"
        assert event["result"] == "failure"
        assert event["php_version"] == "8.3"
        assert event["failed_step"] == "nginx"
        assert [s["name"] for s in event["steps"] if s["result"] == "success"] == ["directories", "vhost"]

    def test_unwritable_audit_keeps_step_error(self, tmp_config: VhostkitConfig, services):
        blocker = tmp_config.audit_db_path.parent
        blocker.parent.mkdir(parents=True, exist_ok=True)
        blocker.write_text("")
        services["reload"].side_effect = NginxConfigError("NGINX config test failed: bad")

        result = runner.invoke(app, ["site", "create"], input=_answers("example.com", "8.3"))

        assert result.exit_code == 1
        assert "NGINX config test failed" in result.output
        assert not isinstance(result.exception, OSError)

    def test_unwritable_audit_after_success(self, tmp_config: VhostkitConfig, services):
        blocker = tmp_config.audit_db_path.parent
        blocker.parent.mkdir(parents=True, exist_ok=True)
        blocker.write_text("")

        result = runner.invoke(
            app, ["site", "create"], input=_answers("example.com", "8.3", "root", "", "n")
        )

        assert result.exit_code == 1
        assert "Audit log could not be written" in result.output
        assert not isinstance(result.exception, OSError)

    def test_success_is_audited(self, tmp_config: VhostkitConfig, services):
        runner.invoke(app, ["site", "create"], input=_answers("example.com", "8.3", "root", "pw", "n"))

        content = tmp_config.audit_jsonl_path.read_text()
        event = json.loads(content.strip())
        assert event["result"] == "success"
        assert event["domain"] == "example.com"
        assert event["socket_path"] == "/var/run/php/php8.3-fpm.sock"
        assert event["layout"] is None
        assert [s["name"] for s in event["steps"]] == ["directories", "vhost", "nginx", "hosts", "database"]
        assert "pw" not in content

    def test_other_answer_cancels_overwrite(self, tmp_config: VhostkitConfig, services):
        tmp_config.web_root("example.com").mkdir(parents=True)

        result = runner.invoke(app, ["site", "create"], input=_answers("example.com", "8.3", "yes"))

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        services["reload"].assert_not_called()

    def test_other_answer_skips_wordpress(self, tmp_config: VhostkitConfig, services):
        with patch("vhostkit.services.wordpress.download_archive") as download:
            result = runner.invoke(
                app, ["site", "create"], input=_answers("example.com", "8.3", "root", "", "x")
            )

        assert result.exit_code == 0, result.output
        assert "WordPress installation skipped" in result.output
        download.assert_not_called()

    def test_standard_wordpress(self, tmp_config: VhostkitConfig, services, wordpress_zip: bytes):
        def fake_download(client, url: str, dest_dir: Path) -> Path:
            archive = dest_dir / "latest.zip"
            archive.write_bytes(wordpress_zip)
            return archive

        with patch("vhostkit.services.wordpress.download_archive", side_effect=fake_download):
            result = runner.invoke(
                app,
                ["site", "create"],
                input=_answers("example.com", "8.3", "root", "", "y", "x", "s"),
            )

        assert result.exit_code == 0, result.output
        web_root = tmp_config.web_root("example.com")
        assert (web_root / "wp-login.php").exists()
        assert not (web_root / "wordpress").exists()
        assert not (web_root / "latest.zip").exists()
        assert "Please enter 's'" in result.output
        services["chown"].assert_called_once_with(
            "www-data:www-data", web_root, tmp_config.logs_dir("example.com")
        )

    def test_custom_wordpress(self, tmp_config: VhostkitConfig, services, wordpress_zip: bytes):
        def fake_download(client, url: str, dest_dir: Path) -> Path:
            archive = dest_dir / "latest.zip"
            archive.write_bytes(wordpress_zip)
            return archive

        with patch("vhostkit.services.wordpress.download_archive", side_effect=fake_download):
            result = runner.invoke(
                app,
                ["site", "create"],
                input=_answers("example.com", "8.3", "root", "", "y", "c"),
            )

        assert result.exit_code == 0, result.output
        web_root = tmp_config.web_root("example.com")
        assert (web_root / "core" / "wp-login.php").exists()
        assert (web_root / "config" / "upload-path.php").exists()
        assert "WP_SITEURL" in result.output

        event = json.loads(tmp_config.audit_jsonl_path.read_text().strip())
        assert event["layout"] == "custom"
        assert event["steps"][-1]["name"] == "wordpress"


class TestSiteList:
    def test_lists_sites(self, tmp_config: VhostkitConfig):
        (tmp_config.sites_available_dir / "example.com").write_text("server {}")
        (tmp_config.sites_available_dir / "other.test").write_text("server {}")
        tmp_config.enabled_link("example.com").symlink_to(tmp_config.available_conf("example.com"))

        with patch("vhostkit.commands.site.get_config", return_value=tmp_config):
            result = runner.invoke(app, ["site", "list"])

        assert result.exit_code == 0
        assert "example.com" in result.output
        assert "other.test" in result.output
