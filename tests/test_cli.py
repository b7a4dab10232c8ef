"""Tests for cli.main: typer commands."""

import json

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from cli.main import app
from core.environment import load_env_file
from core.errors import DownloadError

runner = CliRunner()


@pytest.fixture
def polylang_env(isolated_cwd, monkeypatch):
    monkeypatch.setenv("POLYLANG_PRO_KEY", "pll-secret")
    monkeypatch.setenv("POLYLANG_PRO_URL", "https://site.example")
    return isolated_cwd


class TestRewriteDist:

    def test_prints_cache_busted_url(self, isolated_cwd):
        result = runner.invoke(
            app,
            ["rewrite-dist", "https://cdn.example.com/pkg.zip", "vendor/pkg", "1.0", "--unique-id", "abc123"],
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == (
            "https://cdn.example.com/pkg.zip#6367c48dd193d56ea7b0baad25b19455e529f5ee"
        )


class TestResolve:

    def test_unsupported(self, isolated_cwd):
        result = runner.invoke(app, ["resolve", "wpackagist-plugin/akismet", "5.3"])
        assert result.exit_code == 0
        assert "not a supported package" in result.output

    def test_missing_key(self, isolated_cwd):
        result = runner.invoke(app, ["resolve", "junaidbhura/polylang-pro", "3.5.4"])
        assert result.exit_code == 1
        assert "POLYLANG_PRO_KEY" in result.output

    def test_secrets_are_masked(self, polylang_env):
        result = runner.invoke(app, ["resolve", "junaidbhura/polylang-pro", "3.5.4"])
        assert result.exit_code == 0
        assert "Polylang Pro" in result.output
        assert "pll-secret" not in result.output

    def test_dotenv_in_working_directory_is_used(self, isolated_cwd):
        missing = runner.invoke(app, ["resolve", "advanced-custom-fields-pro", "6.2.4"])
        assert missing.exit_code == 1

        (isolated_cwd / ".env").write_text("ACF_PRO_KEY=from-dotenv\n", encoding="utf-8")
        result = runner.invoke(app, ["resolve", "advanced-custom-fields-pro", "6.2.4"])
        assert result.exit_code == 0
        assert "Advanced Custom Fields Pro" in result.output

    def test_undecodable_dotenv_falls_back_to_process_env(self, isolated_cwd, monkeypatch):
        (isolated_cwd / ".env").write_bytes(b"ACF_PRO_KEY=\xff\xfe\xfa\n")
        monkeypatch.setenv("ACF_PRO_KEY", "from-process")
        result = runner.invoke(app, ["resolve", "advanced-custom-fields-pro", "6.2.4"])
        assert result.exit_code == 0
        assert "Advanced Custom Fields Pro" in result.output


class TestHandle:

    def test_processes_event_file(self, polylang_env):
        events = polylang_env / "events.jsonl"
        events.write_text(
            "\n".join(
                [
                    json.dumps({"event": "pre-package-install", "package": {"name": "junaidbhura/polylang-pro", "version": "3.5.4", "distUrl": "https://example.com/p.zip"}}),
                    json.dumps({"event": "pre-file-download", "url": "https://example.com/p.zip", "package": {"name": "junaidbhura/polylang-pro", "version": "3.5.4"}}),
                ]
            ),
            encoding="utf-8",
        )
        result = runner.invoke(app, ["handle", "--input", str(events)])
        assert result.exit_code == 0
        records = [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]
        assert len(records) == 2
        assert records[0]["dist_url"].startswith("https://example.com/p.zip#")
        assert records[1]["processed_url"].startswith("https://polylang.pro?")

    def test_reads_stdin(self, polylang_env):
        line = json.dumps({"event": "pre-file-download", "url": "u", "package": {"name": "other/pkg", "version": "1"}})
        result = runner.invoke(app, ["handle"], input=line + "\n")
        assert result.exit_code == 0
        assert json.loads(result.stdout.strip()) == {"event": "pre-file-download", "package": "other/pkg"}

    def test_undecodable_dotenv_does_not_abort(self, isolated_cwd):
        (isolated_cwd / ".env").write_bytes(b"ACF_PRO_KEY=\xff\xfe\xfa\n")
        acf = {"name": "junaidbhura/advanced-custom-fields-pro", "version": "6.2.4"}
        result = runner.invoke(app, ["handle"], input=json.dumps({"event": "pre-package-install", "package": acf}) + "\n")
        assert result.exit_code == 0
        records = [json.loads(line) for line in result.stdout.splitlines() if line.startswith("{")]
        assert records == [
            {
                "event": "pre-package-install",
                "package": "junaidbhura/advanced-custom-fields-pro",
                "error": "Environment variable 'ACF_PRO_KEY' is not set.",
            }
        ]


class TestDownload:

    def test_downloads_resolved_url(self, polylang_env, monkeypatch):
        calls = []

        def fake_download(url, output, **kwargs):
            calls.append((url, output))
            return output

        monkeypatch.setattr(cli_main, "download_package", fake_download)
        output = polylang_env / "pll.zip"
        result = runner.invoke(app, ["download", "polylang-pro", "3.5.4", "--output", str(output)])
        assert result.exit_code == 0
        assert calls[0][0].startswith("https://polylang.pro?")
        assert calls[0][1] == output

    def test_download_error(self, polylang_env, monkeypatch):
        def failing_download(url, output, **kwargs):
            raise DownloadError(url, "HTTP 403")

        monkeypatch.setattr(cli_main, "download_package", failing_download)
        result = runner.invoke(app, ["download", "polylang-pro", "3.5.4", "-o", str(polylang_env / "x.zip")])
        assert result.exit_code == 1
        assert "HTTP 403" in result.output

    def test_unsupported(self, isolated_cwd):
        result = runner.invoke(app, ["download", "other/pkg", "1.0", "-o", str(isolated_cwd / "x.zip")])
        assert result.exit_code == 1


class TestDoctor:

    def test_reports_missing_and_present_keys(self, polylang_env):
        result = runner.invoke(app, ["doctor", "run"])
        assert result.exit_code == 0
        assert "POLYLANG_PRO_KEY" in result.output
        assert "OK" in result.output
        assert "MISSING" in result.output

    def test_setup_writes_dotenv(self, isolated_cwd):
        result = runner.invoke(app, ["doctor", "setup", "advanced-custom-fields-pro"], input="acf-secret\n")
        assert result.exit_code == 0
        assert load_env_file(isolated_cwd / ".env") == {"ACF_PRO_KEY": "acf-secret"}

    def test_setup_rejects_unsupported_package(self, isolated_cwd):
        result = runner.invoke(app, ["doctor", "setup", "other/pkg"])
        assert result.exit_code != 0
