"""
Shared fixtures.

Every test builds its own in-memory EnvironmentSource; nothing reads the real
process environment or a developer's .env.

Run with: pytest tests/ -v
"""
import pytest

from core.environment import EnvironmentSource

LICENSE_ENV = {
    "ACF_PRO_KEY": "acf-secret",
    "POLYLANG_PRO_KEY": "pll-secret",
    "POLYLANG_PRO_URL": "https://site.example",
    "GRAVITY_FORMS_KEY": "gf-secret",
    "WP_ALL_IMPORT_PRO_KEY": "wpai-secret",
    "WP_ALL_IMPORT_PRO_URL": "https://import.example",
    "WP_ALL_EXPORT_PRO_KEY": "wpae-secret",
    "WP_ALL_EXPORT_PRO_URL": "https://export.example",
}

SETTINGS_ENV = (
    "WP_PRO_PLUGINS_VENDOR_NAMESPACE",
    "WP_PRO_PLUGINS_ENV_FILE_DIR",
    "WP_PRO_PLUGINS_HTTP_TIMEOUT_SECONDS",
    "WP_PRO_PLUGINS_USER_AGENT",
    "WP_PRO_PLUGINS_LOG_LEVEL",
)


@pytest.fixture
def license_env():
    """A copy of the full license mapping, safe to mutate per test."""
    return dict(LICENSE_ENV)


@pytest.fixture
def env(license_env):
    return EnvironmentSource(environ=license_env)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no license keys or tool settings in the environment."""
    for key in LICENSE_ENV:
        monkeypatch.delenv(key, raising=False)
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
