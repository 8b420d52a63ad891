"""Tests for settings and startup validation."""
import os
import subprocess
import sys
from pathlib import Path

import pytest

from csrfguard.config import ConfigurationError, Settings, get_settings
from csrfguard.app import ALWAYS_EXCLUDED_PATHS, create_app


def test_settings_read_from_environment():
    settings = Settings()
    assert settings.CSRF_TOKEN_SECRET == "test-encryption-secret"
    assert settings.CSRF_ISSUER_SECRET == "test-issuer-secret"


def test_get_settings_cached():
    assert get_settings() is get_settings()


def test_excluded_paths_parsing():
    settings = Settings(CSRF_EXCLUDED_PATHS=" /a, /b ,,/a")
    assert settings.csrf_excluded_paths == ["/a", "/b"]


def test_excluded_paths_empty_by_default():
    assert Settings().csrf_excluded_paths == []


@pytest.mark.parametrize("env,expected", [
    ("production", True),
    ("PRODUCTION", True),
    ("dev", False),
    ("staging", False),
])
def test_is_production(env, expected):
    assert Settings(ENV=env).is_production is expected


@pytest.mark.parametrize("missing", ["CSRF_TOKEN_SECRET", "CSRF_ISSUER_SECRET"])
def test_missing_secret_is_startup_fault(missing):
    settings = Settings(**{missing: ""})

    with pytest.raises(ConfigurationError, match=missing):
        settings.validate_secrets()

    with pytest.raises(ConfigurationError):
        create_app(settings)


def test_configured_and_operational_exclusions_combined():
    app = create_app(Settings(CSRF_EXCLUDED_PATHS="/v1/webhooks"))
    excluded = app.state.gate.excluded_paths

    assert excluded[0] == "/v1/webhooks"
    for path in ALWAYS_EXCLUDED_PATHS:
        assert path in excluded


def test_alternate_secret_gives_independent_app():
    first = create_app(Settings(CSRF_TOKEN_SECRET="first-secret"))
    second = create_app(Settings(CSRF_TOKEN_SECRET="second-secret"))
    issued = first.state.codec.generate()

    assert first.state.codec.verify(issued.token, issued.raw) is True
    assert second.state.codec.verify(issued.token, issued.raw) is False


def test_factory_import_has_no_environment_requirements():
    """A host with no CSRF_* variables can import the factory and pass its own settings"""
    env = {k: v for k, v in os.environ.items() if not k.startswith("CSRF_")}
    root = str(Path(__file__).resolve().parent.parent)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [root, env.get("PYTHONPATH")]))
    code = (
        "from csrfguard import Settings, create_app\n"
        "app = create_app(Settings(CSRF_TOKEN_SECRET='a', CSRF_ISSUER_SECRET='b'))\n"
        "import sys\n"
        "assert 'csrfguard.main' not in sys.modules\n"
        "print(app.title)\n"
    )

    result = subprocess.run(
        [sys.executable, "-c", code],
        env=env,
        cwd=root,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "csrfguard"


def test_package_exports_factory():
    import csrfguard

    assert csrfguard.create_app is create_app
    assert csrfguard.Settings is Settings
