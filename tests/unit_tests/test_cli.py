import pytest
from click.testing import CliRunner

from mandala_cms import main
from mandala_cms.cli import cli
from mandala_cms.config.settings import get_settings
from tests.consts import TEST_BUCKET_NAME


@pytest.fixture
def env_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("DEPLOYMENT_MODE", "local")
    monkeypatch.setenv("DATABASE_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("S3_BUCKET_NAME", TEST_BUCKET_NAME)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def test_show_config_env_lines(env_settings):
    result = CliRunner().invoke(cli, ["show-config", "--env"])

    assert result.exit_code == 0
    lines = dict(line.split("=", 1) for line in result.output.splitlines())
    assert lines["DEPLOYMENT_MODE"] == "local-dev"
    assert lines["S3_BUCKET_NAME"] == TEST_BUCKET_NAME
    assert lines["SQLITE_PATH"] == env_settings.sqlite_path
    assert lines["LOG_LEVEL"] == "DEBUG"
    assert lines["COMPANY_PROFILE_ID"] == env_settings.company_profile_id


def test_show_config_human_readable(env_settings):
    result = CliRunner().invoke(cli, ["show-config"])

    assert result.exit_code == 0
    assert f"S3 Bucket: {TEST_BUCKET_NAME}" in result.output


def test_create_app_uses_cached_settings_and_configures_logging(env_settings, monkeypatch):
    levels = []
    monkeypatch.setattr(main, "configure_logging", levels.append)

    app = main.create_app()

    assert app.state.settings is env_settings
    assert levels == ["DEBUG"]
