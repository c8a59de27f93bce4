"""Unit tests for Settings loading and precedence."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from looker.config import SETTINGS_FILENAME, Settings, default_config_dir, resolve_config_dir


@pytest.fixture
def config_dir(tmp_path):
    path = tmp_path / "config"
    path.mkdir()
    return path


def _write_settings(config_dir: Path, body: str) -> None:
    (config_dir / SETTINGS_FILENAME).write_text(body, encoding="utf-8")


def test_defaults(config_dir):
    settings = Settings.load(config_dir=config_dir)

    assert settings.index_path == Path("index.json")
    assert settings.data_path == Path(".")
    assert settings.result_limit == 10
    assert settings.color is True
    assert settings.recompute_norms is False
    assert settings.log_level == "warning"
    assert settings.log_json is False
    assert settings.settings_file == config_dir / SETTINGS_FILENAME


def test_toml_file_overrides_defaults(config_dir):
    _write_settings(config_dir, 'index_path = "/srv/looker/index.json"\nresult_limit = 3\ncolor = false\n')

    settings = Settings.load(config_dir=config_dir)

    assert settings.index_path == Path("/srv/looker/index.json")
    assert settings.result_limit == 3
    assert settings.color is False


def test_environment_overrides_toml(config_dir, monkeypatch):
    _write_settings(config_dir, "result_limit = 3\n")
    monkeypatch.setenv("LOOKER_RESULT_LIMIT", "7")

    assert Settings.load(config_dir=config_dir).result_limit == 7


def test_explicit_values_override_environment(config_dir, monkeypatch):
    monkeypatch.setenv("LOOKER_RESULT_LIMIT", "7")

    assert Settings.load(config_dir=config_dir, result_limit=2).result_limit == 2


def test_none_overrides_fall_through(config_dir, monkeypatch):
    monkeypatch.setenv("looker_data_path", "/data")

    settings = Settings.load(config_dir=config_dir, data_path=None, color=None)

    assert settings.data_path == Path("/data")
    assert settings.color is True


def test_config_dir_from_environment(config_dir, monkeypatch):
    _write_settings(config_dir, "recompute_norms = true\n")
    monkeypatch.setenv("LOOKER_CONFIG_DIR", str(config_dir))

    settings = Settings()

    assert settings.config_dir == config_dir
    assert settings.recompute_norms is True


def test_default_config_dir_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert default_config_dir() == tmp_path / "looker"
    assert resolve_config_dir() == tmp_path / "looker"
    assert resolve_config_dir("~/elsewhere") == Path("~/elsewhere").expanduser()


def test_log_level_is_case_insensitive(config_dir):
    assert Settings.load(config_dir=config_dir, log_level="DEBUG").log_level == "debug"


@pytest.mark.parametrize(
    ("field", "value"),
    [("result_limit", 0), ("log_level", "verbose")],
)
def test_invalid_values_are_rejected(config_dir, field, value):
    with pytest.raises(ValidationError):
        Settings.load(config_dir=config_dir, **{field: value})


def test_invalid_environment_value_is_rejected(config_dir, monkeypatch):
    monkeypatch.setenv("LOOKER_RESULT_LIMIT", "lots")

    with pytest.raises(ValidationError):
        Settings.load(config_dir=config_dir)
