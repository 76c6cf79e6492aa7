"""Settings parsing and validation."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from sitecms.config import Settings


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "UPLOAD_DIR", "APP_ENV", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)

    assert config.database_url == "sqlite+aiosqlite:///./database.db"
    assert config.upload_dir == "./uploads"
    assert config.backend_port == 3000
    assert config.is_production is False


def test_env_values_are_normalized(monkeypatch):
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Settings(_env_file=None)

    assert config.app_env == "production"
    assert config.is_production is True
    assert config.log_level == "DEBUG"


def test_cors_origins_list():
    config = Settings(_env_file=None, cors_origins=" http://a.test , ,http://b.test")
    assert config.cors_origins_list == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize(
    "field, value",
    [("app_env", "staging"), ("log_level", "LOUD"), ("backend_port", 0), ("io_timeout_seconds", 0)],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(PydanticValidationError):
        Settings(_env_file=None, **{field: value})
