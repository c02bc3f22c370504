import pytest

from config import load_settings


def test_defaults():
    s = load_settings({})
    assert s.env == "development"
    assert s.api_prefix == "/api/v1"
    assert s.port == 8000
    assert s.database_url.startswith("sqlite:///")
    assert s.log_level == "INFO"
    assert not s.is_production


def test_environment_overrides():
    s = load_settings({
        "ALLOCATOR_ENV": "production",
        "ALLOCATOR_API_PREFIX": "/or/",
        "PORT": "9090",
        "ALLOCATOR_DATABASE_URL": "sqlite://",
        "LOG_LEVEL": "debug",
    })
    assert s.is_production
    assert s.api_prefix == "/or"
    assert s.port == 9090
    assert s.database_url == "sqlite://"
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("environ", [
    {"ALLOCATOR_ENV": "staging"},
    {"PORT": "0"},
    {"PORT": "70000"},
    {"PORT": "http"},
])
def test_invalid_settings(environ):
    with pytest.raises(ValueError):
        load_settings(environ)
