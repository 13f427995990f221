import pytest
from pydantic import ValidationError

from text_utilities_mcp.config import Settings, load_settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.max_input_length == 1_000_000
    assert settings.tool_timeout_ms == 30_000
    assert settings.port == 8081
    assert settings.log_level == "INFO"
    assert settings.quiet is False
    assert settings.debug is False


def test_reads_prefixed_variables():
    settings = Settings.from_env({
        "TEXT_UTILS_MAX_INPUT_LENGTH": "500",
        "TEXT_UTILS_TOOL_TIMEOUT_MS": "250",
        "TEXT_UTILS_HOST": "127.0.0.1",
        "TEXT_UTILS_PORT": "9000",
        "TEXT_UTILS_LOG_LEVEL": "debug",
        "TEXT_UTILS_QUIET": "yes",
        "TEXT_UTILS_DEBUG": "1",
    })
    assert settings.max_input_length == 500
    assert settings.tool_timeout_ms == 250
    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
    assert settings.quiet is True
    assert settings.debug is True


def test_plain_port_variable_is_a_fallback():
    assert Settings.from_env({"PORT": "8080"}).port == 8080
    assert Settings.from_env({"PORT": "8080", "TEXT_UTILS_PORT": "7000"}).port == 7000


@pytest.mark.parametrize(
    "environ",
    [
        {"TEXT_UTILS_MAX_INPUT_LENGTH": "0"},
        {"TEXT_UTILS_TOOL_TIMEOUT_MS": "soon"},
        {"TEXT_UTILS_LOG_LEVEL": "LOUD"},
        {"TEXT_UTILS_PORT": "70000"},
    ],
)
def test_invalid_values_rejected(environ):
    with pytest.raises(ValidationError):
        Settings.from_env(environ)


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        Settings().port = 1


def test_load_settings_turns_bad_values_into_a_startup_error():
    with pytest.raises(SystemExit) as info:
        load_settings({"TEXT_UTILS_PORT": "70000"})
    assert str(info.value.code).startswith("Invalid configuration:")


def test_load_settings_passes_good_values_through():
    assert load_settings({"TEXT_UTILS_PORT": "9100"}).port == 9100
