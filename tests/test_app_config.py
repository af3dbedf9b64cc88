import pytest

from config.app_config import Settings
from garagething.core.exceptions import ConfigurationError


def test_defaults():
    cfg = Settings.from_env({}).validate()

    assert cfg.DOOR_SENSOR_PIN == 17
    assert cfg.RELAY_PIN == 27
    assert cfg.debounce == 1.0
    assert cfg.pulse_duration == 0.5
    assert cfg.min_activation_interval == 1.0
    assert cfg.TICK_SECONDS == 1.0
    assert cfg.MQTT_ENABLED is True
    assert cfg.MQTT_CLIENT_ID.startswith("garagething-")


def test_interval_follows_pulse_unless_set():
    assert Settings.from_env({"RELAY_PULSE_MS": "300"}).min_activation_interval == 0.6
    cfg = Settings.from_env({"RELAY_PULSE_MS": "300", "MIN_ACTIVATION_INTERVAL_MS": "5000"})
    assert cfg.min_activation_interval == 5.0


def test_env_overrides():
    cfg = Settings.from_env({
        "MQTT_ENABLED": "no",
        "MQTT_PORT": "8883",
        "GPIO_PIN_FACTORY": "mock",
        "LOG_LEVEL": "debug",
    })
    assert cfg.MQTT_ENABLED is False
    assert cfg.MQTT_PORT == 8883
    assert cfg.GPIO_PIN_FACTORY == "mock"
    assert cfg.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize("env", [
    {"RELAY_PULSE_MS": "0"},
    {"TICK_SECONDS": "0"},
    {"SENSOR_DEBOUNCE_MS": "-1"},
    {"RELAY_PULSE_MS": "500", "MIN_ACTIVATION_INTERVAL_MS": "400"},
    {"MQTT_PORT": "70000"},
])
def test_invalid_values_fail_validation(env):
    with pytest.raises(ConfigurationError):
        Settings.from_env(env).validate()


def test_non_numeric_value_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"RELAY_PIN": "GPIO27"})


def test_malformed_environment_exits_with_fatal_error(monkeypatch):
    import main

    monkeypatch.setenv("RELAY_PIN", "GPIO27")
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
