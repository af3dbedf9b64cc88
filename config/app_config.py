"""Centralised application settings (dotenv + env overrides)."""
from __future__ import annotations
import os
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
from dotenv import load_dotenv

from garagething.core.exceptions import ConfigurationError

ROOT = Path(__file__).parents[1]
load_dotenv(ROOT / ".env", override=False)


def _flag(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:                            # pylint: disable=too-many-instance-attributes
    DOOR_SENSOR_PIN:  int   = 17
    RELAY_PIN:        int   = 27
    GPIO_PIN_FACTORY: str   = ""
    SENSOR_DEBOUNCE_MS: int = 1000
    RELAY_PULSE_MS:   int   = 500
    MIN_ACTIVATION_INTERVAL_MS: Optional[int] = None
    TICK_SECONDS:     float = 1.0
    MQTT_ENABLED:     bool  = True
    MQTT_HOST:        str   = "localhost"
    MQTT_PORT:        int   = 1883
    MQTT_USERNAME:    Optional[str] = None
    MQTT_PASSWORD:    Optional[str] = None
    MQTT_BASE_TOPIC:  str   = "garagething"
    MQTT_CLIENT_ID:   str   = field(default_factory=lambda: f"garagething-{socket.gethostname()}")
    MQTT_TIMEOUT:     float = 10.0
    LOG_LEVEL:        str   = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        try:
            interval = env.get("MIN_ACTIVATION_INTERVAL_MS")
            return cls(
                DOOR_SENSOR_PIN  = int(env.get("DOOR_SENSOR_PIN", 17)),
                RELAY_PIN        = int(env.get("RELAY_PIN", 27)),
                GPIO_PIN_FACTORY = env.get("GPIO_PIN_FACTORY", ""),
                SENSOR_DEBOUNCE_MS = int(env.get("SENSOR_DEBOUNCE_MS", 1000)),
                RELAY_PULSE_MS   = int(env.get("RELAY_PULSE_MS", 500)),
                MIN_ACTIVATION_INTERVAL_MS = int(interval) if interval else None,
                TICK_SECONDS     = float(env.get("TICK_SECONDS", 1.0)),
                MQTT_ENABLED     = _flag(env.get("MQTT_ENABLED", "true")),
                MQTT_HOST        = env.get("MQTT_HOST", "localhost"),
                MQTT_PORT        = int(env.get("MQTT_PORT", 1883)),
                MQTT_USERNAME    = env.get("MQTT_USERNAME") or None,
                MQTT_PASSWORD    = env.get("MQTT_PASSWORD") or None,
                MQTT_BASE_TOPIC  = env.get("MQTT_BASE_TOPIC", "garagething"),
                MQTT_CLIENT_ID   = env.get("MQTT_CLIENT_ID") or f"garagething-{socket.gethostname()}",
                MQTT_TIMEOUT     = float(env.get("MQTT_TIMEOUT", 10)),
                LOG_LEVEL        = env.get("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid setting: {e}") from e

    # derived values, in seconds
    @property
    def pulse_duration(self) -> float:
        return self.RELAY_PULSE_MS / 1000

    @property
    def min_activation_interval(self) -> float:
        if self.MIN_ACTIVATION_INTERVAL_MS is None:
            return 2 * self.pulse_duration
        return self.MIN_ACTIVATION_INTERVAL_MS / 1000

    @property
    def debounce(self) -> float:
        return self.SENSOR_DEBOUNCE_MS / 1000

    def validate(self) -> "Settings":
        if self.RELAY_PULSE_MS <= 0:
            raise ConfigurationError("RELAY_PULSE_MS must be positive")
        if self.TICK_SECONDS <= 0:
            raise ConfigurationError("TICK_SECONDS must be positive")
        if self.SENSOR_DEBOUNCE_MS < 0:
            raise ConfigurationError("SENSOR_DEBOUNCE_MS must not be negative")
        if self.min_activation_interval < self.pulse_duration:
            raise ConfigurationError("MIN_ACTIVATION_INTERVAL_MS must be >= RELAY_PULSE_MS")
        if not 1 <= self.MQTT_PORT <= 65535:
            raise ConfigurationError("MQTT_PORT must be a valid port number")
        return self


