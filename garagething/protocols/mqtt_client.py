"""
MQTT Exposure
Publishes the door's properties and events to an MQTT broker and accepts
actions on it. The wire protocol itself is handled by paho-mqtt.

Topic layout under ``base_topic``:

- ``properties/<name>``  retained JSON value
- ``events/<name>``      JSON object ``{"event": ..., "timestamp": ...}``
- ``actions/<name>``     subscribed; any non-retained payload invokes the command
- ``description``        retained JSON device description
- ``status``             retained ``online`` / ``offline`` (also the will)
"""

import asyncio
import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import paho.mqtt.client as mqtt

from garagething.core.exceptions import ExposureError, UnknownCommandError
from garagething.models import describe_device


@dataclass
class MqttExposureConfig:
    host: str = "localhost"
    port: int = 1883
    base_topic: str = "garagething"
    client_id: str = "garagething"
    username: Optional[str] = None
    password: Optional[str] = None
    keepalive: int = 60
    qos: int = 1
    timeout: float = 10.0


class MqttExposure:
    """
    PropertySink / EventSink backed by an MQTT broker.

    Features:
    - Retained property topics, re-published after every reconnect
    - Retained device description and online/offline status with a will
    - Action topics routed through the command table
    - Non-blocking publish (paho's network thread does the I/O)
    """

    def __init__(self, config: MqttExposureConfig, commands: Any):
        self.config = config
        self.commands = commands
        self.logger = logging.getLogger(self.__class__.__name__)
        self.client: Optional[mqtt.Client] = None
        self._retained: Dict[str, str] = {}
        self._retained_lock = threading.Lock()

    # ------------------------------------------------------------------ #
    #  Topics
    # ------------------------------------------------------------------ #
    def topic(self, *parts: str) -> str:
        return "/".join((self.config.base_topic.rstrip("/"),) + parts)

    @property
    def status_topic(self) -> str:
        return self.topic("status")

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #
    def _initialize_client(self) -> mqtt.Client:
        client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.config.client_id,
            protocol=mqtt.MQTTv311,
        )
        if self.config.username:
            client.username_pw_set(self.config.username, self.config.password)
        client.will_set(self.status_topic, "offline", qos=self.config.qos, retain=True)

        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect
        client.on_message = self._on_message
        client.on_log = self._on_log

        self.logger.info(f"MQTT client initialized with ID: {self.config.client_id}")
        return client

    async def connect(self) -> None:
        """Connect to the broker and wait until the session is up."""
        self.client = self._initialize_client()
        self.logger.info(f"Connecting to MQTT broker at {self.config.host}:{self.config.port}")
        try:
            result = self.client.connect(self.config.host, self.config.port, self.config.keepalive)
        except OSError as e:
            raise ExposureError(f"MQTT connection failed: {e}") from e
        if result != mqtt.MQTT_ERR_SUCCESS:
            raise ExposureError(f"MQTT connection failed with code: {result}")

        self.client.loop_start()

        loop = asyncio.get_running_loop()
        start_time = loop.time()
        while not self.client.is_connected():
            if loop.time() - start_time > self.config.timeout:
                self.client.loop_stop()
                raise ExposureError(f"Connection timeout after {self.config.timeout}s")
            await asyncio.sleep(0.1)

        self.logger.info("Successfully connected to MQTT broker")

    async def disconnect(self) -> None:
        if self.client is None:
            return
        if self.client.is_connected():
            self.logger.info("Disconnecting from MQTT broker")
            self.client.publish(self.status_topic, "offline", qos=self.config.qos, retain=True)
            self.client.disconnect()
        self.client.loop_stop()
        self.client = None
        self.logger.info("Disconnected from MQTT broker")

    # ------------------------------------------------------------------ #
    #  Sink interface
    # ------------------------------------------------------------------ #
    def publish_property(self, name: str, value: Any) -> None:
        self._publish(self.topic("properties", name), json.dumps(value), retain=True)

    def emit_event(self, name: str) -> None:
        payload = {"event": name, "timestamp": datetime.now(timezone.utc).isoformat()}
        self._publish(self.topic("events", name), json.dumps(payload), retain=False)

    def _publish(self, topic: str, payload: str, retain: bool) -> None:
        if retain:
            with self._retained_lock:
                self._retained[topic] = payload
        if self.client is None:
            self.logger.debug(f"Not connected yet, holding '{topic}'")
            return
        result = self.client.publish(topic, payload, self.config.qos, retain)
        if result.rc != mqtt.MQTT_ERR_SUCCESS:
            # retained values are re-sent by _on_connect once the link is back
            self.logger.warning(f"Failed to publish to '{topic}' (rc={result.rc})")
            return
        self.logger.debug(f"Published {payload} to '{topic}'")

    # ------------------------------------------------------------------ #
    #  paho callbacks (network thread)
    # ------------------------------------------------------------------ #
    def _on_connect(self, client, userdata, flags, reason_code, properties):
        if reason_code.is_failure:
            self.logger.error(f"Connection refused by broker: {reason_code}")
            return
        self.logger.info("Connected to MQTT broker")

        for name in self.commands.get_available_commands():
            client.subscribe(self.topic("actions", name), self.config.qos)
        client.publish(self.topic("description"),
                       json.dumps(describe_device(base_topic=self.config.base_topic)),
                       self.config.qos, True)
        client.publish(self.status_topic, "online", self.config.qos, True)
        with self._retained_lock:
            retained = dict(self._retained)
        for topic, payload in retained.items():
            client.publish(topic, payload, self.config.qos, True)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties):
        if reason_code.is_failure:
            self.logger.warning(f"Unexpected disconnection from MQTT broker ({reason_code})")
        else:
            self.logger.info("Disconnected from MQTT broker")

    def _on_message(self, client, userdata, msg):
        if msg.retain:
            self.logger.warning(f"Ignoring retained action on '{msg.topic}'")
            return
        prefix = self.topic("actions") + "/"
        if not msg.topic.startswith(prefix):
            return
        action = msg.topic[len(prefix):]
        try:
            self.commands.dispatch(action)
        except UnknownCommandError:
            self.logger.warning(f"Ignoring unknown action '{action}'")

    def _on_log(self, client, userdata, level, buf):
        level_map = {
            mqtt.MQTT_LOG_DEBUG: logging.DEBUG,
            mqtt.MQTT_LOG_INFO: logging.DEBUG,
            mqtt.MQTT_LOG_NOTICE: logging.INFO,
            mqtt.MQTT_LOG_WARNING: logging.WARNING,
            mqtt.MQTT_LOG_ERR: logging.ERROR
        }
        self.logger.log(level_map.get(level, logging.DEBUG), f"MQTT: {buf}")
