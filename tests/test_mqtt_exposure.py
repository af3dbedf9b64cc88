import json
from types import SimpleNamespace
from unittest.mock import MagicMock, call

import paho.mqtt.client as mqtt
import pytest

from garagething.controller import CommandRegistry
from garagething.core.exceptions import ExposureError
from garagething.models import ActivateRequest
from garagething.protocols import MqttExposure, MqttExposureConfig


@pytest.fixture
def paho(monkeypatch):
    client = MagicMock()
    client.connect.return_value = mqtt.MQTT_ERR_SUCCESS
    client.is_connected.return_value = True
    client.publish.return_value = MagicMock(rc=mqtt.MQTT_ERR_SUCCESS)
    monkeypatch.setattr("garagething.protocols.mqtt_client.mqtt.Client",
                        MagicMock(return_value=client))
    return client


@pytest.fixture
def submitted():
    return []


@pytest.fixture
def exposure(submitted):
    config = MqttExposureConfig(base_topic="home/garage", qos=1, timeout=0.2)
    return MqttExposure(config, CommandRegistry(submitted.append))


def _ok():
    return MagicMock(is_failure=False)


@pytest.mark.asyncio
async def test_connect_sets_will_and_starts_loop(exposure, paho):
    await exposure.connect()

    paho.will_set.assert_called_once_with("home/garage/status", "offline", qos=1, retain=True)
    paho.connect.assert_called_once_with("localhost", 1883, 60)
    paho.loop_start.assert_called_once()


@pytest.mark.asyncio
async def test_connect_refused_raises(exposure, paho):
    paho.connect.side_effect = ConnectionRefusedError("nope")
    with pytest.raises(ExposureError):
        await exposure.connect()


@pytest.mark.asyncio
async def test_connect_error_code_raises(exposure, paho):
    paho.connect.return_value = mqtt.MQTT_ERR_NO_CONN
    with pytest.raises(ExposureError):
        await exposure.connect()


@pytest.mark.asyncio
async def test_connect_timeout_raises(exposure, paho):
    paho.is_connected.return_value = False
    with pytest.raises(ExposureError):
        await exposure.connect()
    paho.loop_stop.assert_called()


@pytest.mark.asyncio
async def test_properties_are_retained_json(exposure, paho):
    await exposure.connect()
    exposure.publish_property("open", True)
    exposure.publish_property("openduration", 42)

    assert paho.publish.call_args_list == [
        call("home/garage/properties/open", "true", 1, True),
        call("home/garage/properties/openduration", "42", 1, True),
    ]


@pytest.mark.asyncio
async def test_events_are_not_retained(exposure, paho):
    await exposure.connect()
    exposure.emit_event("Opened")

    topic, payload, qos, retain = paho.publish.call_args.args
    assert topic == "home/garage/events/Opened"
    assert json.loads(payload)["event"] == "Opened"
    assert retain is False


@pytest.mark.asyncio
async def test_failed_publish_does_not_raise(exposure, paho):
    await exposure.connect()
    paho.publish.return_value = MagicMock(rc=mqtt.MQTT_ERR_NO_CONN)
    exposure.publish_property("relay", False)


@pytest.mark.asyncio
async def test_reconnect_resends_description_status_and_properties(exposure, paho):
    await exposure.connect()
    exposure.publish_property("open", False)
    exposure.emit_event("Closed")
    paho.publish.reset_mock()

    exposure._on_connect(paho, None, {}, _ok(), None)

    paho.subscribe.assert_called_once_with("home/garage/actions/activate", 1)
    topics = [c.args[0] for c in paho.publish.call_args_list]
    assert topics == ["home/garage/description", "home/garage/status",
                      "home/garage/properties/open"]
    description = json.loads(paho.publish.call_args_list[0].args[1])
    assert set(description["properties"]) == {"open", "relay", "openduration"}
    assert set(description["events"]) == {"Opened", "Closed", "Activated"}
    assert list(description["actions"]) == ["activate"]


def test_refused_connection_subscribes_nothing(exposure, paho):
    exposure._on_connect(paho, None, {}, MagicMock(is_failure=True), None)
    paho.subscribe.assert_not_called()


def test_action_message_dispatches_command(exposure, submitted):
    exposure._on_message(None, None, SimpleNamespace(topic="home/garage/actions/activate",
                                                      payload=b"", retain=False))
    assert submitted == [ActivateRequest()]


def test_retained_action_is_not_executed(exposure, submitted):
    exposure._on_message(None, None, SimpleNamespace(topic="home/garage/actions/activate",
                                                      payload=b"", retain=True))
    assert submitted == []


def test_unknown_action_is_ignored(exposure, submitted):
    exposure._on_message(None, None, SimpleNamespace(topic="home/garage/actions/explode",
                                                      payload=b"{}", retain=False))
    assert submitted == []


@pytest.mark.asyncio
async def test_disconnect_marks_offline(exposure, paho):
    await exposure.connect()
    await exposure.disconnect()

    paho.publish.assert_called_with("home/garage/status", "offline", qos=1, retain=True)
    paho.disconnect.assert_called_once()
    assert exposure.client is None
