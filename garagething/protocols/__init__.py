"""Outbound sinks and the MQTT exposure layer."""

from .sinks import PropertySink, EventSink, LoggingSink, FanOutSink
from .mqtt_client import MqttExposure, MqttExposureConfig

__all__ = [
    'PropertySink',
    'EventSink',
    'LoggingSink',
    'FanOutSink',
    'MqttExposure',
    'MqttExposureConfig',
]
