"""Service layer: device wiring and lifecycle."""

from .device_service import DeviceService

__all__ = ['DeviceService']
