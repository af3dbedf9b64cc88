"""GPIO access for the door sensor and relay."""

from .gpio_adapter import GpioDoorHardware, create_pin_factory

__all__ = ['GpioDoorHardware', 'create_pin_factory']
