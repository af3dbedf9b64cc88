"""
Centralised exception definitions for the garage door operator.
All custom exceptions should inherit from GarageThingError.
"""

class GarageThingError(Exception):
    """Base class for every custom exception thrown by this project."""

class ConfigurationError(GarageThingError):
    """Raised when configuration values or environment variables are invalid."""

class HardwareInitError(GarageThingError):
    """Raised when the GPIO pins cannot be provisioned. Fatal at startup."""

class ExposureError(GarageThingError):
    """Failure inside the network exposure layer (MQTT connect / publish)."""

class UnexpectedEventError(GarageThingError):
    """The controller received an event it does not know how to interpret."""

class UnknownCommandError(GarageThingError):
    """Raised when a command name is not in the command table."""
