"""Converters between Modbus register values and MQTT payload values."""

__version__ = "1.0.0"