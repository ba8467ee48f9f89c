"""Value types and shared helpers used by all register converters."""

from __future__ import annotations

import enum
import math
import struct
from abc import ABC
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Union

NO_PRECISION = -1

_UINT16_MASK = 0xFFFF
_UINT32_MASK = 0xFFFFFFFF


class ConversionError(ValueError):
    """Raised when a value cannot be converted or a converter is misconfigured."""


class ValueKind(enum.Enum):
    """The kind of payload an MqttValue carries."""

    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    BINARY = "binary"


def _parse_int(text: str) -> int:
    stripped = text.strip()
    try:
        if stripped.lower().lstrip("+-").startswith("0x"):
            return int(stripped, 16)
        return int(stripped, 10)
    except ValueError:
        pass
    try:
        number = float(stripped)
    except ValueError:
        raise ConversionError(f"Cannot convert {text!r} to an integer") from None
    if not math.isfinite(number):
        raise ConversionError(f"Cannot convert {text!r} to an integer")
    return int(number)


def _parse_double(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return float(_parse_int(text))


@dataclass(frozen=True)
class MqttValue:
    """A value published to or received from MQTT."""

    kind: ValueKind
    value: Union[int, float, str, bytes]
    precision: int = NO_PRECISION

    NO_PRECISION = NO_PRECISION

    @classmethod
    def from_int(cls, value: int) -> MqttValue:
        return cls(ValueKind.INT, int(value))

    @classmethod
    def from_double(cls, value: float, precision: int = NO_PRECISION) -> MqttValue:
        return cls(ValueKind.DOUBLE, float(value), precision)

    @classmethod
    def from_string(cls, value: str) -> MqttValue:
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def from_bytes(cls, data: bytes) -> MqttValue:
        return cls(ValueKind.BINARY, bytes(data))

    def to_int(self) -> int:
        """Return the value as an integer, truncating fractions."""
        if self.kind is ValueKind.INT:
            return self.value
        if self.kind is ValueKind.DOUBLE:
            if not math.isfinite(self.value):
                raise ConversionError(f"Cannot convert {self.value} to an integer")
            return int(self.value)
        return _parse_int(self.to_string())

    def to_double(self) -> float:
        if self.kind in (ValueKind.INT, ValueKind.DOUBLE):
            return float(self.value)
        return _parse_double(self.to_string())

    def to_string(self) -> str:
        if self.kind is ValueKind.INT:
            return str(self.value)
        if self.kind is ValueKind.DOUBLE:
            if self.precision < 0:
                return f"{self.value:f}"
            return f"{self.value:.{self.precision}f}"
        if self.kind is ValueKind.STRING:
            return self.value
        return self.value.decode("utf-8", errors="replace")

    def to_bytes(self) -> bytes:
        if self.kind is ValueKind.BINARY:
            return self.value
        return self.to_string().encode("utf-8")


class ModbusRegisters:
    """An ordered list of 16-bit register values."""

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._values = [int(v) & _UINT16_MASK for v in values]

    @property
    def values(self) -> list[int]:
        return list(self._values)

    def append(self, value: int) -> None:
        self._values.append(int(value) & _UINT16_MASK)

    def prepend(self, value: int) -> None:
        self._values.insert(0, int(value) & _UINT16_MASK)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> int:
        return self._values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModbusRegisters):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ModbusRegisters({self._values!r})"


class DataConverter(ABC):
    """Base class for converters between register data and MQTT values."""

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        raise ConversionError(f"{type(self).__name__} cannot convert registers to MQTT values")

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        raise ConversionError(f"{type(self).__name__} cannot convert MQTT values to registers")

    def set_args(self, args: Sequence[str]) -> None:
        if args:
            raise ConversionError(f"{type(self).__name__} takes no arguments")


def get_arg(index: int, args: Sequence[str]) -> str:
    if not 0 <= index < len(args):
        raise ConversionError(f"Missing argument {index + 1}")
    return args[index]


def get_int_arg(index: int, args: Sequence[str]) -> int:
    arg = get_arg(index, args)
    try:
        return int(arg.strip())
    except ValueError:
        raise ConversionError(f"Argument {index + 1} must be an integer, got {arg!r}") from None


def get_double_arg(index: int, args: Sequence[str]) -> float:
    arg = get_arg(index, args)
    try:
        return float(arg.strip())
    except ValueError:
        raise ConversionError(f"Argument {index + 1} must be a number, got {arg!r}") from None


def get_hex16_arg(index: int, args: Sequence[str]) -> int:
    arg = get_arg(index, args)
    try:
        value = int(arg.strip(), 16)
    except ValueError:
        raise ConversionError(f"Argument {index + 1} must be a hex number, got {arg!r}") from None
    if not 0 <= value <= _UINT16_MASK:
        raise ConversionError(f"Argument {index + 1} does not fit in 16 bits: {arg!r}")
    return value


def registers_to_int32(values: Sequence[int], low_first: bool) -> int:
    """Combine one or two registers into a signed 32-bit integer."""
    if not values:
        raise ConversionError("Cannot read integer from empty register list")
    if len(values) == 1:
        combined = values[0] & _UINT16_MASK
    else:
        high, low = (values[1], values[0]) if low_first else (values[0], values[1])
        combined = ((high & _UINT16_MASK) << 16) | (low & _UINT16_MASK)
    if combined >= 1 << 31:
        combined -= 1 << 32
    return combined


def int32_to_registers(value: int, low_first: bool, register_count: int) -> ModbusRegisters:
    """Split a 32-bit integer into one or two registers."""
    unsigned = int(value) & _UINT32_MASK
    high, low = unsigned >> 16, unsigned & _UINT16_MASK
    if register_count == 1:
        return ModbusRegisters([low])
    if register_count == 2:
        return ModbusRegisters([low, high] if low_first else [high, low])
    raise ConversionError(f"Cannot store 32-bit value in {register_count} registers")


def swap_byte_order(values: Iterable[int]) -> list[int]:
    """Return the registers with the two bytes of each one swapped."""
    return [((v & 0xFF) << 8) | ((v >> 8) & 0xFF) for v in values]


def registers_to_float(high: int, low: int, swap_bytes: bool) -> float:
    """Read an IEEE 754 single-precision float from two registers."""
    if swap_bytes:
        high, low = swap_byte_order([high, low])
    raw = struct.pack(">HH", high & _UINT16_MASK, low & _UINT16_MASK)
    return struct.unpack(">f", raw)[0]