"""Integer and bit converters."""

from __future__ import annotations

from collections.abc import Sequence

from regconv.core import (
    ConversionError,
    DataConverter,
    ModbusRegisters,
    MqttValue,
    get_arg,
    get_hex16_arg,
    get_int_arg,
    int32_to_registers,
    registers_to_int32,
)

_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


class Int16Converter(DataConverter):
    """Signed 16-bit value in a single register."""

    @staticmethod
    def to_int16(value: MqttValue) -> int:
        number = value.to_int()
        if not _INT16_MIN <= number <= _INT16_MAX:
            raise ConversionError(f"Conversion failed, value {number} out of range")
        return number

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int(_signed(data[0], 16))

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        number = self.to_int16(value)
        return ModbusRegisters([number] * register_count)


class Int32Converter(DataConverter):
    """Signed 32-bit value in two registers."""

    def __init__(self) -> None:
        self._low_first = False

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int(registers_to_int32(data.values, self._low_first))

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        return int32_to_registers(value.to_int(), self._low_first, register_count)

    def set_args(self, args: Sequence[str]) -> None:
        if args:
            self._low_first = get_arg(0, args) == "low_first"


class _ByteConverter(DataConverter):
    def __init__(self) -> None:
        self._first = False

    def _byte(self, data: ModbusRegisters) -> int:
        value = data[0]
        if self._first:
            value >>= 8
        return value & 0xFF

    def set_args(self, args: Sequence[str]) -> None:
        if args:
            self._first = get_arg(0, args) == "first"


class Int8Converter(_ByteConverter):
    """Signed 8-bit value from the low byte, or the high byte with "first"."""

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int(_signed(self._byte(data), 8))

    def set_args(self, args: Sequence[str]) -> None:
        super().set_args(args)


class UInt8Converter(_ByteConverter):
    """Unsigned 8-bit value from the low byte, or the high byte with "first"."""

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int(self._byte(data))

    def set_args(self, args: Sequence[str]) -> None:
        super().set_args(args)


class UInt32Converter(DataConverter):
    """Unsigned 32-bit value in one or two registers."""

    def __init__(self) -> None:
        self._low_first = False

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        if len(data) > 1:
            high, low = (data[1], data[0]) if self._low_first else (data[0], data[1])
            return MqttValue.from_int((high << 16) | low)
        return MqttValue.from_int(data[0])

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        number = value.to_int() & 0xFFFFFFFF
        registers = ModbusRegisters([number])
        if register_count == 2:
            if self._low_first:
                registers.append(number >> 16)
            else:
                registers.prepend(number >> 16)
        return registers

    def set_args(self, args: Sequence[str]) -> None:
        if args and get_arg(0, args) == "low_first":
            self._low_first = True


class BitmaskConverter(DataConverter):
    """Register value masked with a 16-bit hex mask."""

    def __init__(self) -> None:
        self._mask = 0xFFFF

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int(data[0] & self._mask)

    def set_args(self, args: Sequence[str]) -> None:
        self._mask = get_hex16_arg(0, args)


class BitConverter(DataConverter):
    """A single bit of a register, numbered from 1."""

    def __init__(self) -> None:
        self._bit_number = 0xFF

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        return MqttValue.from_int((data[0] >> (self._bit_number - 1)) & 0x1)

    def set_args(self, args: Sequence[str]) -> None:
        number = get_int_arg(0, args)
        if not 1 <= number <= 16:
            raise ConversionError("Please provide a valid bit number [1-16]")
        self._bit_number = number