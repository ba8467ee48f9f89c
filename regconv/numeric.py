"""Floating point, scaling and arithmetic converters."""

from __future__ import annotations

import math
import struct
from abc import abstractmethod
from collections.abc import Sequence

from regconv.core import (
    NO_PRECISION,
    ConversionError,
    DataConverter,
    ModbusRegisters,
    MqttValue,
    get_arg,
    get_double_arg,
    get_int_arg,
    int32_to_registers,
    registers_to_float,
    registers_to_int32,
    swap_byte_order,
)


class FloatConverter(DataConverter):
    """IEEE 754 single-precision float stored in two registers."""

    def __init__(self) -> None:
        self._low_first = False
        self._swap_bytes = False
        self._precision = NO_PRECISION

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        if len(data) < 2:
            raise ConversionError("Cannot read 32-bit float from single register")
        high, low = (data[1], data[0]) if self._low_first else (data[0], data[1])
        number = registers_to_float(high, low, self._swap_bytes)
        return MqttValue.from_double(number, self._precision)

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        if register_count < 2:
            raise ConversionError("Cannot store float in single register")
        try:
            packed = struct.pack(">f", value.to_double())
        except OverflowError:
            raise ConversionError(f"Value {value.to_string()} does not fit in a float") from None
        bits = struct.unpack(">i", packed)[0]
        registers = int32_to_registers(bits, self._low_first, register_count)
        if self._swap_bytes:
            return ModbusRegisters(swap_byte_order(registers))
        return registers

    def set_args(self, args: Sequence[str]) -> None:
        if not 1 <= len(args) <= 3:
            return
        if len(args) == 3:
            self._swap_bytes = get_arg(2, args) == "swap_bytes"
        if len(args) >= 2:
            self._low_first = get_arg(1, args) == "low_first"
        self._precision = get_int_arg(0, args)


class ScaleConverter(DataConverter):
    """Linear mapping of a register value from one range to another."""

    def __init__(self) -> None:
        self._source: tuple[float, float] | None = None
        self._target: tuple[float, float] | None = None
        self._precision = 0

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        if self._source is None or self._target is None:
            raise ConversionError("Scale converter needs source and target ranges")
        source_from, source_to = self._source
        target_from, target_to = self._target
        if source_to == source_from:
            raise ConversionError("Source scale range is empty")
        result = (target_to - target_from) * (data[0] - source_from) / (
            source_to - source_from
        ) + target_from
        return MqttValue.from_double(result, self._precision)

    def set_args(self, args: Sequence[str]) -> None:
        self._source = (get_double_arg(0, args), get_double_arg(1, args))
        self._target = (get_double_arg(2, args), get_double_arg(3, args))
        if len(args) == 5:
            self._precision = get_int_arg(4, args)


class SingleArgMathConverter(DataConverter):
    """Applies an arithmetic operation with one operand to register values."""

    def __init__(self, default_precision: int = NO_PRECISION) -> None:
        self._operand: float | None = None
        self._precision = default_precision
        self._low_first = False

    @property
    def operand(self) -> float:
        if self._operand is None:
            raise ConversionError(f"{type(self).__name__} needs an operand argument")
        return self._operand

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        if len(data) == 1:
            number = float(data[0])
        else:
            number = float(registers_to_int32(data.values, self._low_first))
        return MqttValue.from_double(self.do_math(number), self._precision)

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        result = self.do_math(value.to_double())
        if not math.isfinite(result):
            raise ConversionError(f"Cannot store {result} in registers")
        return int32_to_registers(int(result), self._low_first, register_count)

    def set_args(self, args: Sequence[str]) -> None:
        self._operand = get_double_arg(0, args)
        if len(args) > 1:
            self._precision = get_int_arg(1, args)
        if len(args) > 2:
            self._low_first = get_arg(2, args) == "low_first"

    @abstractmethod
    def do_math(self, value: float) -> float:
        """Apply the operation to a value."""


class DivideConverter(SingleArgMathConverter):
    """Divides by the operand; prints six fractional digits unless told otherwise."""

    def __init__(self) -> None:
        super().__init__(NO_PRECISION)

    def do_math(self, value: float) -> float:
        try:
            return value / self.operand
        except ZeroDivisionError:
            raise ConversionError("Division by zero") from None


class MultiplyConverter(SingleArgMathConverter):
    """Multiplies by the operand; prints integers unless told otherwise."""

    def __init__(self) -> None:
        super().__init__(0)

    def do_math(self, value: float) -> float:
        return value * self.operand