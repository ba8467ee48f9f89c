"""Converter mapping register values to MQTT values and back."""

from __future__ import annotations

import enum
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from regconv.core import ConversionError, DataConverter, ModbusRegisters, MqttValue
from regconv.integers import Int16Converter

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class Mapping:
    """One register value and the MQTT value it stands for."""

    register_value: int
    mqtt_value: Union[int, str]

    @property
    def is_int(self) -> bool:
        return isinstance(self.mqtt_value, int)


class _State(enum.Enum):
    SCAN = 0
    KEY = 1
    ESCAPE = 2
    VALUE = 3


class _ValueType(enum.Enum):
    NONE = 0
    INT = 1
    STRING = 2


class MapParser:
    """Parses map specifications such as '{1:"on", 0:"off"}'."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._states = [_State.SCAN]
        self._key = ""
        self._value = ""
        self._value_type = _ValueType.NONE
        self._mappings: list[Mapping] = []

    @property
    def _top(self) -> _State:
        return self._states[-1]

    def _pop(self) -> None:
        if len(self._states) > 1:
            self._states.pop()

    def parse(self, data: str) -> list[Mapping]:
        """Return the mappings described by data."""
        self._reset()
        for char in data:
            if self._top is _State.ESCAPE:
                self._add_escaped(char)
                continue
            handler = self._HANDLERS.get(char, MapParser._on_other)
            handler(self, char)
        return list(self._mappings)

    def _on_open_brace(self, char: str) -> None:
        if self._top is _State.KEY:
            raise ConversionError("{ in map key is not allowed, must be an uint16_value")
        if self._top is _State.VALUE:
            self._value += char

    def _on_close_brace(self, char: str) -> None:
        state = self._top
        if state is _State.SCAN:
            if self._value_type is _ValueType.INT:
                self._add_mapping()
        elif state is _State.KEY:
            raise ConversionError("} in map key is not allowed, must be an uint16_value")
        elif self._value_type is _ValueType.INT:
            self._add_mapping()
        else:
            raise ConversionError("Internal parser error: unknown value type on closing brace")

    def _on_backslash(self, char: str) -> None:
        if self._top is _State.VALUE:
            self._states.append(_State.ESCAPE)
        else:
            raise ConversionError("\\ in map key is not allowed, must be an uint16_value")

    def _on_quote(self, char: str) -> None:
        state = self._top
        if state is _State.SCAN:
            if not self._key:
                self._states.append(_State.KEY)
            else:
                self._states.append(_State.VALUE)
                self._value_type = _ValueType.STRING
        elif state is _State.KEY:
            raise ConversionError('" in map key is not allowed, must be an uint16_value')
        elif self._value_type is _ValueType.NONE:
            self._value_type = _ValueType.STRING
        elif self._value_type is _ValueType.STRING:
            self._add_mapping()
        else:
            raise ConversionError('" in int value is not allowed')

    def _on_space(self, char: str) -> None:
        state = self._top
        if state is _State.KEY:
            self._pop()
        elif state is _State.VALUE:
            if self._value_type is _ValueType.INT:
                self._pop()
            elif self._value_type is _ValueType.STRING:
                self._value += char

    def _on_colon(self, char: str) -> None:
        state = self._top
        if state is _State.SCAN:
            if not self._key:
                raise ConversionError(f"Key {len(self._mappings) + 1} is empty")
        elif state is _State.KEY:
            self._pop()
        else:
            self._value += char

    def _on_comma(self, char: str) -> None:
        state = self._top
        if state is _State.KEY:
            raise ConversionError(", in map key is not allowed, must be an uint16_value")
        if state is _State.VALUE:
            if self._value_type is _ValueType.INT:
                self._add_mapping()
            else:
                self._value += char

    def _on_other(self, char: str) -> None:
        state = self._top
        if state is _State.SCAN:
            if not self._key:
                if not char.isdigit():
                    raise ConversionError('string key should start with "')
                self._states.append(_State.KEY)
                self._key += char
            else:
                if self._value_type is _ValueType.NONE and char.isdigit():
                    self._value_type = _ValueType.INT
                self._states.append(_State.VALUE)
                self._value += char
        elif state is _State.KEY:
            if not char.isdigit() and char != "x":
                raise ConversionError(f"Invalid char {char!r} in int key")
            self._key += char
        else:
            if self._value_type is _ValueType.NONE and char.isdigit():
                self._value_type = _ValueType.INT
            self._value += char

    _HANDLERS = {
        "{": _on_open_brace,
        "}": _on_close_brace,
        "\\": _on_backslash,
        '"': _on_quote,
        " ": _on_space,
        ":": _on_colon,
        ",": _on_comma,
    }

    def _add_escaped(self, char: str) -> None:
        self._pop()
        if self._top is _State.KEY:
            self._key += char
        elif self._top is _State.VALUE:
            self._value += char
        else:
            raise ConversionError(
                f"Internal parser error: invalid state {self._top.value} "
                f"when adding escaped char {char}"
            )

    def _add_mapping(self) -> None:
        if not self._key:
            raise ConversionError("Internal parser error: register value cannot be empty")
        register_value = MqttValue.from_string(self._key).to_int()
        if not 0 <= register_value <= 0xFFFF:
            raise ConversionError(f"Register value {self._key} out of range")
        if any(m.register_value == register_value for m in self._mappings):
            raise ConversionError(f"Register value {self._key} already mapped")

        if self._value_type is _ValueType.INT:
            mapping = Mapping(register_value, _atoi(self._value))
        else:
            mapping = Mapping(register_value, self._value)

        if any(
            m.is_int == mapping.is_int and m.mqtt_value == mapping.mqtt_value
            for m in self._mappings
        ):
            raise ConversionError(f"Mqtt value {self._value} already mapped")

        self._mappings.append(mapping)
        self._value_type = _ValueType.NONE
        self._key = ""
        self._value = ""
        self._pop()


class MapConverter(DataConverter):
    """Translates single register values through a configured map.

    Values missing from the map pass through unchanged.
    """

    def __init__(self) -> None:
        self._mappings: list[Mapping] = []

    @property
    def mappings(self) -> list[Mapping]:
        return list(self._mappings)

    def find_register_value(self, value: int) -> Optional[Mapping]:
        return next((m for m in self._mappings if m.register_value == value), None)

    def find_mqtt_value(self, value: MqttValue) -> Optional[Mapping]:
        for mapping in self._mappings:
            if mapping.is_int:
                try:
                    number = value.to_int()
                except ConversionError:
                    continue
                if mapping.mqtt_value == number:
                    return mapping
            elif mapping.mqtt_value == value.to_string():
                return mapping
        return None

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        if len(data) != 1:
            raise ConversionError("Cannot map multiple registers")
        mapping = self.find_register_value(data[0])
        if mapping is None:
            return MqttValue.from_int(data[0])
        if mapping.is_int:
            return MqttValue.from_int(mapping.mqtt_value)
        return MqttValue.from_string(mapping.mqtt_value)

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        if register_count != 1:
            raise ConversionError("Cannot map multiple registers")
        mapping = self.find_mqtt_value(value)
        if mapping is None:
            return Int16Converter().to_modbus(value, register_count)
        return ModbusRegisters([mapping.register_value])

    def set_args(self, args: Sequence[str]) -> None:
        if len(args) != 1:
            raise ConversionError("This converter accepts a single argument only")
        self._mappings = MapParser().parse(args[0])