"""Converter for C-style strings stored in 16-bit registers."""

from __future__ import annotations

import struct

from regconv.core import DataConverter, ModbusRegisters, MqttValue


class StringConverter(DataConverter):
    """Bytes laid out one after another in registers, high byte first.

    Reading stops at the first zero byte. Writing copies every payload byte
    that fits and fills the remaining space with zero bytes.
    """

    def to_mqtt(self, data: ModbusRegisters) -> MqttValue:
        raw = struct.pack(f">{len(data)}H", *data)
        end = raw.find(b"\x00")
        return MqttValue.from_bytes(raw if end < 0 else raw[:end])

    def to_modbus(self, value: MqttValue, register_count: int) -> ModbusRegisters:
        count = max(register_count, 0)
        size = 2 * count
        payload = value.to_bytes()[:size].ljust(size, b"\x00")
        return ModbusRegisters(struct.unpack(f">{count}H", payload))