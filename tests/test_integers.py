import pytest

from regconv.core import ConversionError, ModbusRegisters, MqttValue
from regconv.integers import (
    BitConverter,
    BitmaskConverter,
    Int8Converter,
    Int16Converter,
    Int32Converter,
    UInt8Converter,
    UInt32Converter,
)


def _conv(cls, *args):
    converter = cls()
    converter.set_args(list(args))
    return converter


def test_uint32_reads_high_first():
    value = UInt32Converter().to_mqtt(ModbusRegisters([0x9234, 0xABCD]))
    assert value.to_string() == "2452925389"


def test_uint32_reads_low_first():
    value = _conv(UInt32Converter, "low_first").to_mqtt(ModbusRegisters([0xABCD, 0x9234]))
    assert value.to_int() == 2452925389


def test_uint32_single_register():
    assert UInt32Converter().to_mqtt(ModbusRegisters([0x9234])).to_int() == 0x9234


def test_uint32_writes_two_registers():
    regs = UInt32Converter().to_modbus(MqttValue.from_int(2452925389), 2)
    assert regs.values == [0x9234, 0xABCD]


def test_uint32_writes_low_first():
    regs = _conv(UInt32Converter, "low_first").to_modbus(MqttValue.from_int(2452925389), 2)
    assert regs.values == [0xABCD, 0x9234]


def test_int32_reads_registers():
    conv = Int32Converter()
    assert conv.to_mqtt(ModbusRegisters([1, 0])).to_string() == "65536"
    assert conv.to_mqtt(ModbusRegisters([1, 7])).to_int() == 65543
    assert conv.to_mqtt(ModbusRegisters([2, 1])).to_int() == 131073


def test_int32_low_first():
    conv = _conv(Int32Converter, "low_first")
    assert conv.to_mqtt(ModbusRegisters([1, 2])).to_int() == 131073


def test_int32_writes_registers():
    regs = Int32Converter().to_modbus(MqttValue.from_string("131073"), 2)
    assert regs.values == [2, 1]


@pytest.mark.parametrize("number", [-5, 0, 65543, -65536])
def test_int32_round_trip(number):
    conv = Int32Converter()
    regs = conv.to_modbus(MqttValue.from_int(number), 2)
    assert conv.to_mqtt(regs).to_int() == number


def test_int16_reads_signed():
    assert Int16Converter().to_mqtt(ModbusRegisters([0xFFFF])).to_int() == -1


def test_int16_writes_repeated_value():
    regs = Int16Converter().to_modbus(MqttValue.from_int(-1), 2)
    assert regs.values == [0xFFFF, 0xFFFF]


def test_int16_out_of_range():
    with pytest.raises(ConversionError, match="out of range"):
        Int16Converter().to_modbus(MqttValue.from_int(40000), 1)
    with pytest.raises(ConversionError):
        Int16Converter.to_int16(MqttValue.from_int(-40000))


def test_int16_rejects_args():
    with pytest.raises(ConversionError):
        Int16Converter().set_args(["x"])


def test_int8_low_and_high_byte():
    regs = ModbusRegisters([0x80FF])
    assert Int8Converter().to_mqtt(regs).to_int() == -1
    assert _conv(Int8Converter, "first").to_mqtt(regs).to_int() == -128


def test_uint8_low_and_high_byte():
    regs = ModbusRegisters([0x80FF])
    assert UInt8Converter().to_mqtt(regs).to_int() == 255
    assert _conv(UInt8Converter, "first").to_mqtt(regs).to_int() == 128


def test_bitmask():
    conv = _conv(BitmaskConverter, "ff")
    assert conv.to_mqtt(ModbusRegisters([0x1234])).to_int() == 0x34


def test_bitmask_default_keeps_value():
    assert BitmaskConverter().to_mqtt(ModbusRegisters([0x1234])).to_int() == 0x1234


def test_bit_converter():
    regs = ModbusRegisters([0x2])
    assert _conv(BitConverter, "1").to_mqtt(regs).to_string() == "0"
    assert _conv(BitConverter, "2").to_mqtt(regs).to_string() == "1"


def test_bit_converter_zero_register():
    regs = ModbusRegisters([0x0])
    assert _conv(BitConverter, "1").to_mqtt(regs).to_string() == "0"
    assert _conv(BitConverter, "2").to_mqtt(regs).to_string() == "0"


def test_bit_converter_invalid_number():
    converter = BitConverter()
    with pytest.raises(ConversionError):
        converter.set_args(["17"])