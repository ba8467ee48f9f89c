import pytest

from regconv.core import ModbusRegisters, MqttValue
from regconv.integers import BitConverter, Int32Converter, UInt32Converter
from regconv.mapping import MapConverter
from regconv.numeric import DivideConverter, FloatConverter, MultiplyConverter
from regconv.plugin import StdConvPlugin, get_converter
from regconv.text import StringConverter


def test_plugin_name():
    assert StdConvPlugin().name == "std"


@pytest.mark.parametrize(
    "name, cls, args, registers, expected",
    [
        ("divide", DivideConverter, ["2", "0"], [8], "4"),
        ("multiply", MultiplyConverter, ["10"], [8], "80"),
        ("int32", Int32Converter, [], [1, 0], "65536"),
        ("uint32", UInt32Converter, [], [0x9234, 0xABCD], "2452925389"),
        ("float32", FloatConverter, ["2"], [0x3F80, 0], "1.00"),
        ("bit", BitConverter, ["2"], [0x2], "1"),
        ("map", MapConverter, ['{24:"twenty four"}'], [24], "twenty four"),
    ],
)
def test_known_names(name, cls, args, registers, expected):
    converter = StdConvPlugin().get_converter(name)
    assert type(converter) is cls
    converter.set_args(args)
    assert converter.to_mqtt(ModbusRegisters(registers)).to_string() == expected


def test_string_name_round_trip():
    converter = StdConvPlugin().get_converter("string")
    assert type(converter) is StringConverter
    regs = converter.to_modbus(MqttValue.from_string("ab"), 2)
    assert converter.to_mqtt(regs).to_string() == "ab"


def test_unknown_name_gives_none():
    assert get_converter("nonexistent") is None


def test_each_call_gives_new_instance():
    first = get_converter("int32")
    second = get_converter("int32")
    assert first is not second
    assert type(first) is type(second)


def test_divide_write_converted_value():
    conv = get_converter("divide")
    conv.set_args(["2", "0"])
    assert conv.to_modbus(MqttValue.from_string("32"), 1) == ModbusRegisters([16])


def test_int32_reads_two_registers():
    conv = get_converter("int32")
    conv.set_args([])
    assert conv.to_mqtt(ModbusRegisters([1, 0])).to_string() == "65536"


def test_bit_converter_from_plugin():
    conv = get_converter("bit")
    conv.set_args(["2"])
    assert conv.to_mqtt(ModbusRegisters([0x2])).to_int() == 1