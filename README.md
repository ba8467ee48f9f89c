# regconv

Converters that turn Modbus register values into MQTT payload values and back.

A converter takes a `ModbusRegisters` list of 16-bit register values and
returns an `MqttValue`. Converters that can write also go the other way, from
an `MqttValue` to a given number of registers. Arguments are passed as a
sequence of strings, the way they would appear in a configuration file.

## Converters

`regconv.plugin.get_converter(name)` returns a new converter for a name, or
`None` if the name is unknown. The same set is available through
`StdConvPlugin().get_converter(name)`; the plugin's `name` is `std`.

| name       | class                | reads | writes | arguments |
|------------|----------------------|-------|--------|-----------|
| `divide`   | `DivideConverter`    | yes   | yes    | divisor, precision, `low_first` |
| `multiply` | `MultiplyConverter`  | yes   | yes    | factor, precision, `low_first` |
| `int32`    | `Int32Converter`     | yes   | yes    | `low_first` |
| `uint32`   | `UInt32Converter`    | yes   | yes    | `low_first` |
| `int16`    | `Int16Converter`     | yes   | yes    | none |
| `int8`     | `Int8Converter`      | yes   | no     | `first` |
| `uint8`    | `UInt8Converter`     | yes   | no     | `first` |
| `float32`  | `FloatConverter`     | yes   | yes    | precision, `low_first`, `swap_bytes` |
| `bitmask`  | `BitmaskConverter`   | yes   | no     | hexadecimal mask |
| `bit`      | `BitConverter`       | yes   | no     | bit number from 1 to 16 |
| `scale`    | `ScaleConverter`     | yes   | no     | source from, source to, target from, target to, precision |
| `string`   | `StringConverter`    | yes   | yes    | none |
| `map`      | `MapConverter`       | yes   | yes    | a mapping such as `{1:"on", 0:"off"}` |

The classes live in `regconv.integers`, `regconv.numeric`, `regconv.text` and
`regconv.mapping`.

Some details:

- `divide` prints six fractional digits unless a precision is given;
  `multiply` prints a whole number unless a precision is given.
- `divide` and `multiply` read a single register as an unsigned value and two
  registers as a signed 32-bit value, high register first unless `low_first`.
- `int8` and `uint8` read the low byte, or the high byte with `first`.
- `string` reads bytes high byte first and stops at the first zero byte; when
  writing it pads with zero bytes and drops what does not fit.
- `map` passes values missing from the map through unchanged; when writing an
  unmapped value it stores it as a signed 16-bit integer.

## Values

`MqttValue` is built with `from_int`, `from_double(value, precision)`,
`from_string` or `from_bytes`, and read with `to_int`, `to_double`,
`to_string` and `to_bytes`. A double with no precision is printed with six
fractional digits.

`ModbusRegisters` holds register values masked to 16 bits and supports
`append`, `prepend`, `len`, indexing and iteration.

`regconv.core` also has the helpers `get_arg`, `get_int_arg`,
`get_double_arg`, `get_hex16_arg`, `registers_to_int32`,
`int32_to_registers`, `swap_byte_order` and `registers_to_float`.

## Usage

```python
from regconv.plugin import get_converter
from regconv.core import ModbusRegisters, MqttValue

conv = get_converter("divide")
conv.set_args(["1000", "3"])
print(conv.to_mqtt(ModbusRegisters([32456])).to_string())   # 32.456

conv = get_converter("uint32")
print(conv.to_mqtt(ModbusRegisters([0x9234, 0xABCD])).to_string())  # 2452925389

conv = get_converter("map")
conv.set_args(['{24:"twenty four"}'])
print(conv.to_mqtt(ModbusRegisters([24])).to_string())  # twenty four

regs = get_converter("int32").to_modbus(MqttValue.from_int(131073), 2)
print(regs.values)  # [2, 1]
```

A bad argument, or a value that cannot be converted, raises
`regconv.core.ConversionError`, a subclass of `ValueError`.

## What this package does not do

It only converts values. It does not talk to Modbus devices or to an MQTT
broker, read configuration files, poll registers or run as a service, and it
has no command-line program. Converter sets other than the standard one are
not included.