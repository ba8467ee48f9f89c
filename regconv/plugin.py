"""The standard converter set, looked up by name."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

from regconv.core import DataConverter
from regconv.integers import (
    BitConverter,
    BitmaskConverter,
    Int8Converter,
    Int16Converter,
    Int32Converter,
    UInt8Converter,
    UInt32Converter,
)
from regconv.mapping import MapConverter
from regconv.numeric import DivideConverter, FloatConverter, MultiplyConverter, ScaleConverter
from regconv.text import StringConverter

_FACTORIES: dict[str, Callable[[], DataConverter]] = {
    "divide": DivideConverter,
    "multiply": MultiplyConverter,
    "int32": Int32Converter,
    "bitmask": BitmaskConverter,
    "scale": ScaleConverter,
    "string": StringConverter,
    "int16": Int16Converter,
    "uint32": UInt32Converter,
    "float32": FloatConverter,
    "int8": Int8Converter,
    "uint8": UInt8Converter,
    "bit": BitConverter,
    "map": MapConverter,
}


class StdConvPlugin:
    """Creates converters of the standard set."""

    name = "std"

    def get_converter(self, name: str) -> Optional[DataConverter]:
        """Return a new converter called name, or None if there is none."""
        factory = _FACTORIES.get(name)
        return factory() if factory is not None else None


converter_plugin = StdConvPlugin()


def get_converter(name: str) -> Optional[DataConverter]:
    """Return a new standard converter called name, or None."""
    return converter_plugin.get_converter(name)