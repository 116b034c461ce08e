# SPDX-License-Identifier: BSD-2-Clause
"""
Fixed-width unsigned bit vectors.

``Bits[W]`` is the type of ``W`` bit wide unsigned values. Each width is a
distinct class, created once and cached, so the width of a value can be read
from its type without an instance::

    >>> Bits[8].bit_width()
    8
    >>> Bits[8](0xAC) >> 2
    Bits[8](43)

Values of different widths never combine implicitly. Operators between two
vectors require equal widths and raise :class:`WidthMismatchError`
otherwise; plain integers are converted to the width of the vector they are
combined with, and raise :class:`RangeError` if they do not fit. Widths only
change through the explicit combinators in this module, each of which takes
the resulting width as an argument and checks it.

Arithmetic wraps modulo ``2**W``, as it does in hardware.
"""

from typing import ClassVar, Dict, Optional, Tuple, Union

from amaranth.hdl import Const, unsigned

from .errors import RangeError, ShapeError, WidthMismatchError
from .representable import BitSymbol, Representable

__all__ = ["Bits", "from_magnitude", "concat", "zero_extend", "truncate"]


class Bits(Representable):
    """
    An unsigned magnitude of fixed width.

    Use ``Bits[W]`` to obtain the class for width ``W``; the bare class is
    unsized and cannot be instantiated.
    """
    __slots__ = ("_value",)

    width: ClassVar[Optional[int]] = None

    _family: ClassVar[Dict[int, type]] = {}

    def __class_getitem__(cls, width: int):
        if cls is not Bits:
            raise TypeError(f"{cls.__qualname__} is already sized")
        if not isinstance(width, int) or isinstance(width, bool) or width < 1:
            raise ShapeError(f"Width must be a positive integer, not {width!r}")
        if width not in Bits._family:
            Bits._family[width] = type(f"Bits{width}", (Bits,), {
                "__slots__": (),
                "__module__": cls.__module__,
                "__qualname__": f"Bits[{width}]",
                "width": width,
            })
        return Bits._family[width]

    def __init__(self, value: int = 0):
        width = type(self).width
        if width is None:
            raise ShapeError("Bits must be sized before use, e.g. Bits[8]")
        if not isinstance(value, int):
            raise TypeError(f"Bits[{width}] is constructed from an int, not {value!r}")
        if not 0 <= value < (1 << width):
            raise RangeError(f"{value} does not fit in {width} bits")
        self._value = int(value)

    @property
    def value(self) -> int:
        return self._value

    @classmethod
    def bit_width(cls) -> int:
        if cls.width is None:
            raise ShapeError("Bits must be sized before use, e.g. Bits[8]")
        return cls.width

    @classmethod
    def reset(cls) -> 'Bits':
        return cls(0)

    @classmethod
    def ones(cls) -> 'Bits':
        return cls((1 << cls.bit_width()) - 1)

    @classmethod
    def shape(cls):
        """The equivalent Amaranth shape."""
        return unsigned(cls.bit_width())

    def as_const(self) -> Const:
        return Const(self._value, unsigned(self.width))

    def bits(self) -> Tuple[BitSymbol, ...]:
        return tuple(BitSymbol.ONE if (self._value >> n) & 1 else BitSymbol.ZERO
                     for n in reversed(range(self.width)))

    def _coerce(self, other) -> Optional[int]:
        if isinstance(other, Bits):
            if other.width != self.width:
                raise WidthMismatchError(
                    f"Cannot combine {type(self).__qualname__} with {type(other).__qualname__}")
            return other._value
        if isinstance(other, int):
            return type(self)(other)._value
        return None

    def _mask(self, value: int) -> 'Bits':
        return type(self)(value & ((1 << self.width) - 1))

    def __and__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value & value)

    __rand__ = __and__

    def __or__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value | value)

    __ror__ = __or__

    def __xor__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return type(self)(self._value ^ value)

    __rxor__ = __xor__

    def __invert__(self):
        return self._mask(~self._value)

    def __add__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._mask(self._value + value)

    __radd__ = __add__

    def __sub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._mask(self._value - value)

    def __rsub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._mask(value - self._value)

    def __neg__(self):
        return self._mask(-self._value)

    @staticmethod
    def _shift_amount(amount) -> Optional[int]:
        # the amount is a count, so its width is unrelated to the shifted value
        if isinstance(amount, Bits):
            return amount._value
        if isinstance(amount, int) and not isinstance(amount, bool):
            if amount < 0:
                raise RangeError(f"Cannot shift by a negative amount ({amount})")
            return amount
        return None

    def __lshift__(self, amount):
        count = self._shift_amount(amount)
        if count is None:
            return NotImplemented
        if count >= self.width:
            return type(self)(0)
        return self._mask(self._value << count)

    def __rshift__(self, amount):
        count = self._shift_amount(amount)
        if count is None:
            return NotImplemented
        if count >= self.width:
            return type(self)(0)
        return type(self)(self._value >> count)

    def __eq__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value == value

    def __ne__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value != value

    def __lt__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value < value

    def __le__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value <= value

    def __gt__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value > value

    def __ge__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value >= value

    def __hash__(self):
        return hash(self._value)

    def __bool__(self):
        return self._value != 0

    def __int__(self):
        return self._value

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, slice):
            if key.step is not None:
                raise ShapeError("Bits slices cannot have a step")
            start, stop, _ = key.indices(self.width)
            if stop <= start:
                raise RangeError(f"Empty slice [{key.start}:{key.stop}] of {type(self).__qualname__}")
            return Bits[stop - start]((self._value >> start) & ((1 << (stop - start)) - 1))
        if not isinstance(key, int):
            raise TypeError(f"Bits indices must be int or slice, not {key!r}")
        if not -self.width <= key < self.width:
            raise RangeError(f"Bit {key} is out of range for {type(self).__qualname__}")
        return bool((self._value >> (key % self.width)) & 1)

    def any(self) -> bool:
        return self._value != 0

    def all(self) -> bool:
        return self._value == (1 << self.width) - 1

    def xor(self) -> bool:
        return bin(self._value).count("1") % 2 == 1

    def __format__(self, format_spec):
        return format(self._value, format_spec)

    def __repr__(self):
        return f"Bits[{self.width}]({self._value})"


def from_magnitude(width: int, value: int) -> Bits:
    """
    Construct a ``width`` bit vector holding ``value``.

    Raises:
        RangeError: If ``value`` is not in ``0 <= value < 2**width``.
    """
    return Bits[width](value)


def _width_and_value(value) -> Tuple[int, int]:
    if isinstance(value, bool):
        return 1, int(value)
    if isinstance(value, Bits) and value.width is not None:
        return value.width, value.value
    raise ShapeError(f"Cannot concatenate {value!r}, only Bits and bool values")


def concat(*values: Union[Bits, bool], width: int) -> Bits:
    """
    Concatenate ``values``, the first one ending up in the most significant bits.

    ``width`` is the declared width of the result and must equal the sum of
    the widths of ``values``.

    Raises:
        WidthMismatchError: If the widths do not add up to ``width``, or if
            there is nothing to concatenate.
    """
    if not values:
        raise WidthMismatchError(f"Cannot concatenate zero values into {width} bits")
    result = 0
    total = 0
    for value in values:
        part_width, part = _width_and_value(value)
        result = (result << part_width) | part
        total += part_width
    if total != width:
        raise WidthMismatchError(f"Concatenation is {total} bits wide, but was declared as {width} bits")
    return Bits[width](result)


def zero_extend(value: Bits, width: int) -> Bits:
    """
    Widen ``value`` to ``width`` bits, filling the new high bits with zeros.

    Raises:
        WidthMismatchError: If ``width`` is narrower than ``value``.
    """
    if width < value.width:
        raise WidthMismatchError(f"Cannot extend {type(value).__qualname__} to {width} bits")
    return Bits[width](value.value)


def truncate(value: Bits, width: int) -> Bits:
    """
    Narrow ``value`` to its low ``width`` bits.

    Raises:
        WidthMismatchError: If ``width`` is wider than ``value``.
    """
    if width > value.width:
        raise WidthMismatchError(f"Cannot truncate {type(value).__qualname__} to {width} bits")
    return Bits[width](value.value & ((1 << width) - 1))
