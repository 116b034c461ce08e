# SPDX-License-Identifier: BSD-2-Clause
"""
The Representable contract.

A type is representable when it has a fixed bit width that can be queried
from the type alone, converts its values to an ordered sequence of bit
symbols, and has a canonical reset value. Only representable types may be
used for component ports and state.

Representable types are:

* ``bool``, one bit wide;
* subclasses of :class:`Representable`, such as ``Bits[8]``, ``Array[T, N]``
  and :class:`TaggedUnion` subclasses;
* ``tuple[A, B, ...]`` where every element type is representable;
* dataclasses whose fields are all annotated with representable types.

Products (tuples, arrays and dataclasses) place their first member in the
most significant bits.
"""

import abc
import dataclasses
import logging
import typing
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Tuple

from .errors import ShapeError, WidthMismatchError

__all__ = [
    "BitSymbol", "Representable", "Array", "TaggedUnion",
    "is_representable", "width_of", "reset_of", "to_bits", "conforms", "bits_to_str",
]

logger = logging.getLogger(__name__)


class BitSymbol(Enum):
    """
    A single bit of an encoded value
    """
    #: Logic low
    ZERO = "0"
    #: Logic high
    ONE = "1"
    #: Unknown or don't-care
    UNKNOWN = "x"

    def __str__(self):
        return f'{self.value}'


class Representable(abc.ABC):
    """
    Base class for value types that may cross into circuit state or ports.
    """
    __slots__ = ()

    @classmethod
    @abc.abstractmethod
    def bit_width(cls) -> int:
        """Width in bits of every value of this type."""

    @classmethod
    @abc.abstractmethod
    def reset(cls) -> 'Representable':
        """The canonical reset value of this type."""

    @abc.abstractmethod
    def bits(self) -> Tuple[BitSymbol, ...]:
        """The bits of this value, most significant first."""


def _type_name(tp) -> str:
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__qualname__
    return repr(tp)


def _tuple_args(tp):
    if typing.get_origin(tp) is not tuple:
        return None
    args = typing.get_args(tp)
    if Ellipsis in args:
        raise ShapeError(f"{tp!r} has no fixed length, use Array[T, N] instead")
    return args


def _dataclass_fields(tp):
    try:
        hints = typing.get_type_hints(tp)
    except NameError as e:
        raise ShapeError(f"Unable to resolve field types of {_type_name(tp)}: {e}") from e
    return [(f.name, hints[f.name]) for f in dataclasses.fields(tp)]


def is_representable(tp) -> bool:
    """Return whether ``tp`` is a representable type."""
    try:
        width_of(tp)
    except ShapeError:
        return False
    return True


def width_of(tp) -> int:
    """
    Return the bit width of the representable type ``tp``.

    Raises:
        ShapeError: If ``tp`` is not representable.
    """
    if tp is bool:
        return 1
    if isinstance(tp, type) and issubclass(tp, Representable):
        return tp.bit_width()
    args = _tuple_args(tp)
    if args is not None:
        return sum(width_of(arg) for arg in args)
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return sum(width_of(ftype) for _, ftype in _dataclass_fields(tp))
    raise ShapeError(f"{_type_name(tp)} is not a representable type")


def reset_of(tp):
    """
    Return the canonical reset value of the representable type ``tp``.

    Raises:
        ShapeError: If ``tp`` is not representable.
    """
    if tp is bool:
        return False
    if isinstance(tp, type) and issubclass(tp, Representable):
        return tp.reset()
    args = _tuple_args(tp)
    if args is not None:
        return tuple(reset_of(arg) for arg in args)
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return tp(**{name: reset_of(ftype) for name, ftype in _dataclass_fields(tp)})
    raise ShapeError(f"{_type_name(tp)} is not a representable type")


def to_bits(value) -> Tuple[BitSymbol, ...]:
    """
    Encode ``value`` as bit symbols, most significant first.

    Raises:
        ShapeError: If ``value`` is not an instance of a representable type.
    """
    if isinstance(value, bool):
        return (BitSymbol.ONE if value else BitSymbol.ZERO,)
    if isinstance(value, Representable):
        return value.bits()
    if isinstance(value, tuple):
        return tuple(bit for item in value for bit in to_bits(item))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return tuple(bit for f in dataclasses.fields(value) for bit in to_bits(getattr(value, f.name)))
    raise ShapeError(f"{value!r} is not a value of a representable type")


def bits_to_str(bits: Iterable[BitSymbol]) -> str:
    return "".join(str(bit) for bit in bits)


def conforms(tp, value) -> bool:
    """Return whether ``value`` is a well-typed value of the representable type ``tp``."""
    if tp is bool:
        return isinstance(value, bool)
    if isinstance(tp, type) and issubclass(tp, Representable):
        return isinstance(value, tp)
    args = _tuple_args(tp)
    if args is not None:
        return (isinstance(value, tuple) and len(value) == len(args) and
                all(conforms(arg, item) for arg, item in zip(args, value)))
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return isinstance(value, tp) and \
            all(conforms(ftype, getattr(value, name)) for name, ftype in _dataclass_fields(tp))
    return False


class Array(Representable):
    """
    A fixed-size sequence of representable elements, written ``Array[T, N]``.

    Arrays are immutable; use :meth:`replace` to derive an updated array.
    """
    __slots__ = ("_items",)

    element: ClassVar[Any] = None
    length: ClassVar[int] = 0

    _family: ClassVar[Dict[Tuple[Any, int], type]] = {}

    def __class_getitem__(cls, params):
        if cls is not Array:
            raise TypeError(f"{cls.__qualname__} is already sized")
        if not isinstance(params, tuple) or len(params) != 2:
            raise ShapeError("Array must be written as Array[T, N]")
        element, length = params
        if not isinstance(length, int) or isinstance(length, bool) or length < 1:
            raise ShapeError(f"Array length must be a positive integer, not {length!r}")
        width_of(element)

        key = (element, length)
        if key not in Array._family:
            name = f"Array[{_type_name(element)}, {length}]"
            Array._family[key] = type(name, (Array,), {
                "__slots__": (),
                "__module__": cls.__module__,
                "__qualname__": name,
                "element": element,
                "length": length,
            })
        return Array._family[key]

    def __init__(self, items: Iterable = ()):
        cls = type(self)
        if cls.element is None:
            raise ShapeError("Array must be sized before use, e.g. Array[bool, 4]")
        items = tuple(items)
        if len(items) != cls.length:
            raise WidthMismatchError(f"{cls.__qualname__} needs {cls.length} elements, got {len(items)}")
        for index, item in enumerate(items):
            if not conforms(cls.element, item):
                raise WidthMismatchError(
                    f"Element {index} of {cls.__qualname__} is {item!r}, "
                    f"not a {_type_name(cls.element)}")
        self._items = items

    @classmethod
    def bit_width(cls) -> int:
        if cls.element is None:
            raise ShapeError("Array must be sized before use, e.g. Array[bool, 4]")
        return width_of(cls.element) * cls.length

    @classmethod
    def reset(cls) -> 'Array':
        return cls(reset_of(cls.element) for _ in range(cls.length))

    def bits(self) -> Tuple[BitSymbol, ...]:
        return tuple(bit for item in self._items for bit in to_bits(item))

    def replace(self, index: int, value) -> 'Array':
        items = list(self._items)
        items[index] = value
        return type(self)(items)

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __eq__(self, other):
        if not isinstance(other, Array):
            return NotImplemented
        if type(other) is not type(self):
            raise WidthMismatchError(f"Cannot compare {type(self).__qualname__} with {type(other).__qualname__}")
        return self._items == other._items

    def __hash__(self):
        return hash((type(self), self._items))

    def __repr__(self):
        return f"{type(self).__qualname__}({list(self._items)!r})"


class TaggedUnion(Representable):
    """
    A value that is exactly one of several named variants, each carrying an
    optional representable payload.

    Subclasses declare their variants in declaration order; the first
    variant is the reset value::

        class Command(TaggedUnion):
            variants = {"Idle": None, "Load": Bits[8], "Shift": bool}

        Command("Load", Bits[8](0x3c))

    The encoding is the discriminant (variant index) followed by the payload
    in the low bits. Payload bits not used by the active variant are unknown.
    """
    __slots__ = ("_tag", "_payload")

    variants: ClassVar[Dict[str, Any]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.variants:
            raise ShapeError(f"{cls.__qualname__} must declare at least one variant")
        for tag, payload in cls.variants.items():
            if payload is not None and not is_representable(payload):
                raise ShapeError(
                    f"Variant {tag!r} of {cls.__qualname__} has non-representable payload "
                    f"{_type_name(payload)}")
        logger.debug(f"Registered tagged union {cls.__qualname__} with variants {list(cls.variants)}")

    def __init__(self, tag: str, payload=None):
        cls = type(self)
        if tag not in cls.variants:
            raise ShapeError(f"{tag!r} is not a variant of {cls.__qualname__}")
        payload_type = cls.variants[tag]
        if payload_type is None:
            if payload is not None:
                raise WidthMismatchError(f"Variant {tag!r} of {cls.__qualname__} carries no payload")
        elif not conforms(payload_type, payload):
            raise WidthMismatchError(
                f"Variant {tag!r} of {cls.__qualname__} needs a {_type_name(payload_type)} payload, "
                f"got {payload!r}")
        self._tag = tag
        self._payload = payload

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def payload(self):
        return self._payload

    @classmethod
    def discriminant_width(cls) -> int:
        return (len(cls.variants) - 1).bit_length()

    @classmethod
    def payload_width(cls) -> int:
        return max((width_of(p) for p in cls.variants.values() if p is not None), default=0)

    @classmethod
    def bit_width(cls) -> int:
        return cls.discriminant_width() + cls.payload_width()

    @classmethod
    def reset(cls) -> 'TaggedUnion':
        tag, payload_type = next(iter(cls.variants.items()))
        return cls(tag, None if payload_type is None else reset_of(payload_type))

    def bits(self) -> Tuple[BitSymbol, ...]:
        cls = type(self)
        index = list(cls.variants).index(self._tag)
        width = cls.discriminant_width()
        discriminant = tuple(BitSymbol.ONE if (index >> n) & 1 else BitSymbol.ZERO
                             for n in reversed(range(width)))
        payload = () if self._payload is None else to_bits(self._payload)
        padding = (BitSymbol.UNKNOWN,) * (cls.payload_width() - len(payload))
        return discriminant + padding + payload

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._tag == other._tag and self._payload == other._payload

    def __hash__(self):
        return hash((type(self), self._tag, self._payload))

    def __repr__(self):
        if self._payload is None:
            return f"{type(self).__qualname__}({self._tag!r})"
        return f"{type(self).__qualname__}({self._tag!r}, {self._payload!r})"
