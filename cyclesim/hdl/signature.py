# SPDX-License-Identifier: BSD-2-Clause
"""
Width metadata for hardware description generators.

A component's ports are described as an Amaranth :class:`wiring.Signature`
with a clock, a reset, and flat input and output buses sized from the
declared types. The signature carries an annotation with the widths and
reset values of the component, so that downstream generators can consume
it through Amaranth's metadata without depending on this package.
"""

from typing import TYPE_CHECKING

import pydantic
from amaranth.lib import meta, wiring
from amaranth.lib.wiring import In, Out
from typing_extensions import TypedDict

from .representable import bits_to_str, reset_of, to_bits, width_of

if TYPE_CHECKING:
    from .synchronous import Synchronous

__all__ = ["PortDescription", "ComponentDescription", "SynchronousSignature",
           "COMPONENT_SCHEMA", "describe", "component_signature"]


def _cyclesim_schema_uri(name: str, version: int) -> str:
    return f"https://schemas.cyclesim.dev/{version}/{name}"


COMPONENT_SCHEMA = _cyclesim_schema_uri("synchronous-component", 0)


class PortDescription(TypedDict):
    """
    Attributes:
        width: width in bits
        reset: reset value, as a string of bit symbols, most significant first
    """
    width: int
    reset: str


class ComponentDescription(TypedDict):
    name: str
    input: PortDescription
    output: PortDescription
    state: PortDescription
    next_state: PortDescription


_DescriptionAdapter = pydantic.TypeAdapter(ComponentDescription)


def _port(tp) -> PortDescription:
    return {"width": width_of(tp), "reset": bits_to_str(to_bits(reset_of(tp)))}


def describe(component: 'Synchronous') -> ComponentDescription:
    """Return the widths and reset values of ``component``."""
    return _DescriptionAdapter.validate_python({
        "name": type(component).__qualname__,
        "input": _port(component.I),
        "output": _port(component.O),
        "state": _port(component.Q),
        "next_state": _port(component.D),
    })


def _annotation_schema():
    schema = _DescriptionAdapter.json_schema()
    schema['$schema'] = "https://json-schema.org/draft/2020-12/schema"
    schema['$id'] = COMPONENT_SCHEMA
    return schema


class ComponentAnnotation(meta.Annotation):
    "Annotation carrying a :class:`ComponentDescription`"
    schema = _annotation_schema()

    def __init__(self, parent: 'SynchronousSignature'):
        self.parent = parent

    @property
    def origin(self):  # type: ignore
        return self.parent

    def as_json(self):  # type: ignore
        return _DescriptionAdapter.dump_python(self.parent.description, mode='json')


class SynchronousSignature(wiring.Signature):
    """
    Port signature of a synchronous component.

    Members:
        clk: clock input
        rst: synchronous reset input
        i: input bus, ``width_of(component.I)`` bits
        o: output bus, ``width_of(component.O)`` bits
    """
    def __init__(self, component: 'Synchronous'):
        self._description = describe(component)
        super().__init__({
            "clk": In(1),
            "rst": In(1),
            "i": In(self._description["input"]["width"]),
            "o": Out(self._description["output"]["width"]),
        })

    @property
    def description(self) -> ComponentDescription:
        return self._description

    def annotations(self, obj, /):  # type: ignore
        return super().annotations(obj) + (ComponentAnnotation(self),)

    def __repr__(self):
        return f"SynchronousSignature({self._description['name']})"


def component_signature(component: 'Synchronous') -> SynchronousSignature:
    return SynchronousSignature(component)
