# SPDX-License-Identifier: BSD-2-Clause
"""
Value model and component contract.

This module provides width-checked bit vectors, the Representable contract
that decides which types may be used for ports and state, and the
:class:`Synchronous` base class for clocked components.
"""

from .errors import RangeError, WidthMismatchError, ShapeError
from .representable import (
    BitSymbol,
    Representable,
    Array,
    TaggedUnion,
    is_representable,
    width_of,
    reset_of,
    to_bits,
    conforms,
    bits_to_str,
)
from .bits import Bits, from_magnitude, concat, zero_extend, truncate
from .synchronous import ClockReset, Synchronous
from .signature import SynchronousSignature, describe, component_signature

__all__ = [
    # Errors
    'RangeError',
    'WidthMismatchError',
    'ShapeError',
    # Values
    'BitSymbol',
    'Representable',
    'Array',
    'TaggedUnion',
    'Bits',
    'is_representable',
    'width_of',
    'reset_of',
    'to_bits',
    'conforms',
    'bits_to_str',
    'from_magnitude',
    'concat',
    'zero_extend',
    'truncate',
    # Components
    'ClockReset',
    'Synchronous',
    # Metadata
    'SynchronousSignature',
    'describe',
    'component_signature',
]
