# SPDX-License-Identifier: BSD-2-Clause
"""
D flip-flop.

The simplest stateful component: the output is the stored value, and the
input is stored on every rising clock edge. While reset is held the
flip-flop outputs and stores its reset value.
"""

from ..hdl.errors import WidthMismatchError
from ..hdl.representable import conforms, reset_of, width_of
from ..hdl.synchronous import ClockReset, Synchronous


class DFF(Synchronous):
    """
    A register of any representable type ``T``.

    Args:
        T: type of the stored value
        reset_value: value held while reset is asserted, the reset value of
            ``T`` if not given
    """
    def __init__(self, T, reset_value=None):
        width_of(T)
        if reset_value is None:
            reset_value = reset_of(T)
        elif not conforms(T, reset_value):
            raise WidthMismatchError(f"Reset value {reset_value!r} is not a value of {T!r}")
        self.I = T
        self.O = T
        self.Q = T
        self.reset_value = reset_value

    def initial_state(self):
        return self.reset_value

    def reset_output(self):
        return self.reset_value

    def kernel(self, cr: ClockReset, i, q):
        if cr.reset:
            return self.reset_value, self.reset_value
        return q, i

    def __repr__(self):
        return f"DFF({self.I!r}, {self.reset_value!r})"
