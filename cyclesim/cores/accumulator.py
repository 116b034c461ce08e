# SPDX-License-Identifier: BSD-2-Clause
from ..hdl.bits import Bits
from ..hdl.synchronous import ClockReset, Synchronous


class Accumulator(Synchronous):
    """
    Running sum of its inputs.

    The input is ``(enable, value)``. On each rising edge with ``enable``
    high, ``value`` is added to the total, wrapping at ``2**width``. The
    output is the current total; reset clears it.
    """
    def __init__(self, width: int):
        self.width = width
        self.I = tuple[bool, Bits[width]]
        self.O = Bits[width]
        self.Q = Bits[width]

    def kernel(self, cr: ClockReset, i, q):
        enable, value = i
        if cr.reset:
            return self.reset_output(), self.Q(0)
        if enable:
            return q, q + value
        return q, q

    def __repr__(self):
        return f"Accumulator({self.width})"
