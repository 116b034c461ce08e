# SPDX-License-Identifier: BSD-2-Clause
"""
Shift-in register (serial to parallel converter).

On each rising edge with ``enable`` high, the register shifts left by one
position and ``serial_in`` fills the least significant bit::

    before:  [MSB] [6] [5] [4] [3] [2] [1] [LSB]
    after:   [6] [5] [4] [3] [2] [1] [LSB] [serial_in]

With ``enable`` low the register holds its value. The output is the whole
register.
"""

from ..hdl.bits import Bits
from ..hdl.synchronous import ClockReset, Synchronous


class ShiftRegister(Synchronous):
    """
    Serial-in, parallel-out shift register of ``width`` bits.

    Input is ``(enable, serial_in)``, output is the register contents.
    """
    def __init__(self, width: int):
        self.width = width
        self.I = tuple[bool, bool]
        self.O = Bits[width]
        self.Q = Bits[width]

    def kernel(self, cr: ClockReset, i, q):
        enable, serial_in = i
        if cr.reset:
            return self.reset_output(), self.Q(0)
        if enable:
            return q, (q << 1) | serial_in
        return q, q

    def __repr__(self):
        return f"ShiftRegister({self.width})"
