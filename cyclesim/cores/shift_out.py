# SPDX-License-Identifier: BSD-2-Clause
"""
Shift-out register (parallel to serial converter).

On each rising edge:

1. if ``load`` is high, ``data_in`` is loaded into the register;
2. else if ``enable`` is high, the register shifts left by one position,
   filling the least significant bit with zero;
3. else the register holds its value.

The serial output is always the most significant bit of the register, so
a loaded word is sent MSB first.
"""

from ..hdl.bits import Bits
from ..hdl.synchronous import ClockReset, Synchronous


class ShiftOut(Synchronous):
    """
    Parallel-in, serial-out shift register of ``width`` bits.

    Input is ``(enable, load, data_in)``, output is the serial bit.
    """
    def __init__(self, width: int):
        self.width = width
        self.I = tuple[bool, bool, Bits[width]]
        self.O = bool
        self.Q = Bits[width]

    def kernel(self, cr: ClockReset, i, q):
        enable, load, data_in = i
        if cr.reset:
            return self.reset_output(), self.Q(0)
        serial_out = q[-1]
        if load:
            return serial_out, data_in
        if enable:
            return serial_out, q << 1
        return serial_out, q

    def __repr__(self):
        return f"ShiftOut({self.width})"
