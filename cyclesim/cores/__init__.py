# SPDX-License-Identifier: BSD-2-Clause
"""
Library of basic synchronous components.
"""

from .dff import DFF
from .accumulator import Accumulator
from .shift_reg import ShiftRegister
from .shift_out import ShiftOut

__all__ = ["DFF", "Accumulator", "ShiftRegister", "ShiftOut"]
