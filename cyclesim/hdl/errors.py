# SPDX-License-Identifier: BSD-2-Clause
"""
Errors raised while constructing values and components.

All of these signal a construction-time defect. None of them is raised
while a validated component is being stepped.
"""

from ..utils import CycleSimError

__all__ = ["RangeError", "WidthMismatchError", "ShapeError"]


class RangeError(CycleSimError, ValueError):
    """A magnitude does not fit in its declared width."""
    pass


class WidthMismatchError(CycleSimError, TypeError):
    """Values of incompatible width were combined."""
    pass


class ShapeError(CycleSimError, TypeError):
    """A type or component declaration does not have the required shape."""
    pass
