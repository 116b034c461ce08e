# SPDX-License-Identifier: BSD-2-Clause
"""
Synchronous components.

A synchronous component is described by four representable types and one
evaluation function::

    class Accumulator(Synchronous):
        I = tuple[bool, Bits[8]]    # input
        O = Bits[8]                 # output
        Q = Bits[8]                 # current state

        def kernel(self, cr, i, q):
            enable, value = i
            ...
            return output, next_state

The kernel receives the clock and reset pair explicitly, and nothing else
but the input and the current state. The output and next state it returns
depend on those arguments only. The next state type ``D`` defaults to
``Q``; components that declare a different ``D`` provide :meth:`latch` to
turn a committed next state into the new current state.

The declaration is checked when the class is created and again when it is
instantiated (for components whose types depend on constructor arguments).
A malformed declaration raises :class:`ShapeError` before any simulation
runs.
"""

import abc
import inspect
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Tuple

from .errors import ShapeError
from .representable import is_representable, reset_of

__all__ = ["ClockReset", "Synchronous", "validate_kernel", "validate_types"]

logger = logging.getLogger(__name__)

_PORT_TYPES = ("I", "O", "Q")


@dataclass(frozen=True)
class ClockReset:
    """The clock and reset levels of the current simulation tick."""
    clock: bool
    reset: bool

    def __str__(self):
        return f"clk={int(self.clock)} rst={int(self.reset)}"


def validate_kernel(cls: type):
    """
    Check that ``cls.kernel`` takes exactly the clock/reset pair, the input
    and the current state.

    Raises:
        ShapeError: If the kernel has any other signature.
    """
    raw = inspect.getattr_static(cls, "kernel", None)
    if raw is None:
        raise ShapeError(f"{cls.__qualname__} does not define a kernel")
    if isinstance(raw, staticmethod):
        func, expected = raw.__func__, ("cr", "i", "q")
    elif inspect.isfunction(raw):
        func, expected = raw, ("self", "cr", "i", "q")
    else:
        raise ShapeError(f"{cls.__qualname__}.kernel must be a method, not {raw!r}")

    params = list(inspect.signature(func).parameters.values())
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    if len(params) != len(expected) or any(p.kind not in positional for p in params):
        shape = ", ".join(str(p) for p in params)
        raise ShapeError(
            f"{cls.__qualname__}.kernel({shape}) does not have the required shape "
            f"kernel({', '.join(expected)})")


def validate_types(obj):
    """
    Check that the port and state types of ``obj`` (a component class or
    instance) are declared and representable.

    Raises:
        ShapeError: If a type is missing or not representable, or if ``D``
            differs from ``Q`` without a :meth:`Synchronous.latch` override.
    """
    name = obj.__qualname__ if isinstance(obj, type) else type(obj).__qualname__
    for attr in _PORT_TYPES + ("D",):
        tp = getattr(obj, attr, None)
        if tp is None:
            raise ShapeError(f"{name} does not declare its {attr} type")
        if not is_representable(tp):
            raise ShapeError(f"{name}.{attr} = {tp!r} is not a representable type")

    cls = obj if isinstance(obj, type) else type(obj)
    if obj.D != obj.Q and cls.latch is Synchronous.latch:
        raise ShapeError(f"{name} declares D different from Q, so it must override latch()")


class _SynchronousMeta(abc.ABCMeta):
    def __call__(cls, *args, **kwargs):
        obj = super().__call__(*args, **kwargs)
        if not cls._explicit_d and "D" not in vars(obj):
            obj.D = obj.Q
        validate_types(obj)
        return obj


class Synchronous(metaclass=_SynchronousMeta):
    """
    Base class for clocked components.

    Attributes:
        I: input type
        O: output type
        Q: current state type
        D: next state type, ``Q`` unless declared
    """
    I: ClassVar[Any] = None
    O: ClassVar[Any] = None
    Q: ClassVar[Any] = None
    D: ClassVar[Any] = None

    _explicit_d: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "D" in vars(cls):
            cls._explicit_d = True
        elif not cls._explicit_d:
            cls.D = cls.Q
        if getattr(cls.kernel, "__isabstractmethod__", False):
            return
        validate_kernel(cls)
        # parameterised components fill in their types in __init__, and are
        # checked once instantiated
        if all(getattr(cls, attr) is not None for attr in _PORT_TYPES):
            validate_types(cls)
        logger.debug(f"Registered synchronous component {cls.__qualname__}")

    @abc.abstractmethod
    def kernel(self, cr: ClockReset, i, q) -> Tuple[Any, Any]:
        """Compute ``(output, next_state)`` from the input and the current state."""

    def init(self):
        """Return the state of the component coming out of reset."""
        return self.initial_state()

    def initial_state(self):
        return reset_of(self.Q)

    def reset_output(self):
        """The output of the component while reset is asserted."""
        return reset_of(self.O)

    def latch(self, d):
        """Turn a committed next state into the current state."""
        return d

    def step(self, cr: ClockReset, i, q) -> Tuple[Any, Any]:
        """
        Evaluate the component for one tick.

        Pure and total for well-typed arguments; the caller keeps the
        returned next state and passes it back in on the following tick.
        """
        return self.kernel(cr, i, q)

    def __repr__(self):
        return f"{type(self).__qualname__}()"
