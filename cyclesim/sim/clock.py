# SPDX-License-Identifier: BSD-2-Clause
"""
Clock and reset stimulus.

:func:`expand` turns a sequence of logical inputs into the timestamped
samples a sampled testbench observes. Every clock cycle, whether reset is
held or not, produces exactly three events::

    phase            time                       clock  input
    LOW              cycle*period               0      this cycle
    RISING_EDGE      cycle*period + period//2   1      this cycle
    HIGH_LOOKAHEAD   cycle*period + period//2+1 1      next cycle

The ``RISING_EDGE`` event is the one at which components commit their next
state; the ``HIGH_LOOKAHEAD`` event presents the next cycle's input and
reset levels while the clock is still high, as they would be once setup
time has elapsed.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, TypeVar

from ..utils import CycleSimError

__all__ = ["Phase", "Event", "expand", "event_count", "take_until", "PHASES_PER_CYCLE"]

logger = logging.getLogger(__name__)

#: Number of events every clock cycle expands into
PHASES_PER_CYCLE = 3


class Phase(Enum):
    """
    Position of an event within its clock cycle
    """
    #: Clock low, current input
    LOW = "low"
    #: Clock high, current input; state is committed here
    RISING_EDGE = "rising_edge"
    #: Clock high, next cycle's input
    HIGH_LOOKAHEAD = "high_lookahead"

    def __str__(self):
        return f'{self.value}'

    @property
    def clock(self) -> bool:
        return self is not Phase.LOW

    @property
    def successor(self) -> 'Phase':
        return _SUCCESSOR[self]

    def offset(self, period: int) -> int:
        if self is Phase.LOW:
            return 0
        if self is Phase.RISING_EDGE:
            return period // 2
        return period // 2 + 1


_SUCCESSOR = {
    Phase.LOW: Phase.RISING_EDGE,
    Phase.RISING_EDGE: Phase.HIGH_LOOKAHEAD,
    Phase.HIGH_LOOKAHEAD: Phase.LOW,
}


@dataclass(frozen=True)
class Event:
    """
    One sample of the clock, reset and input.

    Attributes:
        time: timestamp, strictly increasing along a sequence
        clock: clock level
        reset: reset level
        input: the logical input presented, ``None`` while reset is held
        next_input: the input of the following cycle, ``None`` if there is
            none or the following cycle holds reset
        cycle: index of the clock cycle this event belongs to
        phase: position of this event within its cycle
    """
    time: int
    clock: bool
    reset: bool
    input: Any
    next_input: Any
    cycle: int
    phase: Phase

    def __str__(self):
        return (f"@{self.time} cycle {self.cycle} {self.phase}: "
                f"clk={int(self.clock)} rst={int(self.reset)} input={self.input!r}")


_END = object()


def _check_timing(reset_cycles: int, period: int):
    if not isinstance(reset_cycles, int) or isinstance(reset_cycles, bool) or reset_cycles < 0:
        raise CycleSimError(f"reset_cycles must be a non-negative integer, not {reset_cycles!r}")
    if not isinstance(period, int) or isinstance(period, bool) or period < 4 or period % 2:
        raise CycleSimError(f"period must be an even integer of at least 4, not {period!r}")


def _cycles(inputs: Iterable, reset_cycles: int):
    for _ in range(reset_cycles):
        yield True, None
    for value in inputs:
        yield False, value


def expand(inputs: Iterable, reset_cycles: int = 0, period: int = 100) -> Iterator[Event]:
    """
    Expand ``inputs`` into clock/reset events.

    ``reset_cycles`` cycles with reset held are emitted first, followed by
    one cycle per logical input. Reset is held for the LOW and RISING_EDGE
    events of every reset cycle; the HIGH_LOOKAHEAD event of the last reset
    cycle already shows the first input with reset released, like every
    other lookahead event shows the following cycle. The result is lazy;
    calling again with the same arguments yields the same events.

    Args:
        inputs: logical input values, one per clock cycle
        reset_cycles: number of cycles to hold reset before the inputs
        period: clock period, an even integer of at least 4

    Raises:
        CycleSimError: If ``reset_cycles`` or ``period`` are invalid.
    """
    _check_timing(reset_cycles, period)
    logger.debug(f"Expanding stimulus with {reset_cycles} reset cycles, period {period}")
    return _expand(inputs, reset_cycles, period)


def _expand(inputs: Iterable, reset_cycles: int, period: int) -> Iterator[Event]:
    cycles = _cycles(inputs, reset_cycles)
    current = next(cycles, _END)
    cycle = 0
    while current is not _END:
        upcoming = next(cycles, _END)
        reset, value = current
        if upcoming is _END:
            ahead_reset, ahead_value, lookahead = reset, value, None
        else:
            ahead_reset, ahead_value = upcoming
            lookahead = ahead_value

        base = cycle * period
        phase = Phase.LOW
        for _ in range(PHASES_PER_CYCLE):
            if phase is Phase.HIGH_LOOKAHEAD:
                sample_reset, sample_value = ahead_reset, ahead_value
            else:
                sample_reset, sample_value = reset, value
            yield Event(
                time=base + phase.offset(period),
                clock=phase.clock,
                reset=sample_reset,
                input=sample_value,
                next_input=lookahead,
                cycle=cycle,
                phase=phase,
            )
            phase = phase.successor

        current = upcoming
        cycle += 1


def event_count(num_inputs: int, reset_cycles: int = 0) -> int:
    """Number of events :func:`expand` produces for ``num_inputs`` inputs."""
    return PHASES_PER_CYCLE * (reset_cycles + num_inputs)


_T = TypeVar('_T')


def take_until(samples: Iterable[_T], time: int) -> Iterator[_T]:
    """
    Yield events or trace samples up to, but not including, ``time``.

    Stops pulling from ``samples`` as soon as the limit is reached.
    """
    return itertools.takewhile(lambda sample: sample.time < time, samples)
