# SPDX-License-Identifier: BSD-2-Clause
"""
Running components against clock/reset stimulus.

:func:`run` evaluates a component once per event and yields the raw trace.
State is committed on every rising clock edge: the next state computed at
the previous event becomes the current state, and the component is then
evaluated again with it. :func:`synchronous_sample` reduces a raw trace to
the output observed at each rising edge, one per clock cycle, which is
what tests should normally compare against.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, TYPE_CHECKING

from ..hdl.errors import WidthMismatchError
from ..hdl.representable import conforms, reset_of
from ..hdl.synchronous import ClockReset, Synchronous
from ..utils import CycleSimError
from .clock import Event, Phase, expand

if TYPE_CHECKING:
    from ..config.models import Config

__all__ = ["TraceSample", "run", "synchronous_sample", "simulate", "simulate_config"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceSample:
    """An event together with the output the component produced for it."""
    event: Event
    output: Any

    @property
    def time(self) -> int:
        return self.event.time


def run(component: Synchronous, events: Iterable[Event]) -> Iterator[TraceSample]:
    """
    Evaluate ``component`` for each of ``events``.

    Events that carry no input (reset cycles) are evaluated with the reset
    value of the component's input type. The trace is produced lazily.
    """
    logger.debug(f"Running {component!r}")
    idle_input = reset_of(component.I)
    state = component.init()
    pending = None
    clock = False
    count = 0
    for event in events:
        if event.clock and not clock and pending is not None:
            state = component.latch(pending)
        clock = event.clock
        value = idle_input if event.input is None else event.input
        output, pending = component.step(ClockReset(event.clock, event.reset), value, state)
        count += 1
        yield TraceSample(event, output)
    logger.debug(f"Run of {component!r} finished after {count} events")


def synchronous_sample(trace: Iterable[TraceSample]) -> Iterator[Any]:
    """Yield the output observed at the rising edge of every clock cycle."""
    for sample in trace:
        if sample.event.phase is Phase.RISING_EDGE:
            yield sample.output


def simulate(component: Synchronous, inputs: Iterable, reset_cycles: int = 0,
             period: int = 100) -> List[Any]:
    """
    Simulate ``component`` and return one output per clock cycle.

    All inputs are checked against the component's input type before the
    simulation starts.

    Raises:
        WidthMismatchError: If an input is not a value of ``component.I``.
        CycleSimError: If the timing arguments are invalid.
    """
    inputs = list(inputs)
    for n, value in enumerate(inputs):
        if not conforms(component.I, value):
            raise WidthMismatchError(f"Input {n} ({value!r}) is not a value of {component.I!r}")
    return list(synchronous_sample(run(component, expand(inputs, reset_cycles, period))))


def simulate_config(config: 'Config', inputs: Iterable) -> List[Any]:
    """
    Simulate the top component configured in ``cyclesim.toml``.

    If ``[cyclesim.test] sample_reference`` is set, the outputs are
    compared against the reference file.

    Raises:
        CycleSimError: If the configuration is invalid or the outputs do
            not match the reference.
    """
    from ..utils import ensure_cyclesim_root, load_top
    from .reference import check_samples

    component = load_top(config)
    timing = config.cyclesim.simulation
    outputs = simulate(component, inputs, timing.reset_cycles, timing.period)

    test = config.cyclesim.test
    if test is not None and test.sample_reference is not None:
        reference = test.sample_reference
        if not reference.is_absolute():
            reference = ensure_cyclesim_root() / reference
        if not reference.exists():
            raise CycleSimError(f"Sample reference {reference} does not exist")
        check_samples(reference, outputs)
    return outputs
