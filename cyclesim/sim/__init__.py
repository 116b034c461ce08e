# SPDX-License-Identifier: BSD-2-Clause
"""Cycle-accurate simulation of synchronous components.

Example usage::

    from cyclesim.cores import Accumulator
    from cyclesim.hdl import Bits
    from cyclesim.sim import expand, run, synchronous_sample

    uut = Accumulator(8)
    inputs = [(True, Bits[8](n)) for n in (1, 2, 3)]

    trace = run(uut, expand(inputs, reset_cycles=1, period=100))
    outputs = list(synchronous_sample(trace))   # one output per cycle
"""

from .clock import Phase, Event, expand, event_count, take_until, PHASES_PER_CYCLE
from .harness import TraceSample, run, synchronous_sample, simulate, simulate_config
from .reference import dump_samples, dump_trace, compare_samples, check_samples

__all__ = [
    "Phase",
    "Event",
    "expand",
    "event_count",
    "take_until",
    "PHASES_PER_CYCLE",
    "TraceSample",
    "run",
    "synchronous_sample",
    "simulate",
    "simulate_config",
    "dump_samples",
    "dump_trace",
    "compare_samples",
    "check_samples",
]
