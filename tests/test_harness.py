# SPDX-License-Identifier: BSD-2-Clause
import unittest

import pytest

from cyclesim.cores import Accumulator
from cyclesim.hdl import Bits, WidthMismatchError
from cyclesim.sim import Phase, expand, run, simulate, synchronous_sample, take_until


def _inputs(*values, enable=True):
    return [(enable, Bits[8](value)) for value in values]


class AccumulatorTestCase(unittest.TestCase):
    def test_accumulates(self):
        """Inputs 1, 2, 3 with one reset cycle sample to 0, 1, 3, 6"""
        uut = Accumulator(8)
        trace = run(uut, expand(_inputs(1, 2, 3), reset_cycles=1, period=100))
        outputs = list(synchronous_sample(trace))
        self.assertEqual(outputs, [Bits[8](0), Bits[8](1), Bits[8](3), Bits[8](6)])

    def test_disabled_holds(self):
        inputs = _inputs(5) + _inputs(7, enable=False) + _inputs(1)
        outputs = simulate(Accumulator(8), inputs, reset_cycles=2)
        self.assertEqual(outputs, [Bits[8](0), Bits[8](0), Bits[8](5), Bits[8](5), Bits[8](6)])

    def test_wraps(self):
        outputs = simulate(Accumulator(4), [(True, Bits[4](15))] * 2)
        self.assertEqual(outputs, [Bits[4](15), Bits[4](14)])

    def test_reset_mid_run_restarts(self):
        """A fresh run starts from init() whatever an earlier run did"""
        uut = Accumulator(8)
        first = simulate(uut, _inputs(9, 9), reset_cycles=1)
        second = simulate(uut, _inputs(9, 9), reset_cycles=1)
        self.assertEqual(first, second)


class SamplerTestCase(unittest.TestCase):
    def setUp(self):
        self.uut = Accumulator(8)
        self.inputs = _inputs(1, 2, 3, 4, 5)
        self.reset_cycles = 2

    def _trace(self):
        return list(run(self.uut, expand(self.inputs, self.reset_cycles, 100)))

    def test_sample_length(self):
        outputs = list(synchronous_sample(self._trace()))
        self.assertEqual(len(outputs), self.reset_cycles + len(self.inputs))

    def test_sample_is_rising_edge_of_raw_trace(self):
        trace = self._trace()
        outputs = list(synchronous_sample(trace))
        for cycle, output in enumerate(outputs):
            self.assertIs(trace[3 * cycle + 1].event.phase, Phase.RISING_EDGE)
            self.assertEqual(output, trace[3 * cycle + 1].output)

    def test_raw_trace_lags_at_low_phase(self):
        # the low phase still shows the state committed in the previous cycle
        trace = self._trace()
        self.assertEqual(trace[3 * 2].output, Bits[8](0))
        self.assertEqual(trace[3 * 2 + 1].output, Bits[8](1))

    def test_stop_early(self):
        trace = run(self.uut, expand(self.inputs, self.reset_cycles, 100))
        outputs = list(synchronous_sample(take_until(trace, 400)))
        self.assertEqual(outputs, [Bits[8](0), Bits[8](0), Bits[8](1), Bits[8](3)])


def test_simulate_checks_inputs_first():
    with pytest.raises(WidthMismatchError):
        simulate(Accumulator(8), [(True, Bits[8](1)), (True, Bits[4](1))])
    with pytest.raises(WidthMismatchError):
        simulate(Accumulator(8), [(True, 1)])


def test_empty_run():
    assert simulate(Accumulator(8), []) == []
    assert simulate(Accumulator(8), [], reset_cycles=2) == [Bits[8](0), Bits[8](0)]
