# SPDX-License-Identifier: BSD-2-Clause
import unittest

import pytest

from cyclesim import CycleSimError
from cyclesim.hdl import Bits
from cyclesim.sim import Phase, event_count, expand, take_until


@pytest.mark.parametrize("reset_cycles", [0, 1, 2, 5])
@pytest.mark.parametrize("num_inputs", [0, 1, 3, 10])
def test_event_count(reset_cycles, num_inputs):
    events = list(expand(range(num_inputs), reset_cycles, 100))
    assert len(events) == 3 * (reset_cycles + num_inputs)
    assert len(events) == event_count(num_inputs, reset_cycles)


def test_empty_input_no_reset():
    assert list(expand([], 0, 100)) == []


def test_expand_is_repeatable():
    inputs = [Bits[8](n) for n in (4, 8, 15, 16)]
    assert list(expand(inputs, 2, 10)) == list(expand(inputs, 2, 10))


def test_bad_timing():
    with pytest.raises(CycleSimError):
        expand([1], -1, 100)
    with pytest.raises(CycleSimError):
        expand([1], 0, 7)
    with pytest.raises(CycleSimError):
        expand([1], 0, 2)
    with pytest.raises(CycleSimError):
        expand([1], True, 100)


class ExpandTestCase(unittest.TestCase):
    def setUp(self):
        self.events = list(expand(["a", "b"], reset_cycles=1, period=10))

    def test_phases_repeat(self):
        phases = [event.phase for event in self.events]
        self.assertEqual(phases, [Phase.LOW, Phase.RISING_EDGE, Phase.HIGH_LOOKAHEAD] * 3)
        self.assertEqual([event.clock for event in self.events], [False, True, True] * 3)
        self.assertEqual([event.cycle for event in self.events], [0, 0, 0, 1, 1, 1, 2, 2, 2])

    def test_timestamps(self):
        times = [event.time for event in self.events]
        self.assertEqual(times, [0, 5, 6, 10, 15, 16, 20, 25, 26])
        self.assertEqual(times, sorted(set(times)))

    def test_reset_cycles_come_first(self):
        self.assertEqual([event.reset for event in self.events[:3]], [True, True, False])
        self.assertEqual([event.reset for event in expand([1], 1)], [True, True, False, False, False, False])
        self.assertEqual([event.reset for event in expand([1, 2], 2)][:6], [True, True, True, True, True, False])
        self.assertTrue(all(not event.reset for event in self.events[3:]))
        self.assertIsNone(self.events[0].input)
        self.assertIsNone(self.events[1].input)

    def test_lookahead_presents_next_cycle(self):
        # end of the reset cycle already shows the first input, reset released
        lookahead = self.events[2]
        self.assertEqual(lookahead.phase, Phase.HIGH_LOOKAHEAD)
        self.assertFalse(lookahead.reset)
        self.assertEqual(lookahead.input, "a")

        self.assertEqual([event.input for event in self.events[3:6]], ["a", "a", "b"])
        self.assertEqual([event.next_input for event in self.events[3:6]], ["b", "b", "b"])

    def test_last_cycle_keeps_its_input(self):
        last = self.events[-1]
        self.assertEqual(last.input, "b")
        self.assertIsNone(last.next_input)

    def test_no_reset(self):
        events = list(expand(["a"], reset_cycles=0, period=100))
        self.assertEqual(len(events), 3)
        self.assertFalse(any(event.reset for event in events))
        self.assertEqual(events[0].time, 0)
        self.assertEqual(events[1].time, 50)
        self.assertEqual(events[2].time, 51)

    def test_phase_transitions(self):
        self.assertIs(Phase.LOW.successor, Phase.RISING_EDGE)
        self.assertIs(Phase.RISING_EDGE.successor, Phase.HIGH_LOOKAHEAD)
        self.assertIs(Phase.HIGH_LOOKAHEAD.successor, Phase.LOW)

    def test_lazy(self):
        def inputs():
            yield "a"
            yield "b"
            raise AssertionError("pulled too far")

        events = expand(inputs(), reset_cycles=0, period=10)
        self.assertEqual(next(events).input, "a")

    def test_take_until(self):
        self.assertEqual(len(list(take_until(self.events, 15))), 4)
        self.assertEqual(list(take_until(self.events, 0)), [])
