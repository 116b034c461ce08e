# SPDX-License-Identifier: BSD-2-Clause
import unittest
from dataclasses import dataclass

import pytest

from cyclesim.cores import Accumulator, DFF
from cyclesim.hdl import Bits, ClockReset, ShapeError, Synchronous, WidthMismatchError
from cyclesim.sim import simulate


@dataclass(frozen=True)
class CounterState:
    count: Bits[4]
    wrapped: bool


class WrappingCounter(Synchronous):
    I = bool
    O = tuple[Bits[4], bool]
    Q = CounterState

    def kernel(self, cr, i, q):
        if cr.reset:
            return self.reset_output(), self.init()
        if i:
            return (q.count, q.wrapped), CounterState(q.count + 1, q.count.all())
        return (q.count, q.wrapped), q


class Pipelined(Synchronous):
    """Next state carries a valid flag that is dropped when latched"""
    I = Bits[4]
    O = Bits[4]
    Q = Bits[4]
    D = tuple[bool, Bits[4]]

    def kernel(self, cr, i, q):
        if cr.reset:
            return self.reset_output(), (False, Bits[4](0))
        return q, (True, i)

    def latch(self, d):
        return d[1]


class Static(Synchronous):
    I = bool
    O = bool
    Q = bool

    @staticmethod
    def kernel(cr, i, q):
        return q, i


def test_kernel_with_too_few_arguments():
    with pytest.raises(ShapeError):
        class Broken(Synchronous):
            I = bool
            O = bool
            Q = bool

            def kernel(self, cr, i):
                return i, i


def test_kernel_with_too_many_arguments():
    with pytest.raises(ShapeError):
        class Broken(Synchronous):
            I = bool
            O = bool
            Q = bool

            def kernel(self, cr, i, q, extra):
                return i, q


def test_kernel_with_varargs():
    with pytest.raises(ShapeError):
        class Broken(Synchronous):
            I = bool
            O = bool
            Q = bool

            def kernel(self, *args):
                return args


def test_unrepresentable_port_type():
    with pytest.raises(ShapeError):
        class Broken(Synchronous):
            I = int
            O = bool
            Q = bool

            def kernel(self, cr, i, q):
                return q, q


def test_next_state_type_needs_latch():
    with pytest.raises(ShapeError):
        class Broken(Synchronous):
            I = bool
            O = bool
            Q = bool
            D = tuple[bool, bool]

            def kernel(self, cr, i, q):
                return q, (i, i)


def test_missing_type_on_instance():
    class Unfinished(Synchronous):
        def __init__(self):
            self.I = bool
            self.Q = bool

        def kernel(self, cr, i, q):
            return q, q

    with pytest.raises(ShapeError):
        Unfinished()


def test_parameterised_type_checked_on_instance():
    with pytest.raises(ShapeError):
        DFF(int)
    with pytest.raises(WidthMismatchError):
        DFF(Bits[4], reset_value=Bits[8](0))


def test_abstract_component():
    with pytest.raises(TypeError):
        Synchronous()


class EvaluatorTestCase(unittest.TestCase):
    def test_next_state_defaults_to_state(self):
        self.assertIs(WrappingCounter.D, CounterState)
        self.assertIs(Accumulator(8).D, Bits[8])
        self.assertIs(Static.D, bool)

    def test_init_is_reset_state(self):
        """init() is the reset value of the state type, every time"""
        uut = WrappingCounter()
        self.assertEqual(uut.init(), CounterState(Bits[4](0), False))
        self.assertEqual(uut.init(), uut.init())

    def test_step_under_reset_ignores_input(self):
        uut = Accumulator(8)
        state = Bits[8](77)
        for clock in (False, True):
            for value in (0, 9, 255):
                output, next_state = uut.step(ClockReset(clock, True), (True, Bits[8](value)), state)
                self.assertEqual(output, uut.reset_output())
                self.assertEqual(next_state, Bits[8](0))

    def test_step_is_pure(self):
        uut = Accumulator(8)
        cr = ClockReset(True, False)
        first = uut.step(cr, (True, Bits[8](5)), Bits[8](10))
        second = uut.step(cr, (True, Bits[8](5)), Bits[8](10))
        self.assertEqual(first, second)
        self.assertEqual(first, (Bits[8](10), Bits[8](15)))

    def test_dataclass_state(self):
        outputs = simulate(WrappingCounter(), [True] * 16)
        self.assertEqual(outputs[0], (Bits[4](1), False))
        self.assertEqual(outputs[14], (Bits[4](15), False))
        self.assertEqual(outputs[15], (Bits[4](0), True))

    def test_latch(self):
        outputs = simulate(Pipelined(), [Bits[4](n) for n in (3, 5, 7)], reset_cycles=1)
        self.assertEqual(outputs, [Bits[4](0), Bits[4](3), Bits[4](5), Bits[4](7)])

    def test_static_kernel(self):
        outputs = simulate(Static(), [True, False, True], reset_cycles=1)
        self.assertEqual(outputs, [False, True, False, True])
