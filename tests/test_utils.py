# SPDX-License-Identifier: BSD-2-Clause
import os
import unittest
from pathlib import Path

from cyclesim import CycleSimError, ensure_cyclesim_root, get_cls_by_reference
from cyclesim.cores import Accumulator
from cyclesim.hdl import RangeError, ShapeError, WidthMismatchError


class TestErrors(unittest.TestCase):
    def test_cyclesim_error(self):
        """Test that CycleSimError can be instantiated and raised"""
        error = CycleSimError("Test error message")
        self.assertEqual(str(error), "Test error message")

        with self.assertRaises(CycleSimError) as cm:
            raise CycleSimError("Test raised error")
        self.assertEqual(str(cm.exception), "Test raised error")

    def test_hierarchy(self):
        self.assertTrue(issubclass(RangeError, CycleSimError))
        self.assertTrue(issubclass(RangeError, ValueError))
        self.assertTrue(issubclass(WidthMismatchError, CycleSimError))
        self.assertTrue(issubclass(WidthMismatchError, TypeError))
        self.assertTrue(issubclass(ShapeError, CycleSimError))
        self.assertTrue(issubclass(ShapeError, TypeError))


class UtilsTestCase(unittest.TestCase):
    def setUp(self):
        self.original_root = os.environ.get("CYCLESIM_ROOT")

    def tearDown(self):
        if self.original_root:
            os.environ["CYCLESIM_ROOT"] = self.original_root
        else:
            os.environ.pop("CYCLESIM_ROOT", None)

    def test_get_cls_by_reference(self):
        self.assertIs(get_cls_by_reference("cyclesim.cores:Accumulator", "test"), Accumulator)

    def test_get_cls_by_reference_errors(self):
        with self.assertRaises(CycleSimError) as cm:
            get_cls_by_reference("cyclesim.missing:Thing", "test")
        self.assertIn("cyclesim.missing", str(cm.exception))
        self.assertIsInstance(cm.exception.__cause__, ModuleNotFoundError)

        with self.assertRaises(CycleSimError):
            get_cls_by_reference("cyclesim.cores:Thing", "test")

    def test_ensure_root_defaults_to_cwd(self):
        os.environ.pop("CYCLESIM_ROOT", None)
        self.assertEqual(ensure_cyclesim_root(), Path(os.getcwd()).absolute())
        self.assertEqual(os.environ["CYCLESIM_ROOT"], os.getcwd())

    def test_ensure_root_from_environment(self):
        os.environ["CYCLESIM_ROOT"] = "/tmp"
        self.assertEqual(ensure_cyclesim_root(), Path("/tmp"))
