# SPDX-License-Identifier: BSD-2-Clause
"""
cyclesim: cycle-accurate simulation of synchronous digital circuits.

Values are width-checked bit vectors and other representable types,
components are described by a single evaluation function, and simulations
are driven by an explicit clock/reset stimulus that is sampled back down to
one output per clock cycle.
"""

import importlib.metadata

from .utils import CycleSimError, ensure_cyclesim_root, get_cls_by_reference, load_top
from .config import _parse_config, _parse_config_file

try:
    __version__ = importlib.metadata.version("cyclesim")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    '__version__',
    'CycleSimError',
    'ensure_cyclesim_root',
    'get_cls_by_reference',
    'load_top',
    '_parse_config',
    '_parse_config_file',
]
