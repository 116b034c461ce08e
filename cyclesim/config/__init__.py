# SPDX-License-Identifier: BSD-2-Clause
"""
Configuration management for cyclesim.

This module provides configuration models and parsing functionality
for cyclesim.toml configuration files.
"""

# Configuration models
from .models import (
    SimulationConfig,
    TestConfig,
    CycleSimConfig,
    Config,
)

# Parsing utilities
from .parser import (
    _parse_config,
    _parse_config_file,
)

__all__ = [
    'SimulationConfig',
    'TestConfig',
    'CycleSimConfig',
    'Config',
    '_parse_config',
    '_parse_config_file',
]
