# SPDX-License-Identifier: BSD-2-Clause
from pathlib import Path
from typing import Dict, Optional, Any

from pydantic import BaseModel, Field, field_validator


class SimulationConfig(BaseModel):
    """Configuration for simulation timing."""
    period: int = 100
    reset_cycles: int = Field(default=1, ge=0)

    @field_validator('period')
    @classmethod
    def _check_period(cls, period: int) -> int:
        if period < 4 or period % 2:
            raise ValueError("period must be an even integer of at least 4")
        return period


class TestConfig(BaseModel):
    """Configuration for test settings."""
    sample_reference: Optional[Path] = None


class CycleSimConfig(BaseModel):
    """Root configuration for cyclesim.toml."""
    project_name: str
    top: Optional[str] = None
    top_args: Dict[str, Any] = {}
    simulation: SimulationConfig = SimulationConfig()
    test: Optional[TestConfig] = None


class Config(BaseModel):
    """Root configuration model for cyclesim.toml."""
    cyclesim: CycleSimConfig
