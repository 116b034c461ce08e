# SPDX-License-Identifier: BSD-2-Clause
"""
Reference sample files.

Sampled outputs are stored as JSON, one string of bit symbols per clock
cycle, so that a run can be checked against a known-good (gold) run or
handed to reporting tools. Raw traces can be dumped the same way.
"""

from pathlib import Path
from typing import Any, Iterable, List

from pydantic import BaseModel, ValidationError

from ..hdl.representable import bits_to_str, to_bits
from ..utils import CycleSimError
from .harness import TraceSample

__all__ = ["SampleReference", "TraceRecord", "TraceDump",
           "dump_samples", "dump_trace", "load_samples", "compare_samples", "check_samples"]


class SampleReference(BaseModel):
    """One encoded output per clock cycle."""
    samples: List[str]


class TraceRecord(BaseModel):
    time: int
    cycle: int
    phase: str
    clock: bool
    reset: bool
    output: str


class TraceDump(BaseModel):
    events: List[TraceRecord]


def _encode(value: Any) -> str:
    return bits_to_str(to_bits(value))


def dump_samples(outputs: Iterable[Any], path: Path):
    reference = SampleReference(samples=[_encode(value) for value in outputs])
    Path(path).write_text(reference.model_dump_json(indent=2))


def dump_trace(trace: Iterable[TraceSample], path: Path):
    dump = TraceDump(events=[
        TraceRecord(
            time=sample.event.time,
            cycle=sample.event.cycle,
            phase=str(sample.event.phase),
            clock=sample.event.clock,
            reset=sample.event.reset,
            output=_encode(sample.output),
        ) for sample in trace
    ])
    Path(path).write_text(dump.model_dump_json(indent=2))


def load_samples(path: Path) -> SampleReference:
    try:
        with open(path, "r") as f:
            return SampleReference.model_validate_json(f.read())
    except FileNotFoundError as e:
        raise CycleSimError(f"Sample reference {path} not found") from e
    except ValidationError as e:
        raise CycleSimError(f"{path} is not a valid sample reference: {e}") from e


def _compare(gold: List[str], gate: List[str]):
    if len(gold) != len(gate):
        raise CycleSimError(f"Simulation check failed! Sample mismatch: {len(gold)} samples in reference, {len(gate)} in test output")
    for cycle, (ev_gold, ev_gate) in enumerate(zip(gold, gate)):
        if ev_gold != ev_gate:
            raise CycleSimError(f"Simulation check failed! Cycle {cycle}: reference sample {ev_gold} mismatches test sample {ev_gate}")


def compare_samples(gold_path: Path, gate_path: Path):
    _compare(load_samples(gold_path).samples, load_samples(gate_path).samples)
    return True


def check_samples(gold_path: Path, outputs: Iterable[Any]):
    _compare(load_samples(gold_path).samples, [_encode(value) for value in outputs])
    return True
