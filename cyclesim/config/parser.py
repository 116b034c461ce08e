# SPDX-License-Identifier: BSD-2-Clause
"""
Reading ``cyclesim.toml``.

Both syntax errors and schema violations are reported as
:class:`CycleSimError` naming the file, with one line per problem.
"""

import logging
from pathlib import Path

import tomli
from pydantic import ValidationError

from ..utils import CycleSimError, ensure_cyclesim_root
from .models import Config

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cyclesim.toml"


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        where = ".".join(str(part) for part in detail["loc"]) or "<root>"
        problems.append(f"Error at '{where}': {detail['msg']}")
    return "\n".join(problems)


def _parse_config_file(config_file) -> Config:
    """
    Load and validate one configuration file.

    Raises:
        FileNotFoundError: If ``config_file`` does not exist.
        CycleSimError: If it is not valid TOML, or does not describe a
            valid configuration.
    """
    config_file = Path(config_file)
    try:
        raw = tomli.loads(config_file.read_text())
    except tomli.TOMLDecodeError as e:
        raise CycleSimError(
            f"{config_file} has a formatting error: {e.msg} at line {e.lineno}, column {e.colno}"
        ) from e
    logger.debug(f"Read {config_file}: {raw}")

    try:
        config = Config.model_validate(raw)
    except ValidationError as e:
        raise CycleSimError(
            f"Validation error in {config_file.name}:\n{_describe_validation_error(e)}") from e
    logger.debug(f"Top component: {config.cyclesim.top}, timing: {config.cyclesim.simulation}")
    return config


def _parse_config() -> Config:
    """Load ``cyclesim.toml`` from the project root (``CYCLESIM_ROOT``)."""
    config_file = ensure_cyclesim_root() / CONFIG_FILENAME
    if not config_file.is_file():
        raise CycleSimError(f"Config file not found. I expected to find it at {config_file}")
    return _parse_config_file(config_file)
