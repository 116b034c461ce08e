# SPDX-License-Identifier: BSD-2-Clause
"""
Core utility functions for cyclesim

This module provides the base error type and the helpers used to locate
the project root and resolve ``module:Class`` references from configuration.
"""

import importlib
import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config.models import Config
    from .hdl.synchronous import Synchronous


logger = logging.getLogger(__name__)


class CycleSimError(Exception):
    """Base exception for cyclesim errors"""
    pass


def get_cls_by_reference(reference: str, context: str):
    """
    Dynamically import and return a class by its module:class reference string.

    Args:
        reference: String in format "module.path:ClassName"
        context: Description of where this reference came from (for error messages)

    Returns:
        The class object

    Raises:
        CycleSimError: If module or class cannot be found
    """
    logger.debug(f"get_cls_by_reference({reference}, {context})")
    module_ref, _, class_ref = reference.partition(":")
    if not class_ref:
        raise CycleSimError(
            f"Reference `{reference}` (from {context}) must have the form `module:Class`"
        )
    try:
        module_obj = importlib.import_module(module_ref)
    except ModuleNotFoundError as e:
        logger.debug(f"import_module({module_ref}) caused {e}")
        raise CycleSimError(
            f"Module `{module_ref}` was not found (referenced by {context})"
        ) from e
    try:
        return getattr(module_obj, class_ref)
    except AttributeError as e:
        logger.debug(f"getattr({module_obj}, {class_ref}) caused {e}")
        raise CycleSimError(
            f"Class `{class_ref}` not found in module `{module_ref}` "
            f"(referenced by {context})"
        ) from e


def ensure_cyclesim_root() -> Path:
    """
    Ensure CYCLESIM_ROOT environment variable is set and return its path.

    If CYCLESIM_ROOT is not set, sets it to the current working directory.
    Also ensures the root is in sys.path, so that ``top`` references to
    project-local modules can be imported.

    Returns:
        Path to the project root directory
    """
    if "CYCLESIM_ROOT" not in os.environ:
        logger.debug(
            f"CYCLESIM_ROOT not found in environment. "
            f"Setting CYCLESIM_ROOT to {os.getcwd()} for any child scripts"
        )
        os.environ["CYCLESIM_ROOT"] = os.getcwd()
    else:
        logger.debug(f"CYCLESIM_ROOT={os.environ['CYCLESIM_ROOT']} found in environment")

    if os.environ["CYCLESIM_ROOT"] not in sys.path:
        sys.path.append(os.environ["CYCLESIM_ROOT"])

    return Path(os.environ["CYCLESIM_ROOT"]).absolute()


def load_top(config: 'Config') -> 'Synchronous':
    """
    Instantiate the top level component configured in ``cyclesim.toml``.

    Args:
        config: The parsed cyclesim configuration

    Returns:
        The instantiated component

    Raises:
        CycleSimError: If the reference is missing or invalid, or does not
            name a synchronous component
    """
    from .hdl.synchronous import Synchronous

    ref = config.cyclesim.top
    if ref is None:
        raise CycleSimError("No top component configured, set `top` in [cyclesim]")

    cls = get_cls_by_reference(ref, context="[cyclesim] top")
    if not (isinstance(cls, type) and issubclass(cls, Synchronous)):
        raise CycleSimError(f"`{ref}` is not a Synchronous component class")

    args = config.cyclesim.top_args
    logger.debug(f"Instantiating top component {cls.__name__} with {args}")
    try:
        return cls(**args)
    except CycleSimError:
        raise
    except TypeError as e:
        raise CycleSimError(f"Unable to instantiate `{ref}` with {args}: {e}") from e
