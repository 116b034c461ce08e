# SPDX-License-Identifier: BSD-2-Clause
"""
Generation of state declarations from field lists.

Writing a frozen dataclass for every component state by hand is tedious;
:func:`generate_states` renders them from a list of field names and types.
The result is ordinary Python source that is imported like any other
module. Nothing here is used while simulating.
"""

import keyword
import logging
import typing
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import BaseModel, ConfigDict

from .hdl.bits import Bits
from .hdl.errors import ShapeError
from .hdl.representable import Array, width_of

__all__ = ["StateDeclaration", "generate_states", "write_states"]

logger = logging.getLogger(__name__)


class StateDeclaration(BaseModel):
    """
    A state type to generate.

    Attributes:
        name: class name of the generated dataclass
        fields: field names mapped to representable types, most significant first
        doc: optional docstring
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    fields: Dict[str, Any]
    doc: Optional[str] = None


def _check_identifier(name: str, what: str):
    if not name.isidentifier() or keyword.iskeyword(name):
        raise ShapeError(f"{name!r} is not a valid {what} name")


def _annotation(tp, imports: Dict[str, set]) -> str:
    if tp is bool:
        return "bool"
    if isinstance(tp, type) and issubclass(tp, Bits):
        imports["cyclesim.hdl"].add("Bits")
        return f"Bits[{tp.bit_width()}]"
    if isinstance(tp, type) and issubclass(tp, Array):
        imports["cyclesim.hdl"].add("Array")
        return f"Array[{_annotation(tp.element, imports)}, {tp.length}]"
    if typing.get_origin(tp) is tuple:
        return f"tuple[{', '.join(_annotation(arg, imports) for arg in typing.get_args(tp))}]"
    if isinstance(tp, type):
        imports[tp.__module__].add(tp.__qualname__.split(".")[0])
        return tp.__qualname__
    raise ShapeError(f"Cannot generate an annotation for {tp!r}")


def generate_states(declarations: List[StateDeclaration], source: str = "field lists") -> str:
    """
    Render Python source declaring one frozen dataclass per declaration.

    Raises:
        ShapeError: If a name is not a valid identifier, or a field type is
            not representable.
    """
    imports: Dict[str, set] = defaultdict(set)
    rendered = []
    for decl in declarations:
        _check_identifier(decl.name, "class")
        fields = []
        for name, tp in decl.fields.items():
            _check_identifier(name, "field")
            width_of(tp)
            fields.append({"name": name, "annotation": _annotation(tp, imports)})
        logger.debug(f"Generating state {decl.name} with fields {[f['name'] for f in fields]}")
        rendered.append({"name": decl.name, "doc": decl.doc, "fields": fields})

    env = Environment(
        loader=PackageLoader("cyclesim", "templates"),
        autoescape=select_autoescape(),
        keep_trailing_newline=True,
    )
    template = env.get_template("state.py.jinja")
    return template.render(
        source=source,
        imports=sorted((module, sorted(names)) for module, names in imports.items()),
        declarations=rendered,
    )


def write_states(declarations: List[StateDeclaration], path: Path, source: str = "field lists"):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_states(declarations, source))
    logger.debug(f"Wrote {len(declarations)} state declarations to {path}")
