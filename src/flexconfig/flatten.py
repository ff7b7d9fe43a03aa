"""Flattening of parsed YAML/JSON documents into dotted property keys.

A parsed document is a tree of mappings, sequences, and scalars. Flattening
walks the tree and produces one ``dotted.path -> string`` entry per scalar
leaf. Mapping members extend the path with the member name, sequence
elements with their zero-based index::

    myapp:
      plugins:
        - name: foo
        - name: bar

becomes ``{"myapp.plugins.0.name": "foo", "myapp.plugins.1.name": "bar"}``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

import yaml

from flexconfig.errors import SourceParseError, UnsupportedStructureError

__all__ = [
    "NodeKind",
    "classify",
    "format_float",
    "format_scalar",
    "flatten",
    "load_structured",
    "parse_structured",
]

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Tag of a parsed document node."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


_SCALAR_KINDS = frozenset({NodeKind.STRING, NodeKind.INTEGER, NodeKind.FLOAT, NodeKind.BOOLEAN})


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps YAML timestamps as their literal text."""


_ConfigLoader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)


def classify(node: Any, path: str = "") -> NodeKind:
    """Return the NodeKind of a parsed node.

    Raises:
        UnsupportedStructureError: If the node is none of the supported kinds.
    """
    # bool before int: bool is an int subclass
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, int):
        return NodeKind.INTEGER
    if isinstance(node, float):
        return NodeKind.FLOAT
    if node is None:
        return NodeKind.NULL
    if isinstance(node, Mapping):
        return NodeKind.MAPPING
    if isinstance(node, (list, tuple)):
        return NodeKind.SEQUENCE
    raise UnsupportedStructureError(path=path, type_name=type(node).__name__)


def format_float(value: float) -> str:
    """Format a float using the shortest representation that round-trips.

    Plain notation is used while the decimal exponent lies in [-4, 6);
    otherwise exponential notation with a lowercase ``e``, an explicit sign,
    and at least two exponent digits.

    Example:
        >>> format_float(3.14159)
        '3.14159'
        >>> format_float(-4.296e-99)
        '-4.296e-99'
        >>> format_float(1e6)
        '1e+06'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    # repr() yields the shortest round-trip digits; Decimal exposes them
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    point = len(digits) + exponent
    exp10 = point - 1
    text = "-" if sign else ""

    if exp10 < -4 or exp10 >= 6:
        text += digits[0]
        if len(digits) > 1:
            text += "." + digits[1:]
        text += "e" + ("+" if exp10 >= 0 else "-") + f"{abs(exp10):02d}"
    elif point <= 0:
        text += "0." + "0" * -point + digits
    elif point >= len(digits):
        text += digits + "0" * (point - len(digits))
    else:
        text += digits[:point] + "." + digits[point:]
    return text


def format_scalar(value: Any, kind: NodeKind) -> str:
    """Render a scalar node as its canonical string form."""
    if kind is NodeKind.STRING:
        return value
    if kind is NodeKind.BOOLEAN:
        return "true" if value else "false"
    if kind is NodeKind.INTEGER:
        return str(value)
    if kind is NodeKind.FLOAT:
        return format_float(value)
    raise ValueError(f"Not a scalar kind: {kind}")


def _member_name(name: Any, path: str) -> str:
    kind = classify(name, path)
    if kind not in _SCALAR_KINDS:
        raise UnsupportedStructureError(path=path, type_name=f"mapping key of type {type(name).__name__}")
    return format_scalar(name, kind)


def _join(prefix: str, name: str) -> str:
    if not prefix:
        return name
    return f"{prefix}.{name}"


def flatten(node: Any, prefix: str = "") -> dict[str, str]:
    """Flatten a parsed document tree into a new dotted-key mapping.

    Empty mappings, empty sequences, and null values produce no entries.

    Args:
        node: Parsed mapping, sequence, or scalar.
        prefix: Dotted path of node; empty for a document root.

    Returns:
        Mapping of dotted key to string value.

    Raises:
        UnsupportedStructureError: If the tree contains a node of an
            unsupported type, a reference cycle, or a scalar at the root.
    """
    result: dict[str, str] = {}
    active: set[int] = set()

    def _walk(current: Any, path: str) -> None:
        kind = classify(current, path)

        if kind is NodeKind.NULL:
            return

        if kind is NodeKind.MAPPING or kind is NodeKind.SEQUENCE:
            if id(current) in active:
                raise UnsupportedStructureError(path=path, type_name="cyclic reference")
            active.add(id(current))
            if kind is NodeKind.MAPPING:
                for name, child in current.items():
                    _walk(child, _join(path, _member_name(name, path)))
            else:
                for index, child in enumerate(current):
                    _walk(child, _join(path, str(index)))
            active.discard(id(current))
            return

        if not path:
            raise UnsupportedStructureError(path=path, type_name=f"scalar {type(current).__name__} at document root")
        result[path] = format_scalar(current, kind)

    _walk(node, prefix)
    return result


def load_structured(text: str) -> Any:
    """Parse YAML (or JSON, a YAML subset) text into Python objects.

    Raises:
        SourceParseError: If the text is not well-formed YAML.
    """
    try:
        return yaml.load(text, Loader=_ConfigLoader)
    except yaml.YAMLError as e:
        raise SourceParseError(
            message=f"Invalid YAML/JSON: {e}",
            source_format="structured",
            cause=e,
        ) from e


def parse_structured(text: str) -> dict[str, str]:
    """Parse YAML/JSON text and flatten it into dotted keys.

    An empty document yields an empty mapping. Any other document root that
    is not a mapping is rejected, which lets callers fall back to another
    format for INI files and plain text.

    Raises:
        SourceParseError: If the text is not YAML/JSON or its root is not a mapping.
        UnsupportedStructureError: If the document contains unsupported nodes.
    """
    data = load_structured(text)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise SourceParseError(
            message=f"Document root must be a mapping, got {type(data).__name__}",
            source_format="structured",
        )
    properties = flatten(data)
    logger.debug("Flattened structured document into %d properties", len(properties))
    return properties
