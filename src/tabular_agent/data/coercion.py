"""Cell classification and numeric coercion.

Every component that needs to know whether a cell is missing, numeric or
text goes through this module, so "missing" and "numeric" have a single
definition across statistics, analysis, sorting, cleaning and charts.

Numeric parsing follows the rules of a permissive ``Number()`` conversion:
surrounding whitespace is ignored, decimal and exponent forms are accepted,
as are ``0x``/``0o``/``0b`` prefixed integers and ``Infinity``. Strings such
as ``"nan"``, ``"inf"`` or ``"1_000"`` are text.
"""

from __future__ import annotations

import math
import re
from typing import Any

from ..types import CellKind

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_PREFIXED_RE = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")
_INFINITY_RE = re.compile(r"^[+-]?Infinity$")


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_missing(value: Any) -> bool:
    """True for None, NaN floats and strings that are blank after trimming."""
    if value is None or _is_nan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _parse_number(text: str) -> float | None:
    txt = text.strip()
    if not txt:
        return None
    if _DECIMAL_RE.match(txt):
        return float(txt)
    if _PREFIXED_RE.match(txt):
        return float(int(txt, 0))
    if _INFINITY_RE.match(txt):
        return -math.inf if txt.startswith("-") else math.inf
    return None


def try_numeric(value: Any) -> float | None:
    """Coerce a cell to a float, or None when it is not numeric.

    Booleans are not numeric. This is the numeric branch of ``classify``,
    so ``try_numeric(v) is not None`` exactly when ``classify(v)`` is NUMERIC.
    """
    if isinstance(value, bool) or is_missing(value):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return _parse_number(value)
    return None


def classify(value: Any) -> CellKind:
    """Classify a raw cell value."""
    if value is None or _is_nan(value):
        return CellKind.NULL
    if isinstance(value, str) and value.strip() == "":
        return CellKind.EMPTY
    if isinstance(value, bool):
        return CellKind.BOOLEAN
    if try_numeric(value) is not None:
        return CellKind.NUMERIC
    return CellKind.TEXT


def display_string(value: Any) -> str:
    """String form of a cell for labels and grouping keys.

    Integral floats drop their fractional part (``10.0`` -> ``"10"``) and
    booleans are lower-cased, so labels look the same whether the cell came
    from a CSV string or a typed JSON value.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def hashable_cell(value: Any) -> Any:
    """Key that tells raw cell values apart by type as well as value.

    ``"1"``, ``1`` and ``True`` are three distinct values while ``1`` and
    ``1.0`` are the same number; NaN cells collapse into one.
    """
    if _is_nan(value):
        return ("nan",)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return ("number", value)
    try:
        hash(value)
    except TypeError:
        return (type(value).__name__, repr(value))
    return (type(value).__name__, value)
