"""
Turning whatever the caller hands us into the list of rows of strings the
values endpoints accept.

Accepted shapes:
    [[A1, B1, C1], [A2, B2, C2]]    several rows
    [A1, B1, C1]                    one row, wrapped to [[A1, B1, C1]]
    [[A1, [x, y]], ...]             a list inside a cell is joined with newlines,
                                    anything nested deeper is written as JSON

Note the 'nothing nested means one row' rule also applies to a single column
passed flat, [A1, A2, A3] is written across a row not down a column.  Pass
[[A1], [A2], [A3]] for a column.

Nesting is only followed MAX_NESTING levels down.  A cell element that goes
deeper than that cannot be JSON encoded and is written as an empty string.
"""
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

MAX_NESTING = 64

@dataclass(frozen=True)
class Scalar():
    """A single cell value"""
    value: Any = field(default=None)

    def text(self) -> str:
        v = self.value
        if v is None:
            return ""
        if isinstance(v, bool):
            return "TRUE" if v else "FALSE"
        if isinstance(v, bytes):
            return v.decode("utf-8", errors="replace")
        return str(v)

    def plain(self) -> Any:
        """Value as it should appear inside a JSON encoded cell"""
        v = self.value
        if isinstance(v, bytes):
            return v.decode("utf-8", errors="replace")
        if v is None or isinstance(v, (str, int, float, bool)):
            return v
        return str(v)

@dataclass(frozen=True)
class Sequence():
    """
    A list of cell values.  keys is set when this came from a mapping so it
    can be written back out as a JSON object.
    """
    items: tuple = field(default_factory=tuple)
    keys: tuple|None = field(default=None)
    # set when something below was cut off at MAX_NESTING
    truncated: bool = field(default=False)

    def plain(self) -> Any:
        vals = [i.plain() for i in self.items]
        if self.keys is not None:
            return {str(k): v for k, v in zip(self.keys, vals)}
        return vals

    def text(self) -> str:
        """
        Flatten into one cell, each element on its own line with nested
        sequences as compact JSON.
        """
        parts = []
        for i in self.items:
            if isinstance(i, Sequence) and i.truncated:
                parts.append("")
            elif isinstance(i, Sequence):
                parts.append(json.dumps(i.plain(), ensure_ascii=False, separators=(",", ":")))
            else:
                parts.append(i.text())
        return "\n".join(parts)

CellValue = Scalar | Sequence

def _any_truncated(items: tuple) -> bool:
    return any(isinstance(i, Sequence) and i.truncated for i in items)

def to_cell_value(value: Any, depth: int = 0) -> CellValue:
    """
    Classify a native value.  Strings and bytes are scalars even though they
    are iterable, mappings become sequences of their values that remember
    their keys.  Containers more than MAX_NESTING levels down are not walked,
    they become an empty truncated Sequence.
    """
    if isinstance(value, (Scalar, Sequence)):
        return value
    if isinstance(value, (str, bytes, bytearray)):
        return Scalar(bytes(value) if isinstance(value, bytearray) else value)
    if isinstance(value, (Mapping, Iterable)) and depth >= MAX_NESTING:
        return Sequence(truncated=True)
    if isinstance(value, Mapping):
        items = tuple(to_cell_value(v, depth + 1) for v in value.values())
        return Sequence(items, tuple(value.keys()), _any_truncated(items))
    if isinstance(value, Iterable):
        items = tuple(to_cell_value(v, depth + 1) for v in value)
        return Sequence(items, None, _any_truncated(items))
    return Scalar(value)

def normalize(values: Any) -> list[list[str]]:
    """
    Coerce nested input into a rectangular-per-row matrix of strings.

    1. If no top level element is a sequence the input is a single row.
    2. A top level scalar becomes a one cell row.
    3. A sequence in a cell is flattened to one string, see Sequence.text().
    4. Rows are rebuilt as plain lists so mappings lose their keys.

    Never raises, empty input gives no rows.  Running it on its own output
    gives the same output.
    """
    top = to_cell_value(values)
    if isinstance(top, Scalar):
        top = Sequence((top,))
    if not top.items:
        return []
    rows = top.items
    if not any(isinstance(r, Sequence) for r in rows):
        rows = (Sequence(rows),)

    matrix = []
    for r in rows:
        cells = r.items if isinstance(r, Sequence) else (r,)
        matrix.append([c.text() for c in cells])
    return matrix
