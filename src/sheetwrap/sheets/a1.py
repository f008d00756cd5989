"""
A1 notation helpers.
See https://developers.google.com/sheets/api/guides/concepts#cell
For translating the A1 strings a user types into the numeric coordinates
the batchUpdate requests want.

A general A1 range has the form:

    <start col><start row>:<end col><end row>

Some notes on the above:
    All rows are integers and are 1 based.
    All cols are alphabetical, A, B, ... Z, AA, AB ... with no upper limit here,
    the service enforces its own column limit.
    Either the row or the col part may be missing, which means 'unbounded':
        A1      a single cell
        A1:C10  a rectangle, 10 rows by 3 cols
        2:2     the whole of row 2
        A:Z     the whole of cols A through Z
    Both ends of a range must have the same parts present, so A:3 or A1:B
    are rejected rather than guessed at.

Columns translate to a 0-based index via bijective base 26, that is digits
1-26 for A-Z with no zero digit, so 'Z' is 25 and 'AA' is 26.
"""
import re
from dataclasses import dataclass, field

from ..errors import InvalidReference, InvalidColumnLetters
from .resources import GridRange

# used with fullmatch, ASCII only so no unicode digits or letters slip through
_A1_CELL_RE = re.compile(r"([A-Z]+)([0-9]+)")
_A1_COL_RE = re.compile(r"[A-Z]+")
_A1_ROW_RE = re.compile(r"[0-9]+")
# sheet titles that do not need quoting in a range
_A1_PLAIN_SHEET_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

def index_to_letters(index: int) -> str:
    """
    Translate a 0-based column index to its letters, 0 -> 'A', 26 -> 'AA'.

    index:  0-based column index, must not be negative.

    return: Column letters.
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidReference(f"column index must be an int: {index!r}")
    if index < 0:
        raise InvalidReference(f"column index must be >= 0: {index}")
    letters = ""
    n = index + 1
    while n > 0:
        mod = (n - 1) % 26
        letters = chr(65 + mod) + letters
        n = (n - mod) // 26
    return letters

def letters_to_index(letters: str) -> int:
    """
    Translate column letters to a 0-based index, 'A' -> 0, 'AB' -> 27.
    Case insensitive.

    letters: Column letters, A-Z only.

    return: 0-based column index.
    """
    c = str(letters)
    # upper() maps some non ascii letters into A-Z, 'ß' -> 'SS'
    if not c.isascii():
        raise InvalidColumnLetters(f"invalid column letters: {letters!r}")
    c = c.upper()
    if not _A1_COL_RE.fullmatch(c):
        raise InvalidColumnLetters(f"invalid column letters: {letters!r}")
    num = 0
    for ch in c:
        num = num * 26 + (ord(ch) - 64)
    return num - 1

@dataclass(frozen=True)
class CellRef():
    """
    One end of an A1 range.  row is 1-based, col is the 0-based column index,
    None in either means that part was not given.
    """
    row: int|None = field(default=None)
    col: int|None = field(default=None)

    def __post_init__(self) -> None:
        if self.row is None and self.col is None:
            raise InvalidReference("a cell reference needs a row, a column or both")
        if self.row is not None and self.row < 1:
            raise InvalidReference(f"rows are 1-based, got: {self.row}")

    @property
    def shape(self) -> tuple[bool,bool]:
        """Which of (row, col) are present"""
        return (self.row is not None, self.col is not None)

def parse_ref(ref: str) -> CellRef:
    """
    Parse a single reference, 'AB23', 'AB' or '23'.
    Whitespace anywhere is ignored and letters may be any case.
    """
    r = re.sub(r"\s+", "", str(ref))
    if not r.isascii():
        raise InvalidReference(f"invalid A1 reference: {ref!r}")
    r = r.upper()
    m = _A1_CELL_RE.fullmatch(r)
    if m:
        return CellRef(row=int(m.group(2)), col=letters_to_index(m.group(1)))
    if _A1_COL_RE.fullmatch(r):
        return CellRef(row=None, col=letters_to_index(r))
    if _A1_ROW_RE.fullmatch(r):
        return CellRef(row=int(r), col=None)
    raise InvalidReference(f"invalid A1 reference: {ref!r}")

def parse_range(a1_range: str, sheet_id: int) -> GridRange:
    """
    Convert an A1 range without a sheet title into a GridRange for sheet_id.
    A range without ':' is treated as both its start and its end.

    Row indexes come out 0-based and end exclusive, so 'A2' gives
    startRowIndex 1, endRowIndex 2.  Missing rows or cols are left as None
    which means unbounded in that direction.
    """
    parts = re.sub(r"\s+", "", str(a1_range)).split(":")
    if len(parts) > 2:
        raise InvalidReference(f"invalid A1 range, more than one ':': {a1_range!r}")
    start = parse_ref(parts[0])
    end = parse_ref(parts[1]) if len(parts) == 2 else start
    if start.shape != end.shape:
        raise InvalidReference(f"invalid A1 range, start and end differ in kind: {a1_range!r}")

    grid = GridRange(sheetId=int(sheet_id))
    if start.row is not None:
        grid.startRowIndex = start.row - 1
        grid.endRowIndex = end.row if end.row is not None else start.row
    if start.col is not None:
        grid.startColumnIndex = start.col
        grid.endColumnIndex = (end.col if end.col is not None else start.col) + 1
    return grid

def qualify_range(sheet_name: str|None, a1_range: str) -> str:
    """
    Prefix a range with its sheet title for the values endpoints,
    'Sheet1!A1:B2'.  Titles with spaces or other non word characters
    are single quoted with embedded quotes doubled.
    """
    title = str(sheet_name) if sheet_name else ""
    rng = str(a1_range).strip()
    if not title:
        return rng
    if not _A1_PLAIN_SHEET_RE.fullmatch(title):
        title = "'" + title.replace("'", "''") + "'"
    return f"{title}!{rng}" if rng else title
