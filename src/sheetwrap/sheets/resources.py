"""
Class implementations of sheets request resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  The nested aspect does cause some headaches as there
is a handy dataclass.asdict() method to get a dict translation of the
class fields, which is exactly what that request client needs, but
there's no inverse support, as in initializing a dataclass from a dict.
So dataclasses with dataclasses as fields convert in fixup().
Only the resources this package sends or reads back are implemented.
"""
import re
from dataclasses import dataclass, field
from typing import List, Self

from ..errors import InvalidColor
from ..resources import GoogleWorkSpaceResourceBase

class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._VALID_VALUE_RENDER_OPTIONS.get(str(option).upper(), "")

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._VALID_DIMENSION_OPTIONS.get(str(dim).upper(), "")

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._VALID_VALUE_INPUT_OPTIONS.get(str(option).upper(), "")

@dataclass
class Color(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#color
    Components are 0-1 floats.  alpha is left out unless set, the service
    renders a missing alpha as solid.
    """
    red: int|float = field(default=0)
    green: int|float = field(default=0)
    blue: int|float = field(default=0)
    alpha: int|float|None = field(default=None)

    _HEX_RE = re.compile(r"[0-9a-fA-F]{6}")

    @classmethod
    def from_hex(cls, hex: str) -> Self:
        """
        Translate a css style hex code, 'ff00aa', '#ff00aa' or the short
        form 'f0a' which expands to 'ff00aa'.
        """
        h = str(hex).strip().lstrip('#')
        if len(h) == 3:
            h = ''.join(c * 2 for c in h)
        if not cls._HEX_RE.fullmatch(h):
            raise InvalidColor(f"invalid hex color code: {hex!r}")
        return cls(red=int(h[0:2], 16) / 255,
                   green=int(h[2:4], 16) / 255,
                   blue=int(h[4:6], 16) / 255)

@dataclass
class TextFormat(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#textformat
    Only the fields we set are modelled.
    """
    foregroundColor: Color|dict|None = field(default=None)
    bold: bool|None = field(default=None)
    italic: bool|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.foregroundColor is not None and not isinstance(self.foregroundColor, Color):
            self.foregroundColor = Color.from_base(self.foregroundColor)

@dataclass
class CellFormat(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#cellformat"""
    backgroundColor: Color|dict|None = field(default=None)
    textFormat: TextFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.backgroundColor is not None and not isinstance(self.backgroundColor, Color):
            self.backgroundColor = Color.from_base(self.backgroundColor)
        if self.textFormat is not None and not isinstance(self.textFormat, TextFormat):
            self.textFormat = TextFormat.from_base(self.textFormat)

@dataclass
class CellData(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#celldata"""
    userEnteredFormat: CellFormat|dict|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.userEnteredFormat is not None and not isinstance(self.userEnteredFormat, CellFormat):
            self.userEnteredFormat = CellFormat.from_base(self.userEnteredFormat)

@dataclass
class GridRange(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
    All indexes are 0-based and end exclusive.  A None index means unbounded
    on that side and is left out of the request.
    """
    sheetId: int = field(default=-1)
    startRowIndex: int|None = field(default=None)
    endRowIndex: int|None = field(default=None)
    startColumnIndex: int|None = field(default=None)
    endColumnIndex: int|None = field(default=None)

    def __bool__(self) -> bool:
        return self.sheetId >= 0

    @property
    def num_rows(self) -> int:
        """Number of rows or 0 if rows are unbounded"""
        if self.startRowIndex is None or self.endRowIndex is None:
            return 0
        return self.endRowIndex - self.startRowIndex

    @property
    def num_cols(self) -> int:
        """Number of cols or 0 if cols are unbounded"""
        if self.startColumnIndex is None or self.endColumnIndex is None:
            return 0
        return self.endColumnIndex - self.startColumnIndex

@dataclass
class DimensionRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/DimensionRange"""
    sheetId: int = field(default=-1)
    dimension: str = field(default="")
    startIndex: int|None = field(default=None)
    endIndex: int|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        if self.dimension:
            d = str(self.dimension)
            self.dimension = GoogleSheetsEnum.dimension(d)
            if not self.dimension:
                raise ValueError(f"Invalid dimension value: {d}")

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.dimension)

@dataclass
class DimensionGroup(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#dimensiongroup"""
    range: DimensionRange|dict = field(default_factory=dict)
    depth: int|None = field(default=None)
    collapsed: bool|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = self.range if isinstance(self.range, DimensionRange) else DimensionRange.from_base(self.range)

@dataclass
class ValueRange(GoogleWorkSpaceResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="")
    values: list[list] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            self.majorDimension = GoogleSheetsEnum.dimension(str(self.majorDimension))

    def __bool__(self) -> bool:
        return bool(self.range)

@dataclass
class UpdateValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse
    """
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)
    updatedData: ValueRange|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.updatedData = self.updatedData if isinstance(self.updatedData, ValueRange) else ValueRange.from_base(self.updatedData)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) and bool(self.updatedRange)

@dataclass
class AppendValuesResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#response-body
    """
    spreadsheetId: str = field(default="")
    tableRange: str = field(default="")
    updates: UpdateValuesResponse|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.updates = self.updates if isinstance(self.updates, UpdateValuesResponse) else UpdateValuesResponse.from_base(self.updates)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

@dataclass
class SheetProperties(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties
    We usually fetch with a fields mask of just sheetId and title so everything
    else is optional.
    """
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int|None = field(default=None)
    sheetType: str|None = field(default=None)

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.title)

    def __str__(self) -> str:
        if self:
            return f"{self.title}({self.sheetId})"
        return "<invalid sheet>"

@dataclass
class Sheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet within a spreadsheet
    """
    properties: SheetProperties|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = self.properties if isinstance(self.properties, SheetProperties) else SheetProperties.from_base(self.properties)

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)

@dataclass
class Spreadsheet(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet, trimmed to what we look at.
    """
    spreadsheetId: str = field(default="")
    sheets: List[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.sheets = [s if isinstance(s, Sheet) else Sheet.from_base(s) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) or bool(self.sheets)

    def find_sheet(self, title: str) -> Sheet|None:
        """Sheet with exactly this title, or None"""
        for s in self.sheets:
            if s.properties.title == title:
                return s
        return None
