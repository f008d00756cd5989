import logging
from typing import Any, Self

from ..access import SheetsAccess
from ..config import SheetsConfig
from ..errors import SheetNotFound
from . import ops
from .a1 import index_to_letters, parse_range, qualify_range
from .groups import plan_detail_range
from .requests import (AddDimensionGroupRequest, GoogleSheetsUpdateRequest,
                       GoogleSheetsUpdateRequestResponse, RepeatCellRequest,
                       UpdateDimensionGroupRequest)
from .resources import (AppendValuesResponse, CellData, CellFormat, Color,
                        DimensionGroup, DimensionRange, TextFormat,
                        UpdateValuesResponse)
from .values import normalize

logger = logging.getLogger(__name__)

class GoogleSheet():
    """
    A spreadsheet plus the sheet (tab) within it that calls default to.
    In Google Sheets parlance a 'sheet' is an individual tab of the parent
    'spreadsheet'.  Values calls address the tab by title inside the A1
    range, batchUpdate requests address it by its numeric sheetId, so the
    title is resolved to an ID on demand.

    All ranges passed in are A1 without a title, 'A1:C10', the title comes
    from sheet_name or the configured default.
    """
    def __init__(self, config: SheetsConfig,
                 access: SheetsAccess|None = None) -> None:
        if not config:
            raise ValueError("A spreadsheet ID is required")
        self._config = config
        self._access = access if access is not None else SheetsAccess(config)
        self._sheet_ids = {}

    def __str__(self) -> str:
        return f"{self._config.sheetId}:{self._config.sheetName}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def spreadsheet_id(self) -> str:
        return self._config.sheetId

    @property
    def sheet_name(self) -> str:
        return self._config.sheetName

    @property
    def service(self):
        return self._access.get_service("sheets", "v4")

    def _title(self, sheet_name: str|None) -> str:
        return sheet_name if sheet_name is not None else self._config.sheetName

    def sheet_id(self, sheet_name: str|None = None) -> int:
        """
        Numeric ID of a sheet by its title.  IDs are constant for the life of a
        sheet (unlike its index) so they are looked up once and remembered.
        """
        title = self._title(sheet_name)
        sid = self._sheet_ids.get(title, None)
        if sid is None:
            ss = ops.get(self.service, self.spreadsheet_id,
                         fields="sheets(properties(sheetId,title))")
            found = ss.find_sheet(title)
            if found is None:
                raise SheetNotFound(f"Sheet name not found: {title}")
            # one fetch returns every sheet so remember them all
            for s in ss.sheets:
                self._sheet_ids[s.properties.title] = s.properties.sheetId
            sid = found.properties.sheetId
        return sid

    def read(self, range: str, sheet_name: str|None = None) -> list[dict[str,Any]]:
        """
        Read a range as a list of rows, each a dict of column letter to value.
        Letters start at 'A' for the first column returned whatever column the
        range starts in, and trailing empty cells are absent from their row.
        """
        a1 = qualify_range(self._title(sheet_name), range)
        vr = ops.getValues(self.service, self.spreadsheet_id, a1)
        rows = []
        for row in vr.values:
            rows.append({index_to_letters(i): cell for i, cell in enumerate(row)})
        return rows

    def insert(self, values: Any, range: str,
               sheet_name: str|None = None) -> AppendValuesResponse:
        """
        Append rows after the table found in range.
        values can be a list of rows or a single flat row, see values.normalize().
        """
        a1 = qualify_range(self._title(sheet_name), range)
        return ops.appendValues(self.service, self.spreadsheet_id, a1, normalize(values))

    def update(self, values: Any, range: str,
               sheet_name: str|None = None) -> UpdateValuesResponse:
        """
        Overwrite cells starting at the top left of range.
        values can be a list of rows or a single flat row, see values.normalize().
        """
        a1 = qualify_range(self._title(sheet_name), range)
        return ops.updateValues(self.service, self.spreadsheet_id, a1, normalize(values))

    def batchUpdate(self, request: GoogleSheetsUpdateRequest|dict) -> GoogleSheetsUpdateRequestResponse:
        return ops.batchUpdate(self.service, self.spreadsheet_id, request)

    def updateRequests(self, sheet_name: str|None = None):
        """
        Start a batchUpdate() chain, makes it easy to append operations to pack
        into a request before sending it.
        """
        return _SheetUpdateChain(self, self._title(sheet_name))

    def setColor(self, range: str, color: str|None = None,
                 backGroundColor: str|None = None,
                 sheet_name: str|None = None) -> GoogleSheetsUpdateRequestResponse|None:
        """
        Set text and/or background color of a range from hex codes, '#ff0000'.
        Passing neither color does nothing.
        """
        if color is None and backGroundColor is None:
            logger.info("setColor(%s): no colors given, nothing to do", range)
            return None
        return self.updateRequests(sheet_name).repeatCellColor(range, color, backGroundColor).execute()

    def closeDimensionGroup(self, presentRowNumber: int, lastRowNumber: int,
                            indexOffset: int = 0, willClose: bool = True,
                            sheet_name: str|None = None) -> GoogleSheetsUpdateRequestResponse|None:
        """
        Group the detail rows under a parent row and optionally collapse them.
        Rows are 1-based, indexOffset shifts both for tables with header rows.
        If there are no rows between the parent and last row nothing is sent.
        """
        chain = self.updateRequests(sheet_name).groupRows(presentRowNumber, lastRowNumber,
                                                          indexOffset, willClose)
        if not chain:
            logger.info("closeDimensionGroup(%d, %d): no detail rows, nothing to do",
                        presentRowNumber, lastRowNumber)
            return None
        return chain.execute()

class _SheetUpdateChain():
    """
    Utility class for building up a chain of update requests.
    The spreadsheet batchUpdate method can take a list of requests at once
    and it is more efficient to provide a number of them at once rather than
    request/response/request/response/etc.  So this provides a means to add
    a chain of requests and then terminate with execute().
    The idea is you would:
    response = sheet.updateRequests().request1(params).request2(params).execute()
    Where there can be any requestN(params)
    """
    def __init__(self, sheet: GoogleSheet, title: str) -> None:
        self._sheet = sheet
        self._title = title
        self._requests = []

    def __len__(self) -> int:
        return len(self._requests)

    @property
    def requests(self) -> list:
        return list(self._requests)

    @property
    def sheet_id(self) -> int:
        return self._sheet.sheet_id(self._title)

    def execute(self) -> GoogleSheetsUpdateRequestResponse:
        """
        Terminate a request chain and send the actual batchUpdate
        """
        if self._requests:
            return self._sheet.batchUpdate(GoogleSheetsUpdateRequest(self._requests))
        return GoogleSheetsUpdateRequestResponse(self._sheet.spreadsheet_id)

    def repeatCellColor(self, range: str, color: str|None = None,
                        backGroundColor: str|None = None) -> Self:
        """
        Apply text (color) and/or background (backGroundColor) color to every
        cell in range.  Only the supplied colors are in the fields mask so other
        formatting is kept.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#repeatcellrequest
        """
        fmt = CellFormat()
        mask = []
        if color is not None:
            fmt.textFormat = TextFormat(foregroundColor=Color.from_hex(color))
            mask.append('userEnteredFormat.textFormat.foregroundColor')
        if backGroundColor is not None:
            fmt.backgroundColor = Color.from_hex(backGroundColor)
            mask.append('userEnteredFormat.backgroundColor')
        if mask:
            grid = parse_range(range, self.sheet_id)
            self._requests.append(RepeatCellRequest(range=grid,
                                                    cell=CellData(userEnteredFormat=fmt),
                                                    fields=','.join(mask)))
        return self

    def groupRows(self, presentRowNumber: int, lastRowNumber: int,
                  indexOffset: int = 0, collapse: bool = True) -> Self:
        """
        Add a row group for the detail rows under presentRowNumber, and a
        collapse of that group at depth 1 if collapse is set.
        Adds nothing when there are no detail rows.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#adddimensiongrouprequest
        """
        detail = plan_detail_range(presentRowNumber, lastRowNumber, indexOffset)
        if detail is None:
            return self
        sid = self.sheet_id
        self._requests.append(AddDimensionGroupRequest(
            DimensionRange(sid, "ROWS", detail.startIndex, detail.endIndex)))
        if collapse:
            group = DimensionGroup(range=DimensionRange(sid, "ROWS", detail.startIndex, detail.endIndex),
                                   depth=1, collapsed=True)
            self._requests.append(UpdateDimensionGroupRequest(dimensionGroup=group, fields='collapsed'))
        return self
