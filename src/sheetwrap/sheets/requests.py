from dataclasses import dataclass, field
from typing import List
import re

from ..resources import GoogleWorkSpaceResourceBase
from .resources import CellData, DimensionGroup, DimensionRange, GridRange

class GoogleSheetsUpdateRequestBase(GoogleWorkSpaceResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.
    """
    def to_request(self) -> dict[str,dict]:
        name = self.__class__.__name__
        # need to strip off the trailing 'Request' class name and
        # set the first letter to lower case.  could be done
        # several ways but lets go re
        request = {}
        m = re.match("^([a-zA-Z])([a-zA-Z]+)Request$", name)
        if m:
            key = m.group(1).lower() + m.group(2)
            request[key] = self.to_base()
        else:
            raise RuntimeError("Invalid Google Sheets request format for class name")

        return request

# need to add request here and pull the name out via self.__class__.__name__

@dataclass
class RepeatCellRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#repeatcellrequest
    fields is the mask of what in cell to apply, everything else in the
    range is left alone.
    """
    range: GridRange|dict = field(default_factory=dict)
    cell: CellData|dict = field(default_factory=dict)
    fields: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = self.range if isinstance(self.range, GridRange) else GridRange.from_base(self.range)
        self.cell = self.cell if isinstance(self.cell, CellData) else CellData.from_base(self.cell)

@dataclass
class AddDimensionGroupRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#adddimensiongrouprequest
    """
    range: DimensionRange|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = self.range if isinstance(self.range, DimensionRange) else DimensionRange.from_base(self.range)

@dataclass
class UpdateDimensionGroupRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#updatedimensiongrouprequest
    The group is matched on its range and depth, fields says which of its
    properties to change.
    """
    dimensionGroup: DimensionGroup|dict = field(default_factory=dict)
    fields: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.dimensionGroup = self.dimensionGroup if isinstance(self.dimensionGroup, DimensionGroup) else DimensionGroup.from_base(self.dimensionGroup)

@dataclass
class GoogleSheetsUpdateRequest(GoogleSheetsUpdateRequestBase):
    """
    Generate a GSheet Batch Update request body.
    Most likely you'd use make_request() directly to generate
    the request dict JIT
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: List[GoogleSheetsUpdateRequestBase|dict]
    includeSpreadsheetInResponse: bool = field(default=False)
    responseRanges: List[str] = field(default_factory=list)
    responseIncludeGridData: bool = field(default=False)

    def to_base(self) -> dict:
        b = {
            'requests': [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else dict(r)
                         for r in self.requests],
            'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse,
            'responseIncludeGridData': self.responseIncludeGridData
        }
        if self.responseRanges:
            b['responseRanges'] = [str(r) for r in self.responseRanges]
        return b

def make_request(requests: list[GoogleSheetsUpdateRequestBase|dict],
                 includeSpreadsheetInResponse: bool = False,
                 responseRanges: list[str]|None = None,
                 responseIncludeGridData: bool = False) -> dict:
    """
    Convenience function to assemble the request with the usual parameters.
    """
    return GoogleSheetsUpdateRequest(requests=list(requests),
                                     includeSpreadsheetInResponse=includeSpreadsheetInResponse,
                                     responseRanges=list(responseRanges or []),
                                     responseIncludeGridData=responseIncludeGridData).to_base()

@dataclass
class GoogleSheetsUpdateRequestResponse(GoogleWorkSpaceResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    replies: List[dict] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)
