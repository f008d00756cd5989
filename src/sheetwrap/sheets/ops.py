"""
Thin wrappers over the Sheets v4 service calls we use.
Each takes the built service (see SheetsAccess.get_service) so they can
be driven with any object exposing the same resource methods.
HttpErrors come back out as SheetOperationError naming the call and range.
"""
import logging
from functools import wraps

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from ..errors import SheetOperationError
from .requests import GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse
from .resources import (AppendValuesResponse, GoogleSheetsEnum, Spreadsheet,
                        UpdateValuesResponse, ValueRange)

logger = logging.getLogger(__name__)

def _wrap_http_errors(operation: str, has_range: bool = True):
    """
    Decorator turning a googleapiclient HttpError into a SheetOperationError.
    With has_range the third positional or the range keyword argument is named
    in the message.
    """
    def _inner_decorator(f):
        @wraps(f)
        def wrapped(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except HttpError as e:
                rng = ""
                if has_range:
                    rng = kwargs.get("range", args[2] if len(args) > 2 else "")
                where = f" (range: {rng})" if rng else ""
                raise SheetOperationError(f"{operation} failed{where}: {e}",
                                          operation=operation, range=rng) from e
        return wrapped
    return _inner_decorator

def _value_input(valueInputOption: str) -> str:
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    if not value_input:
        raise ValueError(f"Invalid valueInputOption value: {valueInputOption}")
    return value_input

@_wrap_http_errors("get", has_range=False)
def get(service: Resource, spreadsheetId: str, fields: str = "") -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    fields is a partial response mask, for example 'sheets(properties(sheetId,title))'.
    """
    args = {"spreadsheetId": spreadsheetId}
    if fields:
        args["fields"] = fields
    logger.debug("spreadsheets.get %s fields=%s", spreadsheetId, fields)
    response = service.spreadsheets().get(**args).execute()
    return Spreadsheet.from_base(response)

@_wrap_http_errors("batchUpdate", has_range=False)
def batchUpdate(service: Resource, spreadsheetId: str,
                request: GoogleSheetsUpdateRequest|dict) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    This is for formatting, grouping and other structural changes, not cell
    values which go through the values resource.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else request
    logger.debug("spreadsheets.batchUpdate %s with %d request(s)", spreadsheetId, len(body.get('requests', [])))
    response = service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetId, body=body).execute()
    return GoogleSheetsUpdateRequestResponse.from_base(response)

@_wrap_http_errors("getValues")
def getValues(service: Resource, spreadsheetId: str, range: str,
              valueRenderOption: str = "FORMATTED") -> ValueRange:
    """
    Wrapper for calling get() on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
    Trailing empty rows and cells are not returned by the service so rows
    can be ragged or missing entirely.
    """
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not value_render:
        raise ValueError(f"Invalid valueRenderOption value: {valueRenderOption}")
    logger.debug("values.get %s %s", spreadsheetId, range)
    response = service.spreadsheets().values().get(spreadsheetId=spreadsheetId, range=range,
                                                   valueRenderOption=value_render).execute()
    return ValueRange.from_base(response)

@_wrap_http_errors("append")
def appendValues(service: Resource, spreadsheetId: str, range: str,
                 values: list[list],
                 valueInputOption: str = "USER_ENTERED") -> AppendValuesResponse:
    """
    Wrapper for calling append() on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
    The service finds the table in range and writes after its last row.
    """
    body = ValueRange(range=range, values=values).trim()
    logger.debug("values.append %s %s rows=%d", spreadsheetId, range, len(values))
    response = service.spreadsheets().values().append(spreadsheetId=spreadsheetId, range=range,
                                                      valueInputOption=_value_input(valueInputOption),
                                                      body=body).execute()
    return AppendValuesResponse.from_base(response)

@_wrap_http_errors("update")
def updateValues(service: Resource, spreadsheetId: str, range: str,
                 values: list[list],
                 valueInputOption: str = "USER_ENTERED") -> UpdateValuesResponse:
    """
    Wrapper for calling update() on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/update
    Overwrites starting at the top left of range.
    """
    body = ValueRange(range=range, values=values).trim()
    logger.debug("values.update %s %s rows=%d", spreadsheetId, range, len(values))
    response = service.spreadsheets().values().update(spreadsheetId=spreadsheetId, range=range,
                                                      valueInputOption=_value_input(valueInputOption),
                                                      body=body).execute()
    return UpdateValuesResponse.from_base(response)
