from unittest.mock import MagicMock

import httplib2
import pytest
from googleapiclient.errors import HttpError

from sheetwrap.errors import InvalidColor, InvalidReference, SheetNotFound, SheetOperationError
from sheetwrap.sheets.sheet import GoogleSheet

def _http_error(status: int = 400) -> HttpError:
    return HttpError(httplib2.Response({'status': status}), b'{"error": {"message": "bad"}}')

def _batch_body(service) -> dict:
    return service.spreadsheets.return_value.batchUpdate.call_args.kwargs['body']

def test_requires_spreadsheet_id(access):
    from sheetwrap.config import SheetsConfig
    with pytest.raises(ValueError):
        GoogleSheet(SheetsConfig(sheetName="x"), access)

def test_read_labels_columns(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.get.return_value.execute.return_value = {
        'range': 'Sheet1!A1:C3', 'majorDimension': 'ROWS',
        'values': [['a', 'b', 'c'], ['d'], []]
    }
    rows = GoogleSheet(config, access).read("A1:C3")
    assert(rows == [{'A': 'a', 'B': 'b', 'C': 'c'}, {'A': 'd'}, {}])
    kwargs = values.get.call_args.kwargs
    assert(kwargs['spreadsheetId'] == 'ssid')
    assert(kwargs['range'] == 'Sheet1!A1:C3')

def test_read_empty(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.get.return_value.execute.return_value = {'range': "'my data'!A1:B2"}
    assert(GoogleSheet(config, access).read("A1:B2", sheet_name="my data") == [])
    assert(values.get.call_args.kwargs['range'] == "'my data'!A1:B2")

def test_insert_normalizes(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.append.return_value.execute.return_value = {
        'spreadsheetId': 'ssid', 'tableRange': 'Sheet1!A1:C4',
        'updates': {'spreadsheetId': 'ssid', 'updatedRange': 'Sheet1!A5:C5', 'updatedRows': 1}
    }
    response = GoogleSheet(config, access).insert([[1, "two", [3, [4]]]], "A1")
    kwargs = values.append.call_args.kwargs
    assert(kwargs['range'] == 'Sheet1!A1')
    assert(kwargs['valueInputOption'] == 'USER_ENTERED')
    assert(kwargs['body'] == {'range': 'Sheet1!A1', 'values': [['1', 'two', '3\n[4]']]})
    assert(response.updates.updatedRows == 1)
    assert(response.tableRange == 'Sheet1!A1:C4')

def test_insert_flat_values(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.append.return_value.execute.return_value = {'spreadsheetId': 'ssid'}
    sheet = GoogleSheet(config, access)
    sheet.insert([1, "two", None], "A1")
    assert(values.append.call_args.kwargs['body']['values'] == [['1', 'two', '']])
    # one list at the top level turns every element into its own row
    sheet.insert([1, "two", [3, [4]]], "A1")
    assert(values.append.call_args.kwargs['body']['values'] == [['1'], ['two'], ['3', '4']])

def test_update_overwrites(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.update.return_value.execute.return_value = {
        'spreadsheetId': 'ssid', 'updatedRange': 'Sheet1!B2:C3', 'updatedCells': 4
    }
    response = GoogleSheet(config, access).update([[1, 2], [3, 4]], "B2", "Sheet1")
    assert(values.update.call_args.kwargs['body']['values'] == [['1', '2'], ['3', '4']])
    assert(response)
    assert(response.updatedCells == 4)

def test_http_errors_name_the_range(config, access, service):
    values = service.spreadsheets.return_value.values.return_value
    values.update.return_value.execute.side_effect = _http_error()
    with pytest.raises(SheetOperationError) as e:
        GoogleSheet(config, access).update([1], "Z9")
    assert(e.value.operation == 'update')
    assert(e.value.range == 'Sheet1!Z9')
    assert('Sheet1!Z9' in str(e.value))
    assert(isinstance(e.value.__cause__, HttpError))

def test_sheet_id_lookup_is_cached(config, access, service):
    sheet = GoogleSheet(config, access)
    assert(sheet.sheet_id() == 0)
    assert(sheet.sheet_id("my data") == 1234)
    get = service.spreadsheets.return_value.get
    assert(get.call_count == 1)
    assert(get.call_args.kwargs['fields'] == 'sheets(properties(sheetId,title))')
    with pytest.raises(SheetNotFound, match="nope"):
        sheet.sheet_id("nope")
    # a miss is not remembered, the next lookup asks the service again
    assert(get.call_count == 2)
    assert(sheet.sheet_id("my data") == 1234)
    assert(get.call_count == 2)

def test_set_color(config, access, service):
    GoogleSheet(config, access).setColor("A1:B2", color="ff0000", backGroundColor="#00f",
                                         sheet_name="my data")
    body = _batch_body(service)
    assert(body['requests'] == [{'repeatCell': {
        'range': {'sheetId': 1234, 'startRowIndex': 0, 'endRowIndex': 2,
                  'startColumnIndex': 0, 'endColumnIndex': 2},
        'cell': {'userEnteredFormat': {
            'backgroundColor': {'red': 0.0, 'green': 0.0, 'blue': 1.0},
            'textFormat': {'foregroundColor': {'red': 1.0, 'green': 0.0, 'blue': 0.0}}}},
        'fields': 'userEnteredFormat.textFormat.foregroundColor,userEnteredFormat.backgroundColor'
    }}])

def test_set_color_background_only(config, access, service):
    GoogleSheet(config, access).setColor("C:C", backGroundColor="eeeeee")
    rc = _batch_body(service)['requests'][0]['repeatCell']
    assert(rc['range'] == {'sheetId': 0, 'startColumnIndex': 2, 'endColumnIndex': 3})
    assert(rc['fields'] == 'userEnteredFormat.backgroundColor')
    assert('textFormat' not in rc['cell']['userEnteredFormat'])

def test_set_color_nothing_to_do(config, access, service):
    assert(GoogleSheet(config, access).setColor("A1") is None)
    service.spreadsheets.return_value.batchUpdate.assert_not_called()
    service.spreadsheets.return_value.get.assert_not_called()

def test_set_color_bad_input(config, access, service):
    sheet = GoogleSheet(config, access)
    with pytest.raises(InvalidColor):
        sheet.setColor("A1", color="not a color")
    with pytest.raises(InvalidReference):
        sheet.setColor("A1:3", color="fff")
    service.spreadsheets.return_value.batchUpdate.assert_not_called()

def test_close_dimension_group(config, access, service):
    response = GoogleSheet(config, access).closeDimensionGroup(10, 15)
    assert(response.spreadsheetId == 'ssid')
    rng = {'sheetId': 0, 'dimension': 'ROWS', 'startIndex': 10, 'endIndex': 15}
    assert(_batch_body(service)['requests'] == [
        {'addDimensionGroup': {'range': rng}},
        {'updateDimensionGroup': {'dimensionGroup': {'range': rng, 'depth': 1, 'collapsed': True},
                                  'fields': 'collapsed'}}
    ])

def test_close_dimension_group_open(config, access, service):
    GoogleSheet(config, access).closeDimensionGroup(0, 2, indexOffset=3, willClose=False,
                                                    sheet_name="my data")
    assert(_batch_body(service)['requests'] == [
        {'addDimensionGroup': {'range': {'sheetId': 1234, 'dimension': 'ROWS',
                                         'startIndex': 3, 'endIndex': 5}}}
    ])

def test_close_dimension_group_no_details(config, access, service):
    assert(GoogleSheet(config, access).closeDimensionGroup(10, 10) is None)
    service.spreadsheets.return_value.batchUpdate.assert_not_called()

def test_update_chain(config, access, service):
    sheet = GoogleSheet(config, access)
    chain = sheet.updateRequests().repeatCellColor("1:1", color="000").groupRows(1, 5)
    assert(len(chain) == 3)
    chain.execute()
    requests = _batch_body(service)['requests']
    assert([list(r.keys())[0] for r in requests] == ['repeatCell', 'addDimensionGroup', 'updateDimensionGroup'])

    empty = sheet.updateRequests()
    assert(not empty)
    assert(empty.execute().spreadsheetId == 'ssid')
    assert(service.spreadsheets.return_value.batchUpdate.call_count == 1)

def test_service_from_access(config):
    access = MagicMock()
    sheet = GoogleSheet(config, access)
    assert(sheet.service is access.get_service.return_value)
    access.get_service.assert_called_with("sheets", "v4")
