"""
A convenience layer over the Google Sheets API.
The goal is to simplify the fiddly parts: authentication, A1 notation,
turning loosely shaped Python values into rows, and the JSON structures
of batchUpdate requests/responses.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts.

    from sheetwrap import SheetsConfig, GoogleSheet

    sheet = GoogleSheet(SheetsConfig.from_env())
    sheet.insert([["2024-01-01", 100, ["a", "b"]]], "A1")
    rows = sheet.read("A1:C10")
    sheet.setColor("A1:C1", color="#ffffff", backGroundColor="#333")
    sheet.closeDimensionGroup(10, 15)
"""
from .errors import (SheetWrapError, InvalidReference, InvalidColumnLetters,
                     InvalidColor, ConfigError, AuthError, SheetNotFound,
                     SheetOperationError)
from .config import SheetsConfig
from .access import SheetsAccess
from .sheets import GoogleSheet
