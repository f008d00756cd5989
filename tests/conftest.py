from unittest.mock import MagicMock

import pytest

from sheetwrap.config import (SheetsConfig, SHEET_ID_ENV_KEY, SHEET_NAME_ENV_KEY,
                              CREDENTIAL_PATH_ENV_KEY)

@pytest.fixture
def clean_env(monkeypatch):
    """
    Remove our keys from the environment and make sure anything a .env file
    loads during the test is removed again afterwards.
    """
    for key in (SHEET_ID_ENV_KEY, SHEET_NAME_ENV_KEY, CREDENTIAL_PATH_ENV_KEY):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch

@pytest.fixture
def config():
    return SheetsConfig(sheetId="ssid", sheetName="Sheet1")

@pytest.fixture
def service():
    """
    Stand in for the googleapiclient sheets resource.  Each method chain
    returns the same child mock so tests can set execute() results and
    inspect call arguments.
    """
    svc = MagicMock(name="sheets")
    svc.spreadsheets.return_value.get.return_value.execute.return_value = {
        'sheets': [{'properties': {'sheetId': 0, 'title': 'Sheet1'}},
                   {'properties': {'sheetId': 1234, 'title': 'my data'}}]
    }
    svc.spreadsheets.return_value.batchUpdate.return_value.execute.return_value = {
        'spreadsheetId': 'ssid', 'replies': [{}]
    }
    return svc

@pytest.fixture
def access(service):
    a = MagicMock(name="access")
    a.get_service.return_value = service
    return a
