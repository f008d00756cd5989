from pathlib import Path

import pytest

from sheetwrap.config import SheetsConfig
from sheetwrap.errors import ConfigError

def test_from_env_file(clean_env, tmp_path):
    (tmp_path / ".env.local").write_text('SHEET_ID="abc123"\nSHEET_NAME="シート1"\n'
                                         'GOOGLE_CREDENTIAL_PATH="/keys/sa.json"\n', encoding="utf-8")
    c = SheetsConfig.from_env(env_path=tmp_path)
    assert(c.sheetId == "abc123")
    assert(c.sheetName == "シート1")
    assert(c.credentialPath == Path("/keys/sa.json"))
    assert(c)

def test_environment_wins_over_file(clean_env, tmp_path):
    (tmp_path / "settings.env").write_text('SHEET_ID=fromfile\nSHEET_NAME=tab\n')
    clean_env.setenv("SHEET_ID", "fromenv")
    c = SheetsConfig.from_env("settings.env", tmp_path)
    assert(c.sheetId == "fromenv")
    assert(c.sheetName == "tab")
    assert(c.credentialPath is None)

def test_overrides(clean_env, tmp_path):
    clean_env.setenv("SHEET_ID", "fromenv")
    c = SheetsConfig.from_env(env_path=tmp_path, sheetName="explicit", credentialPath="~/k.json")
    assert(c.sheetId == "fromenv")
    assert(c.sheetName == "explicit")
    assert(c.credentialPath == Path("~/k.json").expanduser())
    with pytest.raises(TypeError):
        SheetsConfig.from_env(env_path=tmp_path, sheetName="x", bogus=1)

def test_missing_keys(clean_env, tmp_path):
    with pytest.raises(ConfigError, match="SHEET_ID"):
        SheetsConfig.from_env(env_path=tmp_path)
    clean_env.setenv("SHEET_ID", "abc")
    with pytest.raises(ConfigError, match="SHEET_NAME"):
        SheetsConfig.from_env(env_path=tmp_path)

def test_config_dict():
    c = SheetsConfig()
    assert(not c)
    c.config = {'sheetId': 'id', 'credentialPath': '/tmp/creds.json'}
    assert(c.config == {'sheetId': 'id', 'sheetName': '', 'credentialPath': '/tmp/creds.json'})
    c.config = {'sheetName': 'tab'}
    assert(c.sheetId == 'id')
    assert(c.sheetName == 'tab')
