"""
Configuration for a spreadsheet connection.
Resolved once, usually from a .env file, and handed to the objects that
need it rather than each of them reading the environment on their own.
"""
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Self

from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

SHEET_ID_ENV_KEY = "SHEET_ID"
SHEET_NAME_ENV_KEY = "SHEET_NAME"
CREDENTIAL_PATH_ENV_KEY = "GOOGLE_CREDENTIAL_PATH"
DEFAULT_ENV_FILE_NAME = ".env.local"

@dataclass
class SheetsConfig():
    """
    sheetId:        ID of the spreadsheet, the long key in its URL.
    sheetName:      Title of the sheet (tab) used when a call does not name one.
    credentialPath: Service account key or OAuth client secrets file.  Empty
                    means use application default credentials.
    """
    sheetId: str = field(default="")
    sheetName: str = field(default="")
    credentialPath: Path|str|None = field(default=None)

    def __post_init__(self) -> None:
        if self.credentialPath:
            self.credentialPath = Path(self.credentialPath).expanduser()
        else:
            self.credentialPath = None

    def __bool__(self) -> bool:
        return bool(self.sheetId)

    @classmethod
    def from_env(cls, env_file: str = DEFAULT_ENV_FILE_NAME,
                 env_path: Path|str|None = None,
                 **overrides) -> Self:
        """
        Build from the environment after loading env_file from env_path
        (default the current directory).  Values already in the process
        environment win over the file, explicit keyword overrides win over both.
        A missing file is fine if the environment already has what we need.
        """
        path = Path(env_path) if env_path is not None else Path.cwd()
        dotenv = path / env_file
        if dotenv.is_file():
            load_dotenv(dotenv, override=False)
            logger.debug("loaded environment from %s", dotenv)
        else:
            logger.debug("no environment file at %s", dotenv)

        values = {
            'sheetId': os.environ.get(SHEET_ID_ENV_KEY),
            'sheetName': os.environ.get(SHEET_NAME_ENV_KEY),
            'credentialPath': os.environ.get(CREDENTIAL_PATH_ENV_KEY),
        }
        names = {f.name for f in fields(cls)}
        for k, v in overrides.items():
            if k not in names:
                raise TypeError(f"unknown config option: {k}")
            if v is not None:
                values[k] = v

        for name, key in (('sheetId', SHEET_ID_ENV_KEY), ('sheetName', SHEET_NAME_ENV_KEY)):
            if not values[name]:
                raise ConfigError(f"{key} is not set, add it to {dotenv} or the environment")
        return cls(**values)

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for getting it all at once for pushing into a json, toml, ini, etc, file.
        """
        return {
            'sheetId': self.sheetId,
            'sheetName': self.sheetName,
            'credentialPath': str(self.credentialPath) if self.credentialPath else None
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict, keys not present are left alone.
        """
        v = config.get('sheetId', None)
        if v is not None:
            self.sheetId = str(v)
        v = config.get('sheetName', None)
        if v is not None:
            self.sheetName = str(v)
        v = config.get('credentialPath', None)
        if v is not None:
            self.credentialPath = Path(v).expanduser() if v else None
