import copy
import json
import logging
from collections.abc import Iterable
from pathlib import Path

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

from .config import SheetsConfig
from .errors import AuthError

logger = logging.getLogger(__name__)

class SheetsAccess():
    """
    Authenticated access to the Sheets API for one configuration.
    See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
    for an overview of what you'll need.  config.credentialPath may point to:
        a service account key ("type": "service_account"), used directly
        an OAuth client secrets file ("installed" or "web"), which triggers the
            confirmation screens once and then refreshes from a token cache
            written beside the secrets file
        nothing, in which case application default credentials are used
            (GOOGLE_APPLICATION_CREDENTIALS and the usual cloud locations)

    Connection happens lazily on the first get_service().
    """

    __SCOPES = {
        "sheets": "https://www.googleapis.com/auth/spreadsheets",
        "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "drive": "https://www.googleapis.com/auth/drive",
        "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
    }
    __SCOPE_URL_PREFIX = "https://www.googleapis.com/"
    __TOKEN_CACHE_SUFFIX = ".tokens.json"

    DEFAULT_SCOPES = ("sheets", "drive")

    def __init__(self, config: SheetsConfig,
                 scopes: Iterable[str] = DEFAULT_SCOPES) -> None:
        self.config = config
        self.__scopes = []
        for s in scopes:
            sc = self.get_scope(s)
            if not sc:
                raise ValueError(f"unknown scope: {s}")
            if sc not in self.__scopes:
                self.__scopes.append(sc)
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.clear()

    def __bool__(self) -> bool:
        """True is we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.scopes)}"
        return f"Disconnected:{str(self.scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Get a scope based on simplified label.
        A raw URL will also be expected.
        """
        s = str(scope)
        sc = cls.__SCOPES.get(s, "")
        if not sc and s.startswith(cls.__SCOPE_URL_PREFIX):
            sc = s
        return sc

    @property
    def scopes(self) -> list[str]:
        return list(self.__scopes)

    @property
    def creds(self):
        """Current active access credentials or None"""
        return self.__creds

    @property
    def connected(self) -> bool:
        """Are we authenticated with Google?"""
        return bool(self.__creds) and bool(self.__creds.valid)

    @property
    def token_cache(self) -> Path|None:
        """Where OAuth user tokens are kept between runs"""
        p = self.config.credentialPath
        if not p:
            return None
        return p.with_name(p.stem + self.__TOKEN_CACHE_SUFFIX)

    def clear(self) -> None:
        """Reset the access state."""
        self.__creds = None
        self.__services = {}

    def _load_secrets(self, path: Path) -> dict:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise AuthError(f"cannot read credential file {path}: {e}") from e

    def _cached_user_creds(self, requested_scopes: list[str]) -> Credentials|None:
        """
        Credentials from the token cache if it covers the scopes we want.
        A stale or mismatched cache is deleted so the full flow runs again.
        """
        cache = self.token_cache
        if cache is None or not cache.is_file():
            return None
        with open(cache, 'r', encoding='utf-8') as f:
            scopes = json.load(f).get('scopes', [])
        if not all(s in scopes for s in requested_scopes):
            cache.unlink()
            return None
        creds = Credentials.from_authorized_user_file(str(cache), requested_scopes)
        if not creds.valid and creds.refresh_token:
            try:
                creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds: %s...deleting cred cache and re-authorizing", e)
                cache.unlink()
                return None
        return creds if creds.valid else None

    def _save_user_creds(self, creds: Credentials, requested_scopes: list[str]) -> None:
        cache = self.token_cache
        user_info = {'refresh_token': creds.refresh_token, 'client_id': creds.client_id,
                     'client_secret': creds.client_secret, 'scopes': requested_scopes}
        with open(cache, 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        Raises AuthError if no credentials could be obtained.
        """
        self.clear()
        requested_scopes = copy.copy(self.__scopes)
        path = self.config.credentialPath
        try:
            if path:
                if not path.is_file():
                    raise AuthError(f"credential file not found: {path}")
                secrets = self._load_secrets(path)
                if secrets.get('type') == 'service_account':
                    logger.debug("using service account %s", secrets.get('client_email', ''))
                    self.__creds = service_account.Credentials.from_service_account_info(
                        secrets, scopes=requested_scopes)
                    self.__creds.refresh(Request())
                elif 'installed' in secrets or 'web' in secrets:
                    self.__creds = self._cached_user_creds(requested_scopes)
                    if self.__creds is None:
                        flow = InstalledAppFlow.from_client_secrets_file(str(path), requested_scopes)
                        self.__creds = flow.run_local_server(host=self.auth_server, port=self.auth_port)
                        self._save_user_creds(self.__creds, requested_scopes)
                else:
                    raise AuthError(f"unrecognised credential file format: {path}")
            else:
                # this will look at the GOOGLE_APPLICATION_CREDENTIALS envvar and
                # other cloud default locations
                self.__creds, _ = google.auth.default(scopes=requested_scopes)
                if not self.__creds.valid:
                    self.__creds.refresh(Request())
        except google.auth.exceptions.GoogleAuthError as e:
            self.clear()
            raise AuthError(f"Google Sheets authentication failed: {e}") from e
        return self.connected

    def get_service(self, name: str = "sheets", version: str = "v4") -> Resource:
        """
        Build the requested service if not already available, connecting if required.
        """
        if not self.connected:
            self.connect()
        id = f'{name}:{version}'
        s = self.__services.get(id, None)
        if s is None:
            logger.debug("building service %s", id)
            s = build(name, version, credentials=self.__creds, cache_discovery=False)
            self.__services[id] = s
        return s
