
from collections.abc import Iterable
import logging

from google.oauth2 import service_account
from googleapiclient.discovery import build, Resource

from .config import GoogleSheetConnectorConfig

logger = logging.getLogger(__name__)


class GoogleAuthService():
    """
    Class encapsulating service account access to Google Sheets.
    See https://developers.google.com/workspace/guides/create-credentials#service-account
    The service account's client_email and private_key are all that's needed,
    google-auth signs a JWT with the key and trades it for bearer tokens,
    refreshing as they expire.  There's no user consent screen involved.

    One of these per connector, the credentials and the built service are
    created lazily and then reused.
    """

    __SCOPES = {
        "sheets": "https://www.googleapis.com/auth/spreadsheets",
        "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "drive": "https://www.googleapis.com/auth/drive",
        "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
    }
    __SCOPE_URL_PREFIX = "https://www.googleapis.com/"

    def __init__(self, config: GoogleSheetConnectorConfig) -> None:
        self._config = config.validate()
        self._creds = None
        self._services = {}

    def __bool__(self) -> bool:
        """True if we are holding valid credentials"""
        return self.connected

    def __str__(self) -> str:
        state = "Connected" if self.connected else "Disconnected"
        return f"{state}:{self._config.client_email}:{str(self.scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Get a scope based on simplified label.
        A raw URL will also be accepted.
        """
        s = str(scope)
        sc = cls.__SCOPES.get(s, "")
        if not sc and s.startswith(cls.__SCOPE_URL_PREFIX):
            sc = s
        return sc

    @classmethod
    def resolve_scopes(cls, scopes: str|Iterable[str]) -> list[str]:
        """Resolve labels to scope URLs, dropping anything unrecognised"""
        items = [scopes] if isinstance(scopes, str) else list(scopes)
        resolved = []
        for i in items:
            s = cls.get_scope(i)
            if not s:
                logger.warning("ignoring unknown scope %r", i)
            elif s not in resolved:
                resolved.append(s)
        return resolved

    @property
    def config(self) -> GoogleSheetConnectorConfig:
        return self._config

    @property
    def scopes(self) -> list[str]:
        return self.resolve_scopes(self._config.scopes)

    @property
    def connected(self) -> bool:
        """
        Do we have credentials with a current token?
        Service account credentials start without one, the first API call
        (or an explicit refresh) fetches it.
        """
        return self._creds is not None and bool(self._creds.valid)

    def get_client(self) -> service_account.Credentials:
        """
        The JWT credentials for the service account, built on first use.
        """
        if self._creds is None:
            scopes = self.scopes
            if not scopes:
                raise ValueError("no valid scopes configured for the sheets connector")
            self._creds = service_account.Credentials.from_service_account_info(
                self._config.to_service_account_info(), scopes=scopes)
            logger.info("service account credentials ready for %s", self._config.client_email)
        return self._creds

    def get_service(self, name: str = "sheets", version: str = "v4") -> Resource:
        """
        Build the requested service if not already available.
        """
        id = f'{name}:{version}'
        s = self._services.get(id, None)
        if s is None:
            s = build(name, version, credentials=self.get_client(), cache_discovery=False)
            self._services[id] = s
        return s
