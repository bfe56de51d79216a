"""
Connector configuration.

A connector needs a service account identity (client_email) and its signing
key (private_key).  Hosts hand that over one of two ways:

    StaticConfigProvider    the values are known up front
    DeferredConfigProvider  a factory produces them later, possibly async,
                            from whatever dependencies the host injects

Both resolve to the same GoogleSheetConnectorConfig.
"""
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field, fields
import inspect
import logging
import os
from typing import Any, Self

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass
class GoogleSheetConnectorConfig():
    client_email: str = field(default="")
    private_key: str = field(default="", repr=False)
    token_uri: str = field(default=DEFAULT_TOKEN_URI)
    # labels or raw URLs, see GoogleAuthService.get_scope()
    scopes: list[str] = field(default_factory=lambda: ["sheets"])
    # attempts per API call, 1 means no retry
    max_tries: int = field(default=1)

    def __bool__(self) -> bool:
        return bool(self.client_email) and bool(self.private_key)

    def validate(self) -> Self:
        missing = [n for n in ("client_email", "private_key") if not getattr(self, n)]
        if missing:
            raise ConfigurationError(f"google sheet connector config is missing {', '.join(missing)}")
        if int(self.max_tries) < 1:
            raise ConfigurationError(f"max_tries must be at least 1, got {self.max_tries}")
        return self

    @classmethod
    def from_dict(cls, config: dict) -> Self:
        """
        Set configuration state from a dict.
        Convenience for config pulled from a json/toml/etc file or a
        service account key file, which has client_email and private_key
        at the top level along with a lot we don't care about.
        """
        known = {f.name for f in fields(cls)}
        ignored = sorted(k for k in config if k not in known)
        if ignored:
            logger.debug("ignoring config keys: %s", ", ".join(ignored))
        return cls(**{k: v for k, v in config.items() if k in known and v is not None})

    @classmethod
    def from_env(cls, prefix: str = "GOOGLE_SHEETS_") -> Self:
        """
        Read <prefix>CLIENT_EMAIL, <prefix>PRIVATE_KEY and optionally
        <prefix>TOKEN_URI / <prefix>MAX_TRIES, after loading any .env file.
        Keys stored in env files usually have their newlines escaped.
        """
        load_dotenv()
        key = os.getenv(f"{prefix}PRIVATE_KEY", "").replace("\\n", "\n")
        return cls(client_email=os.getenv(f"{prefix}CLIENT_EMAIL", ""),
                   private_key=key,
                   token_uri=os.getenv(f"{prefix}TOKEN_URI", DEFAULT_TOKEN_URI),
                   max_tries=int(os.getenv(f"{prefix}MAX_TRIES", "1")))

    def to_service_account_info(self) -> dict:
        """The subset of a service account key file google-auth needs to sign a JWT"""
        self.validate()
        return {
            "type": "service_account",
            "client_email": self.client_email,
            "private_key": self.private_key,
            "token_uri": self.token_uri,
        }


def _coerce(value: Any) -> GoogleSheetConnectorConfig:
    if isinstance(value, GoogleSheetConnectorConfig):
        return value
    if isinstance(value, dict):
        return GoogleSheetConnectorConfig.from_dict(value)
    raise ConfigurationError(f"expected a config or dict, got {type(value).__name__}")


class ConfigProvider():
    """
    Common interface for the ways a host supplies configuration.
    """
    async def resolve(self) -> GoogleSheetConnectorConfig:
        raise NotImplementedError


class StaticConfigProvider(ConfigProvider):

    def __init__(self, config: GoogleSheetConnectorConfig|dict) -> None:
        self._config = _coerce(config)

    def get(self) -> GoogleSheetConnectorConfig:
        """Static config needs no event loop to resolve"""
        return self._config.validate()

    async def resolve(self) -> GoogleSheetConnectorConfig:
        return self.get()


class DeferredConfigProvider(ConfigProvider):
    """
    Calls factory(*inject) when resolved.  The factory may return the config
    (or a dict of it) directly or an awaitable of it.
    """
    def __init__(self, factory: Callable[..., Any|Awaitable[Any]],
                 inject: Iterable[Any] = ()) -> None:
        if not callable(factory):
            raise ConfigurationError("deferred config needs a callable factory")
        self._factory = factory
        self._inject = tuple(inject)

    async def resolve(self) -> GoogleSheetConnectorConfig:
        value = self._factory(*self._inject)
        if inspect.isawaitable(value):
            value = await value
        return _coerce(value).validate()
