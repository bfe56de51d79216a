"""
Exception classes for gsheetconnector.

Everything raised by the connector itself derives from SheetConnectorError
and from the builtin it most resembles, so callers can catch either.
Failures coming back from Google (googleapiclient.errors.HttpError,
google.auth.exceptions.GoogleAuthError) are not wrapped and reach the
caller as raised by the client library.
"""


class SheetConnectorError(Exception):
    """Base class for all connector errors."""
    pass


class ConfigurationError(SheetConnectorError, ValueError):
    """Raised when connector configuration is missing or incomplete.

    Examples:
        - No client_email or private_key supplied
        - A deferred config factory resolved to something that isn't a config
    """
    pass


class InvalidFormatError(SheetConnectorError, ValueError):
    """Raised when a cell or range reference is not valid A1 notation.

    Examples:
        - "B" (no row), "12" (no column), "A0" (rows are 1-based)
        - Column letters outside A-Z
    """
    pass


class NotLoadedError(SheetConnectorError, RuntimeError):
    """Raised when reading from the sheet cache before anything was loaded/selected."""
    pass


class SheetNotFoundError(SheetConnectorError, KeyError):
    """Raised when a sheet title or index does not exist in the cached spreadsheet."""

    def __str__(self) -> str:
        # KeyError repr()s its argument, keep the message readable
        return str(self.args[0]) if self.args else ""


class CellOutOfBoundsError(SheetConnectorError, IndexError):
    """Raised when a requested cell lies outside the cached grid data.

    The Sheets API leaves trailing blank cells and rows out of the grid
    data, so a row can be shorter than the range asked for.
    """
    pass
