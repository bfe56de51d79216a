"""
A Google Sheets connector for host applications.
The goal is to simplify the repetitive aspects of talking to Sheets: service
account authentication, A1 notation, structures for JSON requests/responses,
and keeping a spreadsheet in memory so ranges can be read without a round
trip each time.

Python dataclasses are used for the resource structs and most of the logic is
translating between those and the raw dicts the API client works with.

    connector = GoogleSheetModule.register({"client_email": ..., "private_key": ...})
    connector.load_sheet(spreadsheet_id, 0)
    connector.read_range_from_selected_sheet("A1:B2")
"""
from .config import (GoogleSheetConnectorConfig, ConfigProvider,
                     StaticConfigProvider, DeferredConfigProvider)
from .connector import GoogleSheetConnectorService, GoogleSheetModule
from .exceptions import (SheetConnectorError, ConfigurationError, InvalidFormatError,
                         NotLoadedError, SheetNotFoundError, CellOutOfBoundsError)
from .sheets.a1 import (CellCoordinate, GoogleSheetsA1Notation, column_letter_to_number,
                        number_to_column_letter, parse_cell, parse_range)
