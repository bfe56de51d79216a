from collections.abc import Callable, Iterable
import logging
import threading
from typing import Any, Self

from googleapiclient.discovery import Resource

from .access import GoogleAuthService
from .config import (GoogleSheetConnectorConfig, ConfigProvider,
                     StaticConfigProvider, DeferredConfigProvider)
from .sheets import ops
from .sheets.a1 import GoogleSheetsA1Notation
from .sheets.cache import SheetCache
from .sheets.requests import (GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse,
                              GoogleSheetsUpdateRequestBase, InsertDimensionRequest,
                              MergeCellsRequest, DimensionRange, AppendValuesResponse)
from .sheets.resources import Spreadsheet, ValueRange, UpdateValuesResponse, CellValue, GoogleSheetsEnum
from .sheets.sheet import SheetSnapshot
from .sheets.spreadsheet import SpreadsheetSnapshot

logger = logging.getLogger(__name__)


class GoogleSheetConnectorService():
    """
    The object a host application holds on to for Google Sheets access.

    Most methods are thin pass-throughs to the Sheets API.  The exception is
    the sheet cache: load_sheet() fetches a whole spreadsheet with grid data
    once, and the read_range_from_*() methods then answer from that copy
    without going back to the network.  load_sheet() only fetches again when
    asked for a different spreadsheet, load_spreadsheet() always does.

    API errors (googleapiclient.errors.HttpError) are not caught here.
    """

    def __init__(self, config: GoogleSheetConnectorConfig|dict,
                 service: Resource|None = None) -> None:
        """
        config:     service account identity and options
        service:    an already built sheets v4 Resource, mostly for tests,
                    otherwise one is built from the config on first use
        """
        cfg = config if isinstance(config, GoogleSheetConnectorConfig) else GoogleSheetConnectorConfig.from_dict(config)
        self._auth = GoogleAuthService(cfg)
        self._service = service
        self._cache = SheetCache()
        # serialize check-then-fetch in load_sheet()
        self._load_lock = threading.RLock()

    def __str__(self) -> str:
        return f"{self._auth.config.client_email}:{str(self._cache)}"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    @property
    def auth(self) -> GoogleAuthService:
        return self._auth

    @property
    def config(self) -> GoogleSheetConnectorConfig:
        return self._auth.config

    @property
    def service(self) -> Resource:
        if self._service is None:
            self._service = self._auth.get_service("sheets", "v4")
        return self._service

    @property
    def cache(self) -> SheetCache:
        return self._cache

    @property
    def _max_tries(self) -> int:
        return int(self._auth.config.max_tries)

    # ---- sheet cache ----

    def load_spreadsheet(self, spreadsheet_id: str) -> SpreadsheetSnapshot:
        """
        Fetch spreadsheet_id with all of its grid data and cache it,
        replacing whatever was cached.  Always goes to the network.
        """
        with self._load_lock:
            logger.info("loading spreadsheet %s", spreadsheet_id)
            spreadsheet = ops.get(self.service, spreadsheet_id,
                                  includeGridData=True, max_tries=self._max_tries)
            return self._cache.load(spreadsheet)

    def load_sheet(self, spreadsheet_id: str, index: int = 0) -> SheetSnapshot:
        """
        Select the sheet at tab position index (0-based) of spreadsheet_id
        as the target for read_range_from_selected_sheet().  The spreadsheet
        is only fetched if it isn't the one already cached.
        """
        with self._load_lock:
            if self._cache.holds(spreadsheet_id):
                logger.debug("spreadsheet %s already cached", spreadsheet_id)
            else:
                self.load_spreadsheet(spreadsheet_id)
            return self._cache.select(index)

    def read_range_from_selected_sheet(self, range: str) -> list[list[CellValue]]:
        """
        Formatted values of range ('A1:C5') in the sheet picked by load_sheet().
        """
        return self._cache.read_range(range)

    def read_range_from_named_sheet(self, title: str, range: str) -> list[list[CellValue]]:
        """
        Formatted values of range in the cached sheet called title.
        """
        return self._cache.read_named_range(title, range)

    # ---- pass-through API calls ----

    def get_spreadsheet(self, spreadsheet_id: str,
                        ranges: Iterable[str|GoogleSheetsA1Notation] = (),
                        include_grid_data: bool = False) -> Spreadsheet:
        """Spreadsheet resource without touching the cache"""
        return ops.get(self.service, spreadsheet_id, ranges, include_grid_data, self._max_tries)

    def read(self, spreadsheet_id: str, range: str|GoogleSheetsA1Notation,
             value_render_option: str = "FORMATTED") -> list[list[CellValue]]:
        return ops.getValues(self.service, spreadsheet_id, range,
                             value_render_option, self._max_tries).values

    def batch_read(self, spreadsheet_id: str,
                   ranges: str|Iterable[str|GoogleSheetsA1Notation],
                   value_render_option: str = "FORMATTED") -> list[ValueRange]:
        return ops.batchGetValues(self.service, spreadsheet_id, ranges,
                                  value_render_option, self._max_tries).valueRanges

    def write(self, spreadsheet_id: str, range: str|GoogleSheetsA1Notation,
              values: list[list[CellValue]],
              value_input_option: str = "USER") -> UpdateValuesResponse:
        """
        Overwrite range with values.  USER input is parsed like typing it
        into the UI (formulas, dates), RAW is stored as is.
        """
        return ops.updateValues(self.service, spreadsheet_id, range, values,
                                value_input_option, self._max_tries)

    def append(self, spreadsheet_id: str, range: str|GoogleSheetsA1Notation,
               values: list[list[CellValue]],
               value_input_option: str = "USER",
               insert_data_option: str = "INSERT_ROWS") -> AppendValuesResponse:
        return ops.appendValues(self.service, spreadsheet_id, range, values,
                                value_input_option, insert_data_option, self._max_tries)

    def create(self, title: str) -> str:
        """Create a new spreadsheet, returns its id"""
        return ops.create(self.service, title, self._max_tries).spreadsheetId

    def batch_update(self, spreadsheet_id: str,
                     request: GoogleSheetsUpdateRequest|dict) -> GoogleSheetsUpdateRequestResponse:
        return ops.batchUpdate(self.service, spreadsheet_id, request, self._max_tries)

    def update_requests(self, spreadsheet_id: str, sheet_id: int = 0):
        """
        Start a batchUpdate() chain against one sheet, makes it easy to append
        operations to pack into a request before sending it.
        """
        return _SheetUpdateChain(self, spreadsheet_id, sheet_id)

    def insert_dimension(self, spreadsheet_id: str, sheet_id: int,
                         start: int, end: int,
                         dimension: str = "ROWS",
                         inherit_from_before: bool = False) -> GoogleSheetsUpdateRequestResponse:
        """
        Insert empty rows (or columns) over zero-based [start, end).
        """
        return self.update_requests(spreadsheet_id, sheet_id).insertDimension(
            start, end, dimension, inherit_from_before).execute()

    def merge(self, spreadsheet_id: str, sheet_id: int,
              range: str|GoogleSheetsA1Notation,
              merge_type: str = "MERGE_ALL") -> GoogleSheetsUpdateRequestResponse:
        """
        Merge the cells of range ('A1:C2') into one (or one per row/column
        depending on merge_type).
        """
        return self.update_requests(spreadsheet_id, sheet_id).mergeCells(range, merge_type).execute()


class _SheetUpdateChain():
    """
    Utility class for building up a chain of update requests.
    The spreadsheet batchUpdate method can take a list of requests at once
    and it is more efficient to provide a number of them at once rather than
    request/response/request/response/etc.  So this provides a means to add
    a chain of requests and then terminate with execute().
    The idea is you would:
    response = connector.update_requests(id, sheet_id).request1(params).request2(params).execute()
    """
    def __init__(self, connector: GoogleSheetConnectorService,
                 spreadsheet_id: str, sheet_id: int) -> None:
        if not spreadsheet_id:
            raise ValueError("Must be a valid spreadsheet for an update operation")
        if int(sheet_id) < 0:
            raise ValueError(f"Invalid sheet id: {sheet_id}")
        self._connector = connector
        self._spreadsheet_id = spreadsheet_id
        self._sheet_id = int(sheet_id)
        self._requests: list[GoogleSheetsUpdateRequestBase] = []

    def __len__(self) -> int:
        return len(self._requests)

    def execute(self, includeSpreadsheetInResponse: bool = False) -> GoogleSheetsUpdateRequestResponse:
        """
        Terminate a request chain and send the actual batchUpdate
        """
        if not self._requests:
            return GoogleSheetsUpdateRequestResponse(self._spreadsheet_id)
        request = GoogleSheetsUpdateRequest(list(self._requests), includeSpreadsheetInResponse)
        return self._connector.batch_update(self._spreadsheet_id, request)

    def insertDimension(self, start: int, end: int,
                        dimension: str = "ROWS",
                        inheritFromBefore: bool = False) -> Self:
        """
        Insert empty rows/cols over [start, end).
        inheritFromBefore is to either inherit properties from the prior
        row/col (start - 1) at True or from the following one at False.
        Can't inherit from before at the very start of the sheet.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#insertdimensionrequest
        """
        if start < 0 or end <= start:
            raise ValueError(f"insertDimension(): need 0 <= start < end, got {start}, {end}")
        if inheritFromBefore and start == 0:
            raise ValueError("insertDimension(): cannot inherit from before the first row/col")
        dim = GoogleSheetsEnum.dimension(dimension)
        self._requests.append(InsertDimensionRequest(DimensionRange(self._sheet_id, dim, start, end),
                                                     inheritFromBefore))
        return self

    def mergeCells(self, range: str|GoogleSheetsA1Notation, mergeType: str = "MERGE_ALL") -> Self:
        """
        Merge a rectangular range of cells.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#mergecellsrequest
        """
        a1 = GoogleSheetsA1Notation.parse(range)
        self._requests.append(MergeCellsRequest(a1.grid_range(self._sheet_id), mergeType))
        return self


class GoogleSheetModule():
    """
    Registration entry points for host applications.  Either hand over the
    config now with register(), or a factory and the dependencies to call it
    with through register_async().  Both end in the same connector.
    """

    @staticmethod
    def register(options: GoogleSheetConnectorConfig|dict) -> GoogleSheetConnectorService:
        return GoogleSheetConnectorService(StaticConfigProvider(options).get())

    @staticmethod
    async def register_async(factory: Callable[..., Any],
                             inject: Iterable[Any] = ()) -> GoogleSheetConnectorService:
        return await GoogleSheetModule.from_provider(DeferredConfigProvider(factory, inject))

    @staticmethod
    async def from_provider(provider: ConfigProvider) -> GoogleSheetConnectorService:
        config = await provider.resolve()
        logger.debug("registering google sheet connector for %s", config.client_email)
        return GoogleSheetConnectorService(config)
