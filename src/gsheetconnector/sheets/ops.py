from collections.abc import Iterable
import logging

import backoff
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from .resources import GoogleSheetsEnum, Spreadsheet, ValueRange, UpdateValuesResponse, CellValue
from .requests import (GoogleSheetsUpdateRequest, GoogleSheetsUpdateRequestResponse,
                       AppendValuesResponse, BatchGetValuesResponse)
from .a1 import GoogleSheetsA1Notation

logger = logging.getLogger(__name__)

# worth another go, anything else is the caller's problem
_RETRY_STATUSES = (429, 500, 503)


def _giveup(e: HttpError) -> bool:
    return e.resp.status not in _RETRY_STATUSES


def _log_backoff(details: dict) -> None:
    logger.warning("sheets call failed, retry %d in %.1fs: %s",
                   details["tries"], details["wait"], details.get("exception"))


def execute(request, max_tries: int = 1) -> dict:
    """
    Execute a prepared API request.
    With max_tries <= 1 this is a plain execute() and any HttpError comes
    straight back to the caller.  Otherwise rate limit and server errors
    are retried with exponential backoff, the last error still propagates
    untouched.
    """
    if max_tries <= 1:
        return request.execute()

    @backoff.on_exception(backoff.expo, HttpError,
                          max_tries=max_tries,
                          giveup=_giveup,
                          on_backoff=_log_backoff)
    def _execute():
        return request.execute()

    return _execute()


def get(service: Resource, spreadsheetid: str,
        ranges: Iterable[GoogleSheetsA1Notation|str] = (),
        includeGridData: bool = False,
        max_tries: int = 1) -> Spreadsheet:
    """
    Wrapper for calling the get() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/get
    This is for retrieving spreadsheet properties but with includeGridData
    it brings back every cell as well, which is what the sheet cache loads.
    """
    if not spreadsheetid:
        raise ValueError("spreadsheet id is required")
    range_list = GoogleSheetsA1Notation.to_str_list(ranges)
    logger.debug("get spreadsheet %s ranges=%s grid=%s", spreadsheetid, range_list, includeGridData)
    request = service.spreadsheets().get(spreadsheetId=spreadsheetid,
                                         ranges=range_list,
                                         includeGridData=includeGridData)
    return Spreadsheet.from_base(execute(request, max_tries))


def create(service: Resource, title: str, max_tries: int = 1) -> Spreadsheet:
    """
    Wrapper for calling the create() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/create
    This is for creating a whole new spreadsheet, not a sheet within a spreadsheet.
    """
    body = {"properties": {"title": str(title)}}
    request = service.spreadsheets().create(body=body)
    spreadsheet = Spreadsheet.from_base(execute(request, max_tries))
    logger.info("created spreadsheet %s '%s'", spreadsheet.spreadsheetId, title)
    return spreadsheet


def batchUpdate(service: Resource, spreadsheetid: str,
                request: GoogleSheetsUpdateRequest|dict,
                max_tries: int = 1) -> GoogleSheetsUpdateRequestResponse:
    """
    Wrapper for calling the batchUpdate() spreadsheet method.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate
    This is for structural changes (insert rows, merge cells, etc) rather
    than value read/write, that's done from the values() resource.
    """
    body = request.to_base() if isinstance(request, GoogleSheetsUpdateRequest) else dict(request)
    logger.debug("batchUpdate %s with %d request(s)", spreadsheetid, len(body.get("requests", [])))
    r = service.spreadsheets().batchUpdate(spreadsheetId=spreadsheetid, body=body)
    return GoogleSheetsUpdateRequestResponse.from_base(execute(r, max_tries))


def getValues(service: Resource, spreadsheetId: str,
              range: GoogleSheetsA1Notation|str,
              valueRenderOption: str = "FORMATTED",
              max_tries: int = 1) -> ValueRange:
    """
    Wrapper for calling the get() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/get
    Trailing empty rows and columns are left out by the API, so the
    values can be smaller than the range asked for.
    """
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    request = service.spreadsheets().values().get(spreadsheetId=spreadsheetId,
                                                  range=str(range),
                                                  valueRenderOption=value_render)
    return ValueRange.from_base(execute(request, max_tries))


def batchGetValues(service: Resource, spreadsheetId: str,
                   ranges: str|Iterable[str|GoogleSheetsA1Notation],
                   valueRenderOption: str = "FORMATTED",
                   max_tries: int = 1) -> BatchGetValuesResponse:
    """
    Wrapper for calling the batchGet() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet
    One ValueRange comes back per requested range, in order.
    """
    range_list = GoogleSheetsA1Notation.to_str_list(ranges)
    value_render = GoogleSheetsEnum.valueRenderOption(valueRenderOption)
    if not range_list:
        return BatchGetValuesResponse(spreadsheetId)
    request = service.spreadsheets().values().batchGet(spreadsheetId=spreadsheetId,
                                                       ranges=range_list,
                                                       valueRenderOption=value_render)
    return BatchGetValuesResponse.from_base(execute(request, max_tries))


def updateValues(service: Resource, spreadsheetId: str,
                 range: GoogleSheetsA1Notation|str,
                 values: list[list[CellValue]],
                 valueInputOption: str = "USER",
                 max_tries: int = 1) -> UpdateValuesResponse:
    """
    Wrapper for calling the update() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/update
    """
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    body = {"range": str(range), "majorDimension": "ROWS", "values": values}
    request = service.spreadsheets().values().update(spreadsheetId=spreadsheetId,
                                                     range=str(range),
                                                     valueInputOption=value_input,
                                                     body=body)
    response = UpdateValuesResponse.from_base(execute(request, max_tries))
    logger.debug("updated %d cell(s) in %s", response.updatedCells, response.updatedRange)
    return response


def appendValues(service: Resource, spreadsheetId: str,
                 range: GoogleSheetsA1Notation|str,
                 values: list[list[CellValue]],
                 valueInputOption: str = "USER",
                 insertDataOption: str = "INSERT_ROWS",
                 max_tries: int = 1) -> AppendValuesResponse:
    """
    Wrapper for calling the append() method on the values resource.
    See https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append
    The API finds the table in range and writes after its last row.
    """
    value_input = GoogleSheetsEnum.valueInputOption(valueInputOption)
    insert_data = GoogleSheetsEnum.insertDataOption(insertDataOption)
    body = {"majorDimension": "ROWS", "values": values}
    request = service.spreadsheets().values().append(spreadsheetId=spreadsheetId,
                                                     range=str(range),
                                                     valueInputOption=value_input,
                                                     insertDataOption=insert_data,
                                                     body=body)
    return AppendValuesResponse.from_base(execute(request, max_tries))
