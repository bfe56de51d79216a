from dataclasses import dataclass, asdict, field
import re

from ..resources import SheetsResourceBase
from .resources import GoogleSheetsEnum, Spreadsheet, ValueRange, UpdateValuesResponse


class GoogleSheetsUpdateRequestBase(SheetsResourceBase):
    """
    Base class for sheet batchUpdate requests to get the actual
    request dict into the right format.  The request key is derived
    from the class name, MergeCellsRequest -> {'mergeCells': {...}}.
    """
    _NAME_RE = re.compile(r"^([A-Z])([a-zA-Z]+)Request$")

    def to_request(self) -> dict[str,dict]:
        m = self._NAME_RE.match(self.__class__.__name__)
        if not m:
            raise RuntimeError("Invalid Google Sheets request format for class name")
        return {m.group(1).lower() + m.group(2): self.to_base()}


@dataclass
class DimensionRange(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/DimensionRange"""
    sheetId: int = field(default=-1)
    dimension: str = field(default="ROWS")
    startIndex: int|None = field(default=None)
    endIndex: int|None = field(default=None)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.dimension = GoogleSheetsEnum.dimension(str(self.dimension))

    def __bool__(self) -> bool:
        return self.sheetId >= 0 and bool(self.dimension)


@dataclass
class InsertDimensionRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#insertdimensionrequest
    Inserts empty rows/cols over [startIndex, endIndex), zero-based.
    """
    range: DimensionRange|dict = field(default_factory=dict)
    inheritFromBefore: bool = field(default=False)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.range = DimensionRange.from_base(self.range)

    def to_base(self) -> dict:
        self.fixup()
        # unset indices mean 'to the end', they need to be left out not nulled
        return {'range': self.range.trim(), 'inheritFromBefore': self.inheritFromBefore}


@dataclass
class MergeCellsRequest(GoogleSheetsUpdateRequestBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#mergecellsrequest
    range is a GridRange dict, see GoogleSheetsA1Notation.grid_range()
    """
    range: dict = field(default_factory=dict)
    mergeType: str = field(default="MERGE_ALL")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.mergeType = GoogleSheetsEnum.mergeType(self.mergeType)


@dataclass
class GoogleSheetsUpdateRequest(SheetsResourceBase):
    """
    Generate a GSheet Batch Update request body.
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#request-body
    """
    requests: list[GoogleSheetsUpdateRequestBase|dict] = field(default_factory=list)
    includeSpreadsheetInResponse: bool = field(default=False)

    def to_base(self) -> dict:
        reqs = [r.to_request() if isinstance(r, GoogleSheetsUpdateRequestBase) else dict(r)
                for r in self.requests]
        return {'requests': reqs, 'includeSpreadsheetInResponse': self.includeSpreadsheetInResponse}


@dataclass
class GoogleSheetsUpdateRequestResponse(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/batchUpdate#response-body
    """
    spreadsheetId: str = field(default="")
    replies: list[dict] = field(default_factory=list)
    updatedSpreadsheet: Spreadsheet|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.updatedSpreadsheet = Spreadsheet.from_base(self.updatedSpreadsheet)

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['updatedSpreadsheet'] = self.updatedSpreadsheet.to_base()
        return b


@dataclass
class AppendValuesResponse(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#response-body
    """
    spreadsheetId: str = field(default="")
    tableRange: str = field(default="")
    updates: UpdateValuesResponse|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.updates = UpdateValuesResponse.from_base(self.updates)

    def to_base(self) -> dict:
        self.fixup()
        b = asdict(self)
        b['updates'] = self.updates.to_base()
        return b


@dataclass
class BatchGetValuesResponse(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/batchGet#response-body
    """
    spreadsheetId: str = field(default="")
    valueRanges: list[ValueRange|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def fixup(self) -> None:
        self.valueRanges = [ValueRange.from_base(vr) for vr in self.valueRanges]

    def to_base(self) -> dict:
        self.fixup()
        return {'spreadsheetId': self.spreadsheetId, 'valueRanges': [vr.to_base() for vr in self.valueRanges]}
