"""
Class implementations of sheets resources.
As these are just logical groupings of data fields we use dataclasses
to implement.  The nested aspect means every resource with a resource
field converts it in fixup(), since dataclass.asdict() goes one way only
and the API hands us plain dicts.
Not all resources/fields are implemented, only what the connector reads.
"""
from dataclasses import dataclass, field

from ..resources import SheetsResourceBase

# what a cell can hold once it is out of the API
CellValue = str|int|float|bool|None


class GoogleSheetsEnum():
    """
    An 'enum' in the sheets client is just a string so this is
    just to translate and validate input.
    """
    _VALID_VALUE_RENDER_OPTIONS = {
        "FORMATTED": "FORMATTED_VALUE",
        "FORMATTED_VALUE": "FORMATTED_VALUE",
        "UNFORMATTED": "UNFORMATTED_VALUE",
        "UNFORMATTED_VALUE": "UNFORMATTED_VALUE",
        "FORMULA": "FORMULA"
    }
    _VALID_DIMENSION_OPTIONS = {
        "ROWS": "ROWS",
        "R": "ROWS",
        "C": "COLUMNS",
        "COLS": "COLUMNS",
        "COLUMNS": "COLUMNS"
    }
    _VALID_VALUE_INPUT_OPTIONS = {
        "RAW": "RAW",
        "USER": "USER_ENTERED",
        "USER_ENTERED": "USER_ENTERED"
    }
    _VALID_INSERT_DATA_OPTIONS = {
        "OVERWRITE": "OVERWRITE",
        "INSERT": "INSERT_ROWS",
        "INSERT_ROWS": "INSERT_ROWS"
    }
    _VALID_MERGE_TYPES = {
        "ALL": "MERGE_ALL",
        "MERGE_ALL": "MERGE_ALL",
        "COLUMNS": "MERGE_COLUMNS",
        "MERGE_COLUMNS": "MERGE_COLUMNS",
        "ROWS": "MERGE_ROWS",
        "MERGE_ROWS": "MERGE_ROWS"
    }

    @staticmethod
    def _lookup(table: dict[str,str], name: str, option: str) -> str:
        value = table.get(str(option).upper(), "")
        if not value:
            raise ValueError(f"Invalid {name} value: {option}")
        return value

    @classmethod
    def valueRenderOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueRenderOption"""
        return cls._lookup(cls._VALID_VALUE_RENDER_OPTIONS, "valueRenderOption", option)

    @classmethod
    def dimension(cls, dim: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/Dimension"""
        return cls._lookup(cls._VALID_DIMENSION_OPTIONS, "dimension", dim)

    @classmethod
    def valueInputOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/ValueInputOption"""
        return cls._lookup(cls._VALID_VALUE_INPUT_OPTIONS, "valueInputOption", option)

    @classmethod
    def insertDataOption(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values/append#InsertDataOption"""
        return cls._lookup(cls._VALID_INSERT_DATA_OPTIONS, "insertDataOption", option)

    @classmethod
    def mergeType(cls, option: str) -> str:
        """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/request#MergeType"""
        return cls._lookup(cls._VALID_MERGE_TYPES, "mergeType", option)


@dataclass
class SpreadsheetProperties(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#SpreadsheetProperties
    """
    title: str = field(default="")
    locale: str = field(default="")
    autoRecalc: str = field(default="")
    timeZone: str = field(default="")

    def __bool__(self) -> bool:
        return bool(self.title)


@dataclass
class GridProperties(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#gridproperties"""
    rowCount: int = field(default=-1)
    columnCount: int = field(default=-1)
    frozenRowCount: int = field(default=0)
    frozenColumnCount: int = field(default=0)

    def __bool__(self) -> bool:
        return self.rowCount >= 0 and self.columnCount >= 0


@dataclass
class SheetProperties(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheetproperties"""
    sheetId: int = field(default=-1)
    title: str = field(default="")
    index: int = field(default=-1)
    sheetType: str = field(default="GRID")
    gridProperties: GridProperties|dict = field(default_factory=dict)
    hidden: bool = field(default=False)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.gridProperties = GridProperties.from_base(self.gridProperties)

    def __bool__(self) -> bool:
        """
        True if it is valid, which is the ID and index are 0 or positive
        as negative index is not possible
        """
        return self.sheetId >= 0 and self.index >= 0 and bool(self.title)

    def __str__(self) -> str:
        if not self:
            return "<invalid sheet>"
        val = f"{self.title}({self.sheetId}[{self.index}]):{self.sheetType}"
        if self.is_grid():
            val += f"({self.gridProperties.rowCount}Rx{self.gridProperties.columnCount}C)"
        return val

    def is_grid(self) -> bool:
        """
        A GRID sheet is the traditional range of cells and is normally
        what you want to work with.
        """
        return self.sheetType == 'GRID'


@dataclass
class CellData(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/cells#celldata
    formattedValue is what the user sees, effectiveValue is the underlying
    ExtendedValue after formulas are computed.
    """
    formattedValue: str|None = field(default=None)
    effectiveValue: dict = field(default_factory=dict)
    userEnteredValue: dict = field(default_factory=dict)

    def typed_value(self) -> CellValue:
        """
        The underlying value as a python type, falling back to the formatted
        string for anything that isn't a number, string or bool (errors, etc).
        """
        ev = self.effectiveValue or {}
        if "boolValue" in ev:
            return bool(ev["boolValue"])
        if "numberValue" in ev:
            n = ev["numberValue"]
            return int(n) if float(n).is_integer() else float(n)
        if "stringValue" in ev:
            return str(ev["stringValue"])
        return self.formattedValue


@dataclass
class RowData(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#rowdata"""
    values: list[CellData|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.values = [CellData.from_base(c) for c in self.values]


@dataclass
class GridData(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#griddata"""
    startRow: int = field(default=0)
    startColumn: int = field(default=0)
    rowData: list[RowData|dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.rowData = [RowData.from_base(r) for r in self.rowData]


@dataclass
class ValueRange(SheetsResourceBase):
    """https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets.values#resource:-valuerange"""
    range: str = field(default="")
    majorDimension: str = field(default="ROWS")
    values: list[list[CellValue]] = field(default_factory=list)

    def __post_init__(self):
        self.fixup()

    def fixup(self) -> None:
        if self.majorDimension:
            self.majorDimension = GoogleSheetsEnum.dimension(str(self.majorDimension))

    def __bool__(self) -> bool:
        """
        A ValueRange is valid if the range string is not empty
        and the majorDimension has a valid value.
        """
        return bool(self.range) and bool(self.majorDimension)


@dataclass
class UpdateValuesResponse(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/UpdateValuesResponse
    """
    spreadsheetId: str = field(default="")
    updatedRange: str = field(default="")
    updatedRows: int = field(default=0)
    updatedColumns: int = field(default=0)
    updatedCells: int = field(default=0)
    updatedData: ValueRange|dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.updatedData = ValueRange.from_base(self.updatedData)

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId) and bool(self.updatedRange)


@dataclass
class Sheet(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/sheets#sheet
    Representation of a sheet within a spreadsheet
    """
    properties: SheetProperties|dict = field(default_factory=dict)
    data: list[GridData|dict] = field(default_factory=list)
    merges: list[dict] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = SheetProperties.from_base(self.properties)
        self.data = [GridData.from_base(gd) for gd in self.data]

    def __bool__(self) -> bool:
        return bool(self.properties)

    def __str__(self) -> str:
        return str(self.properties)


@dataclass
class Spreadsheet(SheetsResourceBase):
    """
    https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets#resource:-spreadsheet
    The representation of a spreadsheet.
    """
    spreadsheetId: str = field(default="")
    properties: SpreadsheetProperties|dict = field(default_factory=dict)
    sheets: list[Sheet|dict] = field(default_factory=list)
    spreadsheetUrl: str = field(default="")

    def __post_init__(self) -> None:
        self.fixup()

    def fixup(self) -> None:
        self.properties = SpreadsheetProperties.from_base(self.properties)
        self.sheets = [Sheet.from_base(s) for s in self.sheets]

    def __bool__(self) -> bool:
        return bool(self.spreadsheetId)

    def __str__(self) -> str:
        if not self.spreadsheetId:
            return 'unconnected'
        if not self.sheets:
            return f"{self.spreadsheetId}(unconnected)"
        return f"{self.properties.title}[{','.join(str(s) for s in self.sheets)}]"
