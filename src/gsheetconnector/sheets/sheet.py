from .a1 import CellCoordinate, GoogleSheetsA1Notation, parse_range, split_sheet
from .resources import Sheet, CellValue
from ..exceptions import CellOutOfBoundsError, InvalidFormatError


class SheetSnapshot():
    """
    Class representation of one sheet's grid as it was when fetched.  In Google
    Sheets parlance a 'sheet' is an individual sheet within a parent
    'spreadsheet', the different tabs on the spreadsheet itself.

    The snapshot keeps the formatted (display) value of every cell the API
    returned as rows of tuples, and never changes after construction.  A
    refresh builds a new snapshot.  The API leaves trailing blank rows and
    cells out of grid data so rows can be ragged.
    """
    def __init__(self, spreadsheetid: str, sheet: Sheet|dict) -> None:
        self._spreadsheetid = spreadsheetid
        self._sheet = Sheet.from_base(sheet)
        self._props = self._sheet.properties
        self._values = self._build_values()

    def _build_values(self) -> tuple[tuple[CellValue, ...], ...]:
        """
        Flatten the GridData blocks into one grid.  A full fetch gives a
        single block at 0,0, ranged fetches give a block per range with
        its own start offset.
        """
        rows: list[list[CellValue]] = []
        for gd in self._sheet.data:
            for offset, row_data in enumerate(gd.rowData):
                r = gd.startRow + offset
                while len(rows) <= r:
                    rows.append([])
                row = rows[r]
                for c, cell in enumerate(row_data.values, start=gd.startColumn):
                    while len(row) <= c:
                        row.append(None)
                    row[c] = cell.formattedValue
        return tuple(tuple(r) for r in rows)

    def __str__(self) -> str:
        return f"{str(self._props)}<{self.a1}>"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __len__(self) -> int:
        """
        In this context length is number of cells in the sheet
        """
        return max(self.rows, 0) * max(self.cols, 0)

    @property
    def a1(self) -> str:
        """The whole sheet as a range"""
        if self.rows > 0 and self.cols > 0:
            return GoogleSheetsA1Notation.generate_a1(self.title, 1, 1, self.cols, self.rows)
        return GoogleSheetsA1Notation.quote_title(self.title)

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheetid

    @property
    def sheet(self) -> Sheet:
        return self._sheet

    @property
    def title(self) -> str:
        return self._props.title

    @property
    def index(self) -> int:
        """
        Index within the spreadsheet, which is the ordering you see
        of the tabs when you open the spreadsheet.  The index can shift
        by update, but the sheetId is always constant.
        """
        return self._props.index

    @property
    def sheet_id(self) -> int:
        """
        Unique ID of the sheet within the spreadsheet.
        """
        return self._props.sheetId

    @property
    def rows(self) -> int:
        """Row count of the sheet grid, populated or not"""
        return self._props.gridProperties.rowCount

    @property
    def cols(self) -> int:
        """Column count of the sheet grid, populated or not"""
        return self._props.gridProperties.columnCount

    @property
    def values(self) -> tuple[tuple[CellValue, ...], ...]:
        """Formatted values of the populated cells, row major"""
        return self._values

    def cell(self, row: int, column: int) -> CellValue:
        """
        Formatted value at zero-based row/column.
        Raises CellOutOfBoundsError past the populated data.
        """
        if row < 0 or row >= len(self._values):
            raise CellOutOfBoundsError(
                f"row {row + 1} is outside the {len(self._values)} populated row(s) of '{self.title}'")
        r = self._values[row]
        if column < 0 or column >= len(r):
            raise CellOutOfBoundsError(
                f"column {column + 1} is outside the {len(r)} populated column(s) of row {row + 1} in '{self.title}'")
        return r[column]

    def read(self, start: CellCoordinate, end: CellCoordinate) -> list[list[CellValue]]:
        """All cells in the rectangle start..end, both corners included."""
        return [[self.cell(r, c) for c in range(start.column, end.column + 1)]
                for r in range(start.row, end.row + 1)]

    def read_range(self, ref: str) -> list[list[CellValue]]:
        """
        Read an A1 range like 'A1:B2' from the snapshot.  A sheet prefix is
        allowed as long as it names this sheet.
        """
        title, _ = split_sheet(ref)
        if title and title != self.title:
            raise InvalidFormatError(f"range {ref!r} refers to sheet '{title}', not '{self.title}'")
        start, end = parse_range(ref)
        return self.read(start, end)
