import re

from dataclasses import dataclass
from typing import Self
from collections.abc import Iterable

from . import GoogleSheetsMaxColumns
from ..exceptions import InvalidFormatError


@dataclass(frozen=True, order=True)
class CellCoordinate():
    """Zero-based row/column offset into a grid."""
    row: int
    column: int


# a single cell, letters then digits, nothing else
_CELL_RE = re.compile(r"(?P<col>[A-Z]+)(?P<row>[0-9]+)")
_COL_RE = re.compile(r"[A-Z]+")
# titles that can go into a range without quoting
_PLAIN_TITLE_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def column_letter_to_number(letters: str) -> int:
    """
    Convert column letters to the 1-based column number.
    Column letters are bijective base 26, there is no zero digit,
    so A=1, Z=26, AA=27, AZ=52, BA=53.
    """
    if not _COL_RE.fullmatch(str(letters)):
        raise InvalidFormatError(f"invalid column letters: {letters!r}")
    num = 0
    for c in letters:
        num = num * 26 + (ord(c) - 64)
    return num


def number_to_column_letter(number: int) -> str:
    """
    Inverse of column_letter_to_number(), 1 -> A, 27 -> AA.
    """
    n = int(number)
    if n < 1:
        raise InvalidFormatError(f"column numbers are 1-based, got {number}")
    letters = ""
    while n:
        n, r = divmod(n - 1, 26)
        letters = chr(r + 65) + letters
    return letters


def split_sheet(ref: str) -> tuple[str, str]:
    """
    Split an optional 'Title!' prefix off a range reference.
    Quoted titles are unquoted ('It''s' -> It's).

    return: tuple of (title, cells), title is empty if there was no prefix
    """
    r = str(ref).strip()
    if '!' not in r:
        return ("", r)
    title, cells = r.rsplit('!', 1)
    if len(title) >= 2 and title[0] == title[-1] and title[0] in "'\"":
        title = title[1:-1].replace(title[0] * 2, title[0])
    return (title, cells)


def parse_cell(ref: str) -> CellCoordinate:
    """
    Translate a single cell reference like 'B2' or 'Sheet1!B2' to
    zero-based coordinates.  'A1' -> (0, 0), 'AA10' -> (9, 26)
    """
    _, cells = split_sheet(ref)
    m = _CELL_RE.fullmatch(cells)
    if not m:
        raise InvalidFormatError(f"invalid cell reference: {ref!r}")
    row = int(m.group('row')) - 1
    if row < 0:
        raise InvalidFormatError(f"rows are 1-based: {ref!r}")
    return CellCoordinate(row, column_letter_to_number(m.group('col')) - 1)


def parse_range(ref: str) -> tuple[CellCoordinate, CellCoordinate]:
    """
    Translate 'A1:C5' (or a single 'C3') to a (start, end) pair of coordinates.
    A single cell is a range where start == end.
    Ranges given backwards, 'B2:A1', are normalized so that start is the top
    left corner and end the bottom right.
    """
    _, cells = split_sheet(ref)
    parts = cells.split(':')
    if len(parts) > 2:
        raise InvalidFormatError(f"invalid range reference: {ref!r}")
    a = parse_cell(parts[0])
    b = parse_cell(parts[-1])
    start = CellCoordinate(min(a.row, b.row), min(a.column, b.column))
    end = CellCoordinate(max(a.row, b.row), max(a.column, b.column))
    return (start, end)


class GoogleSheetsA1Notation():
    """
    Class representation of a bounded Google Sheets A1 range.
    See https://developers.google.com/sheets/api/guides/concepts#cell
    A general A1 here has the form:

    <title>!<start col><start row>:<end col><end row>

        title:      Optional sheet title, quoted with ' if it contains anything
                    other than letters, digits and underscores.
        start/end:  Column letters A-ZZZ followed by a 1-based row.  The
                    end may be left off for a single cell.

    Unbounded forms like 'A:B' or '1:6' are left to the API, range strings
    are passed through as-is by the value operations.  This class is for the
    cases where we need actual numbers, like a merge which wants a GridRange.
    Rows and column ints are 1-based here, as they read in the string.
    """

    @staticmethod
    def to_str_list(vals: str|Self|Iterable[str|Self]) -> list[str]:
        """
        Convenience function to take any input and return a list of
        strings, even if the input was a single instance.  The intent
        is an easy way to convert a list of A1s to strings before making
        a Google Sheets call.
        """
        if isinstance(vals, str):
            return [vals]
        elif isinstance(vals, Iterable):
            return [str(v) for v in vals]
        return [str(vals)]

    @classmethod
    def parse(cls, a1: str|Self) -> Self:
        """Like the constructor but raises InvalidFormatError on bad input."""
        if isinstance(a1, GoogleSheetsA1Notation):
            return a1
        obj = cls()
        if not obj.set_a1(str(a1)):
            raise InvalidFormatError(f"invalid A1 notation: {a1!r}")
        return obj

    @staticmethod
    def quote_title(title: str) -> str:
        """Quote a sheet title if the API would need it quoted."""
        t = str(title)
        if not t or _PLAIN_TITLE_RE.fullmatch(t):
            return t
        return "'" + t.replace("'", "''") + "'"

    @classmethod
    def generate_a1(cls, sheet: str = "",
                    start_col: str|int = "", start_row: int = 0,
                    end_col: str|int = "", end_row: int = 0) -> str:
        """
        Generate the A1 representation based on the input parameters.
        sheet:      Sheet title, can be empty.
        start_col:  Starting column, can be 1-based int or letters.
        start_row:  Starting row, 1-based.
        end_col:    Ending column, empty/0 for a single cell.
        end_row:    Ending row, 0 for a single cell.

        returns:    A1 string representation.
        """
        sc = number_to_column_letter(start_col) if isinstance(start_col, int) else str(start_col)
        column_letter_to_number(sc)
        if int(start_row) < 1:
            raise InvalidFormatError(f"rows are 1-based, got {start_row}")
        a1 = f"{sc}{int(start_row)}"
        if end_col or end_row:
            if not end_col:
                ec = sc
            elif isinstance(end_col, int):
                ec = number_to_column_letter(end_col)
            else:
                ec = str(end_col)
            column_letter_to_number(ec)
            er = int(end_row) if end_row else int(start_row)
            a1 += f":{ec}{er}"
        if sheet:
            a1 = f"{cls.quote_title(sheet)}!{a1}"
        return a1

    def __init__(self, a1: str = ""):
        self.reset()
        if a1:
            self.set_a1(a1)

    def __str__(self) -> str:
        if self._a1:
            return self._a1
        else:
            return "<invalid>"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    def __eq__(self, value: object) -> bool:
        """Equal if the sheet and corners match, regardless of how it was written"""
        if isinstance(value, str):
            value = GoogleSheetsA1Notation(value)
        if not isinstance(value, GoogleSheetsA1Notation):
            return NotImplemented
        return bool(self) and bool(value) and (self._sheet, self.start, self.end) == (value.sheet, value.start, value.end)

    def __hash__(self) -> int:
        return hash(self._a1)

    def __bool__(self) -> bool:
        """If the A1 is present its been validated"""
        return bool(self._a1)

    def __len__(self) -> int:
        """Number of cells in the range"""
        return self.num_rows * self.num_cols

    def __contains__(self, value: str|Self) -> bool:
        """
        Is value completely inside this range?
        For example 'A2:B5' in 'A1:Z10' is True.
        """
        a = value if isinstance(value, GoogleSheetsA1Notation) else GoogleSheetsA1Notation(str(value))
        if not (a and self):
            return False
        if a.sheet != self._sheet:
            return False
        return (a.start.row >= self._start.row and a.end.row <= self._end.row and
                a.start.column >= self._start.column and a.end.column <= self._end.column)

    def reset(self) -> None:
        """
        Reset the state.
        Empty _a1 means invalid.
        """
        self._a1 = ""
        self._sheet = ""
        self._start = CellCoordinate(0, 0)
        self._end = CellCoordinate(0, 0)

    def set_a1(self, a1: str) -> bool:
        """
        Set the internal state of this object to the supplied A1 string.

        return: True is successful, False if failed which would mean an invalid a1.
        """
        try:
            sheet, _ = split_sheet(a1)
            start, end = parse_range(a1)
        except InvalidFormatError:
            self.reset()
            return False
        if end.column >= GoogleSheetsMaxColumns:
            self.reset()
            return False
        self._sheet = sheet
        self._start = start
        self._end = end
        if start == end:
            self._a1 = self.generate_a1(sheet, start.column + 1, start.row + 1)
        else:
            self._a1 = self.generate_a1(sheet, start.column + 1, start.row + 1,
                                        end.column + 1, end.row + 1)
        return True

    def update(self, sheet: str|None = None,
               start_col: str|int|None = None, start_row: int|None = None,
               end_col: str|int|None = None, end_row: int|None = None) -> bool:
        """
        Update existing aspects of the current A1.
        A value of None signals do not update that particular aspect.

        return: True if successfully updated, False otherwise which would imply invalid parameter.
        """
        s = self._sheet if sheet is None else str(sheet)
        sc = self.start_col if start_col is None else start_col
        ec = self.end_col if end_col is None else end_col
        sr = self.start_row if start_row is None else int(start_row)
        er = self.end_row if end_row is None else int(end_row)
        try:
            a1 = self.generate_a1(s, sc, sr, ec, er)
        except InvalidFormatError:
            return False
        return self.set_a1(a1)

    @property
    def a1(self) -> str:
        """Current A1 string, if empty the object is invalid"""
        return self._a1

    @a1.setter
    def a1(self, value: str) -> None:
        if not self.set_a1(value):
            raise InvalidFormatError(f"invalid A1 notation: {value}")

    @property
    def sheet(self) -> str:
        """Sheet title, unquoted, can be empty which means the first sheet"""
        return self._sheet

    @sheet.setter
    def sheet(self, value: str) -> None:
        self.update(sheet=value)

    @property
    def start(self) -> CellCoordinate:
        """Top left corner, zero-based"""
        return self._start

    @property
    def end(self) -> CellCoordinate:
        """Bottom right corner, zero-based"""
        return self._end

    @property
    def start_col(self) -> str:
        return number_to_column_letter(self.start_col_int) if self else ""

    @property
    def end_col(self) -> str:
        return number_to_column_letter(self.end_col_int) if self else ""

    @property
    def start_col_int(self) -> int:
        """Start column in 1-based integer index"""
        return self._start.column + 1 if self else 0

    @property
    def end_col_int(self) -> int:
        """End column in 1-based integer index"""
        return self._end.column + 1 if self else 0

    @property
    def start_row(self) -> int:
        """Start row in 1-based integer index"""
        return self._start.row + 1 if self else 0

    @property
    def end_row(self) -> int:
        """End row in 1-based integer index"""
        return self._end.row + 1 if self else 0

    @property
    def num_rows(self) -> int:
        return self._end.row - self._start.row + 1 if self else 0

    @property
    def num_cols(self) -> int:
        return self._end.column - self._start.column + 1 if self else 0

    def grid_range(self, sheet_id: int) -> dict:
        """
        Translate to the zero-based, end exclusive GridRange that
        batchUpdate requests take.
        https://developers.google.com/sheets/api/reference/rest/v4/spreadsheets/other#gridrange
        """
        if not self:
            raise InvalidFormatError("cannot build a GridRange from an invalid A1")
        return {
            "sheetId": int(sheet_id),
            "startRowIndex": self._start.row,
            "endRowIndex": self._end.row + 1,
            "startColumnIndex": self._start.column,
            "endColumnIndex": self._end.column + 1,
        }
