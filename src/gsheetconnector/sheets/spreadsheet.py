from .resources import Spreadsheet
from .sheet import SheetSnapshot
from ..exceptions import SheetNotFoundError


class SpreadsheetSnapshot():
    """
    A fetched spreadsheet, its id and its sheets in tab order.
    Like SheetSnapshot this is a point in time copy, a refresh replaces it.
    """

    def __init__(self, spreadsheet: Spreadsheet|dict) -> None:
        self._spreadsheet = Spreadsheet.from_base(spreadsheet)
        self._sheets = tuple(SheetSnapshot(self.id, s) for s in self._spreadsheet.sheets)

    def __bool__(self) -> bool:
        return bool(self._spreadsheet)

    def __str__(self) -> str:
        return str(self._spreadsheet)

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def __len__(self) -> int:
        """
        In this context length is the number of sheets in this spreadsheet.
        """
        return len(self._sheets)

    def __contains__(self, val: str|int) -> bool:
        """
        Is the sheet in this spreadsheet?
        val can be either a string (title) or int (sheet ID)
        """
        if isinstance(val, int):
            return any(s.sheet_id == val for s in self._sheets)
        return any(s.title == val for s in self._sheets)

    def __getitem__(self, item: str|int) -> SheetSnapshot:
        """
        Get the sheet.  In this context if item is a string that is by title
        and if it is an int it is by position in the tab order.
        """
        if isinstance(item, int):
            return self.by_position(item)
        return self.by_title(item)

    @property
    def id(self) -> str:
        return self._spreadsheet.spreadsheetId

    @property
    def spreadsheet(self) -> Spreadsheet:
        return self._spreadsheet

    @property
    def sheets(self) -> tuple[SheetSnapshot, ...]:
        return self._sheets

    @property
    def title(self) -> str:
        return self._spreadsheet.properties.title

    def by_position(self, index: int) -> SheetSnapshot:
        # no negative indexing, -1 is far more likely a bug than 'the last tab'
        if 0 <= index < len(self._sheets):
            return self._sheets[index]
        raise SheetNotFoundError(f"no sheet at index {index} in '{self.title}' ({len(self._sheets)} sheet(s))")

    def by_title(self, title: str) -> SheetSnapshot:
        for s in self._sheets:
            if s.title == title:
                return s
        raise SheetNotFoundError(f"no sheet titled '{title}' in '{self.title}'")
