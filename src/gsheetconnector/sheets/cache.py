"""
In memory cache of the last loaded spreadsheet.

The cache goes through three states:

    empty        nothing loaded
    loaded       a SpreadsheetSnapshot is held, no sheet selected
    selected     additionally one of its sheets is the target for reads

Loading always replaces the snapshot wholesale and drops the selection.
Reads never touch the network, they grab the current (snapshot, selection)
pair once and work on that, so a concurrent load can't change the data
out from under a read in progress.
"""
import logging
import threading

from .resources import Spreadsheet, CellValue
from .spreadsheet import SpreadsheetSnapshot
from .sheet import SheetSnapshot
from ..exceptions import NotLoadedError

logger = logging.getLogger(__name__)


class SheetCache():

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._spreadsheet: SpreadsheetSnapshot|None = None
        self._selected: SheetSnapshot|None = None

    def __bool__(self) -> bool:
        """True once a spreadsheet is loaded"""
        return self._spreadsheet is not None

    def __str__(self) -> str:
        spreadsheet, selected = self._current()
        if spreadsheet is None:
            return "empty"
        if selected is None:
            return f"loaded:{spreadsheet.id}"
        return f"selected:{spreadsheet.id}[{selected.title}]"

    def __repr__(self) -> str:
        return f"{self.__class__}:{str(self)}"

    def _current(self) -> tuple[SpreadsheetSnapshot|None, SheetSnapshot|None]:
        with self._lock:
            return (self._spreadsheet, self._selected)

    @property
    def spreadsheet(self) -> SpreadsheetSnapshot|None:
        return self._current()[0]

    @property
    def spreadsheet_id(self) -> str|None:
        spreadsheet = self.spreadsheet
        return spreadsheet.id if spreadsheet is not None else None

    @property
    def selected(self) -> SheetSnapshot|None:
        return self._current()[1]

    def holds(self, spreadsheet_id: str) -> bool:
        """Is spreadsheet_id the one currently cached?"""
        return self.spreadsheet_id == spreadsheet_id

    def clear(self) -> None:
        with self._lock:
            self._spreadsheet = None
            self._selected = None

    def load(self, spreadsheet: SpreadsheetSnapshot|Spreadsheet|dict) -> SpreadsheetSnapshot:
        """
        Install a freshly fetched spreadsheet, replacing whatever was cached.
        The previous selection pointed into the old snapshot so it goes too.
        """
        snapshot = spreadsheet if isinstance(spreadsheet, SpreadsheetSnapshot) else SpreadsheetSnapshot(spreadsheet)
        with self._lock:
            previous = self._spreadsheet
            self._spreadsheet = snapshot
            self._selected = None
        if previous is not None and previous.id != snapshot.id:
            logger.debug("sheet cache: replaced %s with %s", previous.id, snapshot.id)
        logger.info("sheet cache: loaded %s (%d sheet(s))", snapshot.id, len(snapshot))
        return snapshot

    def select(self, index: int) -> SheetSnapshot:
        """
        Select the sheet at tab position index (0-based) for read_range().
        An index outside the cached sheets raises SheetNotFoundError and
        leaves the current selection as it was.
        """
        with self._lock:
            if self._spreadsheet is None:
                raise NotLoadedError("no spreadsheet loaded, nothing to select from")
            sheet = self._spreadsheet.by_position(index)
            self._selected = sheet
        logger.debug("sheet cache: selected '%s' of %s", sheet.title, sheet.spreadsheet_id)
        return sheet

    def read_range(self, ref: str) -> list[list[CellValue]]:
        """
        Read ref ('A1:C5', 'B2', ...) from the selected sheet.
        """
        _, selected = self._current()
        if selected is None:
            raise NotLoadedError("no sheet selected, load a sheet before reading ranges")
        return selected.read_range(ref)

    def read_named_range(self, title: str, ref: str) -> list[list[CellValue]]:
        """
        Read ref from the cached sheet called title, selection is untouched.
        """
        spreadsheet, _ = self._current()
        if spreadsheet is None:
            raise NotLoadedError("no spreadsheet loaded, load one before reading ranges")
        return spreadsheet.by_title(title).read_range(ref)
