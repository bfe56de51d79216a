import threading

import pytest

from gsheetconnector.exceptions import (CellOutOfBoundsError, InvalidFormatError,
                                        NotLoadedError, SheetNotFoundError)
from gsheetconnector.sheets.cache import SheetCache
from gsheetconnector.sheets.resources import CellData
from gsheetconnector.sheets.sheet import SheetSnapshot
from gsheetconnector.sheets.spreadsheet import SpreadsheetSnapshot


@pytest.fixture
def book(make_spreadsheet, grid3x3):
    return make_spreadsheet("book-1",
                            ("Data", grid3x3),
                            ("Other", [["x", None, "z"], ["only"]]))


@pytest.fixture
def cache(book) -> SheetCache:
    c = SheetCache()
    c.load(book)
    return c


def test_empty_cache():
    c = SheetCache()
    assert(not c)
    assert(c.spreadsheet_id is None)
    assert(str(c) == "empty")
    with pytest.raises(NotLoadedError):
        c.read_range("A1")
    with pytest.raises(NotLoadedError):
        c.read_named_range("Data", "A1")
    with pytest.raises(NotLoadedError):
        c.select(0)


def test_loaded_but_not_selected(cache):
    assert(cache)
    assert(cache.holds("book-1"))
    assert(cache.selected is None)
    with pytest.raises(NotLoadedError):
        cache.read_range("A1")
    # named reads only need the spreadsheet
    assert(cache.read_named_range("Data", "B2") == [["e"]])


def test_read_selected(cache):
    sheet = cache.select(0)
    assert(sheet.title == "Data")
    assert(str(cache) == "selected:book-1[Data]")
    assert(cache.read_range("A1:B2") == [["a", "b"], ["d", "e"]])
    assert(cache.read_range("C3") == [["i"]])
    assert(cache.read_range("A1:C3") == [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]])
    assert(cache.read_range("Data!B1:B3") == [["b"], ["e"], ["h"]])


def test_read_reversed_range(cache):
    cache.select(0)
    assert(cache.read_range("B2:A1") == cache.read_range("A1:B2"))


def test_read_other_sheet_prefix(cache):
    cache.select(0)
    with pytest.raises(InvalidFormatError):
        cache.read_range("Other!A1")


def test_read_named(cache):
    assert(cache.read_named_range("Other", "A1:C1") == [["x", None, "z"]])
    with pytest.raises(SheetNotFoundError):
        cache.read_named_range("Missing", "A1")
    # still a KeyError for anyone catching builtins
    with pytest.raises(KeyError):
        cache.read_named_range("Missing", "A1")


def test_out_of_bounds(cache):
    cache.select(0)
    with pytest.raises(CellOutOfBoundsError):
        cache.read_range("A1:D1")
    with pytest.raises(CellOutOfBoundsError):
        cache.read_range("A4")
    # ragged rows, row 2 of Other only has one cell
    with pytest.raises(CellOutOfBoundsError):
        cache.read_named_range("Other", "A2:B2")
    assert(cache.read_named_range("Other", "A2") == [["only"]])


def test_select_out_of_range_keeps_selection(cache):
    cache.select(1)
    with pytest.raises(SheetNotFoundError):
        cache.select(2)
    with pytest.raises(SheetNotFoundError):
        cache.select(-1)
    assert(cache.selected.title == "Other")


def test_load_replaces_snapshot(cache, make_spreadsheet):
    cache.select(0)
    old = cache.spreadsheet
    new = cache.load(make_spreadsheet("book-2", ("Fresh", [["1"]])))
    assert(cache.spreadsheet is new)
    assert(cache.spreadsheet is not old)
    assert(cache.holds("book-2"))
    assert(not cache.holds("book-1"))
    assert(cache.selected is None)
    with pytest.raises(NotLoadedError):
        cache.read_range("A1")
    with pytest.raises(SheetNotFoundError):
        cache.read_named_range("Data", "A1")


def test_clear(cache):
    cache.clear()
    assert(not cache)
    assert(cache.spreadsheet is None)


def test_spreadsheet_snapshot(book):
    snap = SpreadsheetSnapshot(book)
    assert(snap.id == "book-1")
    assert(snap.title == "Book")
    assert(len(snap) == 2)
    assert("Data" in snap)
    assert(100 in snap)
    assert("Nope" not in snap)
    assert(snap[1].title == "Other")
    assert(snap["Data"].index == 0)
    with pytest.raises(SheetNotFoundError):
        snap[5]


def test_sheet_snapshot_grid_offsets():
    sheet = SheetSnapshot("book-1", {
        "properties": {"sheetId": 3, "title": "Offset", "index": 0,
                       "gridProperties": {"rowCount": 10, "columnCount": 5}},
        "data": [{"startRow": 2, "startColumn": 1,
                  "rowData": [{"values": [{"formattedValue": "B3"}, {"formattedValue": "C3"}]}]}],
    })
    assert(sheet.values == ((), (), (None, "B3", "C3")))
    assert(sheet.read_range("B3:C3") == [["B3", "C3"]])
    assert(sheet.cell(2, 0) is None)
    assert(len(sheet) == 50)
    assert(sheet.a1 == "Offset!A1:E10")
    with pytest.raises(CellOutOfBoundsError):
        sheet.read_range("A1")


def test_snapshot_is_immutable(cache):
    sheet = cache.select(0)
    with pytest.raises(TypeError):
        sheet.values[0][0] = "changed"


def test_cell_typed_value():
    assert(CellData.from_base({"formattedValue": "$1.50", "effectiveValue": {"numberValue": 1.5}}).typed_value() == 1.5)
    assert(CellData.from_base({"formattedValue": "3", "effectiveValue": {"numberValue": 3.0}}).typed_value() == 3)
    assert(CellData.from_base({"formattedValue": "TRUE", "effectiveValue": {"boolValue": True}}).typed_value() is True)
    assert(CellData.from_base({"formattedValue": "hi", "effectiveValue": {"stringValue": "hi"}}).typed_value() == "hi")
    assert(CellData.from_base({}).typed_value() is None)
    # unknown fields from the API are dropped
    assert(CellData.from_base({"formattedValue": "x", "note": "ignored"}).formattedValue == "x")


def test_reads_during_reload(make_spreadsheet):
    books = [SpreadsheetSnapshot(make_spreadsheet(f"book-{v}", ("Data", [[v] * 3] * 3)))
             for v in ("x", "y")]
    c = SheetCache()
    c.load(books[0])
    c.select(0)
    done = threading.Event()
    failures = []

    def reload():
        for i in range(2000):
            c.load(books[i % 2])
            c.select(0)
        done.set()

    writer = threading.Thread(target=reload)
    writer.start()
    reads = 0
    while not done.is_set() or reads < 100:
        try:
            grid = c.read_range("A1:C3")
        except NotLoadedError:
            # between a load and its select
            continue
        reads += 1
        cells = {v for row in grid for v in row}
        if len(cells) != 1 or len(grid) != 3:
            failures.append(grid)
    writer.join()
    assert(not failures)
    assert(c.read_range("B2") == [["y"]])
