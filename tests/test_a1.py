import pytest

from gsheetconnector.exceptions import InvalidFormatError
from gsheetconnector.sheets.a1 import (CellCoordinate, GoogleSheetsA1Notation,
                                       column_letter_to_number, number_to_column_letter,
                                       parse_cell, parse_range, split_sheet)

def test_column_letters():
    assert(column_letter_to_number("A") == 1)
    assert(column_letter_to_number("Z") == 26)
    assert(column_letter_to_number("AA") == 27)
    assert(column_letter_to_number("AZ") == 52)
    assert(column_letter_to_number("BA") == 53)
    assert(column_letter_to_number("BX") == 76)
    assert(column_letter_to_number("ZZZ") == 18278)

def test_column_letters_inverse():
    for n in range(1, 2000):
        assert(column_letter_to_number(number_to_column_letter(n)) == n)
    assert(number_to_column_letter(26) == "Z")
    assert(number_to_column_letter(27) == "AA")
    assert(number_to_column_letter(702) == "ZZ")
    assert(number_to_column_letter(703) == "AAA")

@pytest.mark.parametrize("letters", ["", "a", "A1", "Ä", "A B", "A\n", "\nA"])
def test_invalid_column_letters(letters):
    with pytest.raises(InvalidFormatError):
        column_letter_to_number(letters)

def test_invalid_column_number():
    with pytest.raises(InvalidFormatError):
        number_to_column_letter(0)

def test_parse_cell():
    assert(parse_cell("A1") == CellCoordinate(0, 0))
    assert(parse_cell("B2") == CellCoordinate(row=1, column=1))
    assert(parse_cell("AA10") == CellCoordinate(row=9, column=26))
    assert(parse_cell("Sheet1!C7") == CellCoordinate(6, 2))

@pytest.mark.parametrize("ref", ["", "B", "12", "A0", "a1", "1A", "A1B", "A١", "A\n1", "A1٢"])
def test_parse_cell_invalid(ref):
    with pytest.raises(InvalidFormatError):
        parse_cell(ref)

def test_invalid_format_is_value_error():
    with pytest.raises(ValueError):
        parse_cell("nope")

def test_parse_range():
    start, end = parse_range("A1:B2")
    assert(start == CellCoordinate(0, 0))
    assert(end == CellCoordinate(1, 1))

    start, end = parse_range("C3")
    assert(start == end == CellCoordinate(2, 2))

    start, end = parse_range("'My Sheet'!B2:D10")
    assert(start == CellCoordinate(1, 1))
    assert(end == CellCoordinate(9, 3))

def test_parse_range_reversed():
    assert(parse_range("B2:A1") == parse_range("A1:B2"))
    # only one axis reversed
    start, end = parse_range("A5:C2")
    assert(start == CellCoordinate(1, 0))
    assert(end == CellCoordinate(4, 2))

@pytest.mark.parametrize("ref", ["A1:B2:C3", "A1:", ":B2", "A1-B2"])
def test_parse_range_invalid(ref):
    with pytest.raises(InvalidFormatError):
        parse_range(ref)

def test_split_sheet():
    assert(split_sheet("A1:B2") == ("", "A1:B2"))
    assert(split_sheet("test!A1") == ("test", "A1"))
    assert(split_sheet("'this is a test'!A1") == ("this is a test", "A1"))
    assert(split_sheet("'It''s'!A1") == ("It's", "A1"))

def test_valid_bounded():
    a1 = GoogleSheetsA1Notation("test!C4:BX20")
    assert(a1)
    assert(a1.sheet == "test")
    assert(a1.start_col == 'C')
    assert(a1.end_col == 'BX')
    assert(a1.start_row == 4)
    assert(a1.end_row == 20)
    assert(a1.start_col_int == 3)
    assert(a1.end_col_int == 76)
    assert(a1.start == CellCoordinate(3, 2))
    assert(a1.end == CellCoordinate(19, 75))

def test_reversed_is_normalized():
    a1 = GoogleSheetsA1Notation("test!C4:BX2")
    assert(a1)
    assert(a1.start_row == 2)
    assert(a1.end_row == 4)
    assert(a1.a1 == "test!C2:BX4")

def test_single_cell():
    a1 = GoogleSheetsA1Notation("B3")
    assert(a1.a1 == "B3")
    assert(a1.sheet == "")
    assert(len(a1) == 1)

def test_titles():
    a1 = GoogleSheetsA1Notation("test!A1:B2")
    title_with_spaces = "this is a test"
    a1.sheet = title_with_spaces
    assert(a1.sheet == title_with_spaces)
    assert(a1.a1 == "'this is a test'!A1:B2")
    assert(GoogleSheetsA1Notation.generate_a1("It's", 1, 1) == "'It''s'!A1")

def test_invalid():
    a1 = GoogleSheetsA1Notation()
    assert(not a1)
    assert(str(a1) == "<invalid>")
    a1 = GoogleSheetsA1Notation("test!:d3")
    assert(not a1)
    a1 = GoogleSheetsA1Notation("test:")
    assert(not a1)
    # past the last addressable column
    assert(GoogleSheetsA1Notation("A1:ZZZ2"))
    assert(not GoogleSheetsA1Notation("A1:AAAA2"))
    # unbounded ranges go to the API as plain strings
    a1 = GoogleSheetsA1Notation("test!A:B")
    assert(not a1)
    with pytest.raises(InvalidFormatError):
        GoogleSheetsA1Notation.parse("test!A:B")
    with pytest.raises(InvalidFormatError):
        a1.a1 = "nope"

def test_generate():
    assert(GoogleSheetsA1Notation.generate_a1("", "A", 1) == "A1")
    assert(GoogleSheetsA1Notation.generate_a1("data", 1, 1, 3, 5) == "data!A1:C5")
    assert(GoogleSheetsA1Notation.generate_a1("data", "B", 2, "", 9) == "data!B2:B9")
    with pytest.raises(InvalidFormatError):
        GoogleSheetsA1Notation.generate_a1("data", "A", 0)
    with pytest.raises(InvalidFormatError):
        GoogleSheetsA1Notation.generate_a1("data", "A\n", 1)
    with pytest.raises(InvalidFormatError):
        GoogleSheetsA1Notation.generate_a1("data", "A", 1, "B\n", 2)
    assert(GoogleSheetsA1Notation.generate_a1("data\n", "A", 1) == "'data\n'!A1")

def test_specials():
    a1 = GoogleSheetsA1Notation("test!A1:C5")
    assert(a1.num_rows == 5)
    assert(a1.num_cols == 3)
    assert(len(a1) == 15)

    a1 = GoogleSheetsA1Notation('test!C4:AL22')
    compare = GoogleSheetsA1Notation("test!E7:Z22")
    assert(compare in a1)
    assert("test!C4:D4" in a1)
    assert("test!B4:D4" not in a1)

    compare.sheet = "other"
    assert(compare not in a1)

    assert(compare.update('test', start_col='BC', end_col='ZZ'))
    assert(compare not in a1)

    compare.update(start_col='C', start_row=4, end_col='AL', end_row=22)
    assert(a1 == compare)
    assert(a1 == "test!C4:AL22")
    assert(a1 != "test!C4:AL23")
    assert(hash(a1) == hash(GoogleSheetsA1Notation("test!AL22:C4")))
    assert(len({a1, compare, GoogleSheetsA1Notation("test!C4:AL22")}) == 1)

def test_grid_range():
    a1 = GoogleSheetsA1Notation("Sheet1!B2:C4")
    assert(a1.grid_range(7) == {"sheetId": 7,
                                "startRowIndex": 1, "endRowIndex": 4,
                                "startColumnIndex": 1, "endColumnIndex": 3})
    with pytest.raises(InvalidFormatError):
        GoogleSheetsA1Notation().grid_range(0)

def test_to_str_list():
    assert(GoogleSheetsA1Notation.to_str_list("A1") == ["A1"])
    assert(GoogleSheetsA1Notation.to_str_list([GoogleSheetsA1Notation("x!A1:B2"), "C3"]) == ["x!A1:B2", "C3"])
