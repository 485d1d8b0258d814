import math

import pytest

from app.schemas import Category, Entry
from app.services import entry_codec


def _entry(**overrides):
    data = {
        "id": "e1",
        "product": "שניצל",
        "category": Category.MEAT,
        "date": "2025-01-05",
        "amount": 2,
        "units": "קופסאות",
        "cleanState": True,
        "skinState": False,
        "comments": "מהשוק",
    }
    data.update(overrides)
    return Entry(**data)


def test_encode_uses_id_first_layout():
    row = entry_codec.encode(_entry())
    assert row == ("e1", "שניצל", "בשר", "2025-01-05", "2", "קופסאות", "כן", "לא", "מהשוק")
    assert len(row) == entry_codec.COLUMN_COUNT


def test_round_trip_keeps_every_field():
    entry = _entry(amount=2.5)
    assert entry_codec.decode(entry_codec.encode(entry)) == entry


def test_round_trip_normalizes_missing_date_and_comments():
    entry = _entry(date=None, comments=None, cleanState=None, skinState=None)
    decoded = entry_codec.decode(entry_codec.encode(entry))
    assert decoded.date == ""
    assert decoded.comments == ""
    assert decoded.clean_state is None
    assert decoded.skin_state is None


def test_unknown_amount_stays_nan_on_both_sides():
    entry = _entry(amount=None)
    row = entry_codec.encode(entry)
    assert row[4] == ""
    assert math.isnan(entry.amount)
    assert math.isnan(entry_codec.decode(row).amount)


@pytest.mark.parametrize(
    "cell, expected",
    [("1,5", 1.5), ("2", 2.0), (" 3.25 ", 3.25), ("0", 0.0)],
)
def test_amount_decodes_decimal_comma(cell, expected):
    assert entry_codec.cell_to_amount(cell) == expected


@pytest.mark.parametrize("cell", ["", "abc", "1,5,5", "inf", "nan", "1_000", None])
def test_unparsable_amount_is_nan(cell):
    assert math.isnan(entry_codec.cell_to_amount(cell))


def test_boolean_tokens():
    assert entry_codec.cell_to_bool("כן") is True
    assert entry_codec.cell_to_bool(" לא ") is False
    assert entry_codec.cell_to_bool("yes") is None
    assert entry_codec.cell_to_bool("") is None
    assert entry_codec.bool_to_cell(None) == ""


def test_unrecognized_boolean_token_decodes_to_unknown():
    row = list(entry_codec.encode(_entry()))
    row[6] = "maybe"
    assert entry_codec.decode(row).clean_state is None


def test_decode_short_row_fills_defaults():
    entry = entry_codec.decode(["x9", "פיתות"])
    assert entry.id == "x9"
    assert entry.product == "פיתות"
    assert entry.category is Category.OTHER
    assert entry.units == ""
    assert entry.comments == ""
    assert math.isnan(entry.amount)


def test_decode_empty_row_and_unknown_category():
    assert entry_codec.decode([]).category is Category.OTHER
    assert entry_codec.decode(["x", "y", "ירקות"]).category is Category.OTHER


def test_decode_ignores_extra_cells():
    row = list(entry_codec.encode(_entry())) + ["extra", "cells"]
    assert entry_codec.decode(row).comments == "מהשוק"


def test_decode_converts_serial_date():
    row = list(entry_codec.encode(_entry()))
    row[3] = 45662
    assert entry_codec.decode(row).date == "2025-01-05"
    row[3] = 45662.75
    assert entry_codec.decode(row).date == "2025-01-05"


@pytest.mark.parametrize("cell", ["1/5/2025", "05/01/2025", "soon"])
def test_decode_keeps_text_date_verbatim(cell):
    # Порядок день/месяц в тексте неизвестен, поэтому дату не переставляем
    row = list(entry_codec.encode(_entry()))
    row[3] = cell
    assert entry_codec.decode(row).date == cell


def test_decode_accepts_unformatted_numbers():
    row = [12, "p", "בשר", "", 1.5, "", "", "", ""]
    entry = entry_codec.decode(row)
    assert entry.id == "12"
    assert entry.amount == 1.5


def test_quote_text_cells_marks_free_text_only():
    row = entry_codec.encode(_entry(id="0012", product="=2+2", units="", comments="+1"))
    quoted = entry_codec.quote_text_cells(row)
    assert quoted == ("'0012", "'=2+2", "בשר", "2025-01-05", "2", "", "כן", "לא", "'+1")


def test_decode_record_accepts_lenient_booleans():
    entry = entry_codec.decode_record(
        {"id": "r1", "product": "דג", "category": "דגים", "amount": "3", "cleanState": "TRUE", "skinState": "0"}
    )
    assert entry.category is Category.FISH
    assert entry.clean_state is True
    assert entry.skin_state is False
    assert entry.amount == 3.0
    assert entry.date == ""


def test_decode_record_keeps_csv_date_text():
    entry = entry_codec.decode_record({"id": "r2", "date": "1/5/2025"})
    assert entry.date == "1/5/2025"
