from datetime import date

import pytest

from songlib.support.dates import format_release_date, parse_release_date


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [("26.06.2000", date(2000, 6, 26)), ("29.02.2004", date(2004, 2, 29)), ("01.01.0999", date(999, 1, 1))],
)
def test_parse_zero_padded_dates(raw, expected):
    assert parse_release_date(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    ["1.6.2000", "01.6.2000", "1.06.2000", " 26.06.2000", "26.06.2000 ", "26.06.00", "29.02.2001",
     "26-06-2000", "２６.０６.２０００", "", None, 26062000],
)
def test_parse_rejects_anything_but_dd_mm_yyyy(raw):
    assert parse_release_date(raw) is None


@pytest.mark.unit
def test_format_pads_every_field():
    assert format_release_date(date(2000, 6, 1)) == "01.06.2000"
    assert format_release_date(date(999, 1, 1)) == "01.01.0999"
    assert format_release_date(None) is None


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["16.07.2006", "01.01.0999", "31.12.9999"])
def test_parsed_date_reads_back_verbatim(raw):
    assert format_release_date(parse_release_date(raw)) == raw
