# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_date_parser.py
# -----------------------------------------------------------------------------
from datetime import datetime

import pytest

from utility.date_parser import parse_date

# Wednesday afternoon
REF = datetime(2026, 10, 14, 15, 30)


@pytest.mark.parametrize(
    "text, expected, all_day",
    [
        ("tomorrow", datetime(2026, 10, 15, 9, 0), True),
        ("yesterday", datetime(2026, 10, 13, 9, 0), True),
        ("in 2 weeks", datetime(2026, 10, 28, 9, 0), True),
        ("3 days ago", datetime(2026, 10, 11, 9, 0), True),
        ("next week", datetime(2026, 10, 19, 9, 0), True),
        ("friday", datetime(2026, 10, 16, 9, 0), True),
        ("wednesday", datetime(2026, 10, 21, 9, 0), True),
        ("last Tuesday", datetime(2026, 10, 13, 9, 0), True),
        ("tomorrow at 3pm", datetime(2026, 10, 15, 15, 0), False),
        ("end of month", datetime(2026, 10, 31, 17, 0), True),
        ("2026-11-01", datetime(2026, 11, 1, 9, 0), True),
    ],
)
def test_parse_phrases(text, expected, all_day):
    parsed = parse_date(text, reference=REF)

    assert parsed is not None
    assert parsed.date == expected
    assert parsed.is_all_day is all_day


def test_in_hours_keeps_time_of_day():
    parsed = parse_date("in 2 hours", reference=REF)
    assert parsed.date == datetime(2026, 10, 14, 17, 30)
    assert parsed.is_all_day is False


def test_unparseable_text_returns_none():
    assert parse_date("", reference=REF) is None
    assert parse_date("   ", reference=REF) is None
    assert parse_date("whenever works", reference=REF) is None
