# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-06
# Description: date_parser.py
# -----------------------------------------------------------------------------
"""
Natural-language date parsing for assistant tool inputs.

Handles the phrases people actually type into a CRM chat ("tomorrow",
"next Tuesday", "in 2 weeks", "3 days ago", "end of month", "at 3pm") with
regex patterns, then falls back to dateutil for absolute dates such as
"March 5" or "2026-11-01 14:00".

All datetimes are naive UTC, matching what the persistence layer stores.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

# Default hour for date-only phrases
DEFAULT_HOUR = 9

WEEKDAYS = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

UNIT_DELTAS = {
    "minute": lambda n: timedelta(minutes=n),
    "hour": lambda n: timedelta(hours=n),
    "day": lambda n: timedelta(days=n),
    "week": lambda n: timedelta(weeks=n),
    "month": lambda n: relativedelta(months=n),
    "year": lambda n: relativedelta(years=n),
}

NUMBER_WORDS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10, "couple": 2, "few": 3,
}

TIME_PATTERN = re.compile(
    r"""
    (?:
        (?:at\s+)?(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<ampm>a\.?m\.?|p\.?m\.?)
        |
        (?:at\s+)?(?P<hour24>[01]?\d|2[0-3]):(?P<minute24>[0-5]\d)
        |
        (?P<named>noon|midnight)
    )
    """,
    re.IGNORECASE | re.VERBOSE,
)

SIMPLE_DAY_OFFSETS = {
    r"\bday after tomorrow\b": 2,
    r"\bday before yesterday\b": -2,
    r"\btomorrow\b": 1,
    r"\byesterday\b": -1,
    r"\btoday\b": 0,
    r"\btonight\b": 0,
    r"\bnow\b": 0,
}

RELATIVE_AMOUNT = re.compile(
    r"\b(?:in\s+)?(?P<amount>\d+|a|an|one|two|three|four|five|six|seven|eight|nine|ten|couple|few)"
    r"(?:\s+of)?\s+(?P<unit>minute|hour|day|week|month|year)s?(?P<ago>\s+ago)?\b",
    re.IGNORECASE,
)

NEXT_LAST_UNIT = re.compile(r"\b(?P<dir>next|last|this)\s+(?P<unit>week|month|year)\b", re.IGNORECASE)

END_OF = re.compile(r"\bend\s+of\s+(?:the\s+)?(?P<unit>day|week|month|year)\b", re.IGNORECASE)

WEEKDAY_PATTERN = re.compile(
    r"\b(?:(?P<dir>next|last|this|on)\s+)?(?P<day>" + "|".join(sorted(WEEKDAYS, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)


@dataclass
class ParsedDate:
    date: datetime
    text: str
    is_all_day: bool


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(text: str, reference: Optional[datetime] = None) -> Optional[ParsedDate]:
    """
    Parse the first date expression found in ``text``.

    Bare weekdays resolve forward ("friday" is the next Friday); "last <weekday>"
    resolves backward. Returns None when nothing date-like is found.
    """
    if not text or not text.strip():
        return None

    ref = reference or utcnow()
    lowered = text.strip().lower()

    matched = _match_relative(lowered, ref)
    if matched is not None:
        dt, original = matched
        return _with_time(dt, original, lowered)

    try:
        parsed = dateutil_parser.parse(text, fuzzy=True, default=ref.replace(hour=0, minute=0, second=0, microsecond=0))
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)

    is_all_day = parsed.hour == 0 and parsed.minute == 0
    if is_all_day:
        parsed = parsed.replace(hour=DEFAULT_HOUR)
    return ParsedDate(date=parsed, text=text.strip(), is_all_day=is_all_day)


def _match_relative(lowered: str, ref: datetime) -> Optional[tuple[datetime, str]]:
    m = END_OF.search(lowered)
    if m:
        unit = m.group("unit")
        day = ref.replace(hour=0, minute=0, second=0, microsecond=0)
        if unit == "day":
            end = day
        elif unit == "week":
            end = day + timedelta(days=4 - day.weekday() if day.weekday() <= 4 else 6 - day.weekday())
        elif unit == "month":
            end = day + relativedelta(day=31)
        else:
            end = day.replace(month=12, day=31)
        return end.replace(hour=17), m.group(0)

    m = RELATIVE_AMOUNT.search(lowered)
    if m:
        raw = m.group("amount").lower()
        amount = int(raw) if raw.isdigit() else NUMBER_WORDS[raw]
        if m.group("ago"):
            amount = -amount
        return ref + UNIT_DELTAS[m.group("unit").lower()](amount), m.group(0)

    m = NEXT_LAST_UNIT.search(lowered)
    if m:
        sign = {"next": 1, "last": -1, "this": 0}[m.group("dir").lower()]
        unit = m.group("unit").lower()
        if unit == "week" and sign == 1:
            # Monday of next week
            start = ref + timedelta(days=7 - ref.weekday())
            return start.replace(hour=DEFAULT_HOUR, minute=0, second=0, microsecond=0), m.group(0)
        return ref + UNIT_DELTAS[unit](sign), m.group(0)

    m = WEEKDAY_PATTERN.search(lowered)
    if m:
        target = WEEKDAYS[m.group("day").lower()]
        direction = (m.group("dir") or "").lower()
        if direction == "last":
            delta = (ref.weekday() - target) % 7 or 7
            return ref - timedelta(days=delta), m.group(0)
        # Always the next occurrence strictly after today
        delta = (target - ref.weekday()) % 7 or 7
        return ref + timedelta(days=delta), m.group(0)

    for pattern, offset in SIMPLE_DAY_OFFSETS.items():
        m = re.search(pattern, lowered)
        if m:
            return ref + timedelta(days=offset), m.group(0)

    return None


def _with_time(dt: datetime, original: str, lowered: str) -> ParsedDate:
    time_match = TIME_PATTERN.search(lowered)
    if time_match:
        hour, minute = _time_from_match(time_match)
        return ParsedDate(
            date=dt.replace(hour=hour, minute=minute, second=0, microsecond=0),
            text=original,
            is_all_day=False,
        )

    if "hour" in original or "minute" in original or original == "now":
        return ParsedDate(date=dt.replace(microsecond=0), text=original, is_all_day=False)

    if original.startswith("end of"):
        return ParsedDate(date=dt, text=original, is_all_day=True)

    if original == "tonight":
        return ParsedDate(date=dt.replace(hour=19, minute=0, second=0, microsecond=0), text=original, is_all_day=False)

    return ParsedDate(
        date=dt.replace(hour=DEFAULT_HOUR, minute=0, second=0, microsecond=0),
        text=original,
        is_all_day=True,
    )


def _time_from_match(match: re.Match) -> tuple[int, int]:
    groups = match.groupdict()

    if groups.get("named"):
        return (12, 0) if groups["named"].lower() == "noon" else (0, 0)

    if groups.get("hour24"):
        return int(groups["hour24"]), int(groups["minute24"])

    hour = int(groups.get("hour") or 0)
    minute = int(groups.get("minute") or 0)
    ampm = (groups.get("ampm") or "").lower().replace(".", "")
    if ampm == "pm" and hour < 12:
        hour += 12
    elif ampm == "am" and hour == 12:
        hour = 0
    return hour % 24, minute
