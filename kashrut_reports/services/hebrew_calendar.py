"""Gregorian -> Hebrew calendar date strings, formatted like hebcal ("15 Cheshvan 5787")."""
from datetime import date, datetime
from typing import Union

from convertdate import hebrew

# convertdate numbers months from Nisan = 1; 12 is Adar (Adar I in a leap year), 13 is Adar II
MONTH_NAMES = {
    1: "Nisan",
    2: "Iyyar",
    3: "Sivan",
    4: "Tamuz",
    5: "Av",
    6: "Elul",
    7: "Tishrei",
    8: "Cheshvan",
    9: "Kislev",
    10: "Tevet",
    11: "Sh'vat",
    12: "Adar",
    13: "Adar II",
}


def parse_gregorian(value: Union[str, date, datetime]) -> date:
    """ISO string or date -> date. Raises ValueError if it can't be parsed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid Gregorian date: {value!r}")
    return date.fromisoformat(value.strip()[:10])


def month_name(month: int, year: int) -> str:
    if month == 12 and hebrew.leap(year):
        return "Adar I"
    return MONTH_NAMES[month]


def to_hebrew_date(value: Union[str, date, datetime]) -> str:
    gregorian = parse_gregorian(value)
    year, month, day = hebrew.from_gregorian(gregorian.year, gregorian.month, gregorian.day)
    return f"{day} {month_name(month, year)} {year}"
