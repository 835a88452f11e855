# -*- coding: utf-8 -*-
"""Checks for values that must survive a write/read cycle.

A shot line splits its columns on whitespace, so the only thing the writer
has to refuse is a station name the reader would split or choke on.
"""

import calendar
import re
from re import Pattern

#: At least one character, none of them whitespace or ASCII control
#: characters. No length limit: old Compass versions stopped at 12
#: characters but current files go beyond.
STATION_NAME_PATTERN: Pattern[str] = re.compile(r"^[^\s\x00-\x1f\x7f]+$")


def is_valid_station_name(name: str) -> bool:
    """Return whether ``name`` can be written to a shot line and read back."""
    return bool(name) and STATION_NAME_PATTERN.match(name) is not None


def _printable(name: str) -> str:
    return "".join(
        f"\\x{ord(char):02x}" if ord(char) < 0x20 or ord(char) == 0x7F else char
        for char in name
    )


def validate_station_name(name: str) -> None:
    """Refuse a station name that would corrupt the shot table.

    Args:
        name: Station name about to be written

    Raises:
        ValueError: If :func:`is_valid_station_name` rejects the name. Control
            characters are shown as ``\\xNN`` in the message.
    """
    if is_valid_station_name(name):
        return
    msg = f"Invalid station name: {_printable(name)!r}"
    raise ValueError(msg)


def days_in_month(month: int, year: int) -> int:
    """Length of ``month`` (1-12) in the proleptic Gregorian ``year``."""
    return calendar.monthrange(year, month)[1]
