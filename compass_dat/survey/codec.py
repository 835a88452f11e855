# -*- coding: utf-8 -*-
"""Numeric fields of a .DAT file and their "not measured" sentinels.

All numbers in a .DAT file are stored in fixed internal units: decimal feet
for lengths and LRUDs, degrees for angles. The FORMAT code in the trip
header only changes how the Compass editor *displays* them.

Absent values are written as out-of-range numbers rather than left blank.
They are decoded to ``None`` here and nowhere else.
"""

import re
from re import Pattern

from compass_dat.constants import MISSING_LRUD_THRESHOLD
from compass_dat.constants import MISSING_MEASUREMENT_THRESHOLD
from compass_dat.segment import SegmentParser
from compass_dat.segment import Span

NUMBER_PATTERN: Pattern[str] = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)")


def parse_number(parser: SegmentParser, token: Span, message: str) -> float:
    """Decode a decimal token.

    Args:
        parser: Parser the token was read from (for error locations)
        token: The raw token
        message: Error message if the token is not a decimal number

    Returns:
        The numeric value

    Raises:
        GrammarViolation: If the token is not a decimal number
    """
    if NUMBER_PATTERN.fullmatch(token.value) is None:
        raise parser.error(message, token.start, token.end)
    return float(token.value)


def parse_measurement(
    parser: SegmentParser,
    token: Span,
    message: str,
) -> float | None:
    """Decode a shot length, azimuth or inclination.

    Values <= -999 mean the measurement was not taken.
    """
    value = parse_number(parser, token, message)
    if value <= MISSING_MEASUREMENT_THRESHOLD:
        return None
    return value


def parse_lrud(parser: SegmentParser, token: Span, message: str) -> float | None:
    """Decode a left/right/up/down distance in feet.

    Any negative value means the dimension was not measured.
    """
    value = parse_number(parser, token, message)
    if value < MISSING_LRUD_THRESHOLD:
        return None
    return value
