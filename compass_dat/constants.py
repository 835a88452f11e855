# -*- coding: utf-8 -*-
"""Fixed values of the .DAT format.

Column widths, sentinels and control characters are part of the file
format and are shared by the parser and the formatter.
"""

# -----------------------------------------------------------------------------
# Encodings
# -----------------------------------------------------------------------------

#: Compass writes its files in the Windows ANSI code page
COMPASS_ENCODING = "cp1252"

#: Encoding used for JSON documents
JSON_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Unit Conversions
# -----------------------------------------------------------------------------

#: Feet to meters, exact by definition
FEET_TO_METERS: float = 0.3048

#: Meters to feet
METERS_TO_FEET: float = 1.0 / FEET_TO_METERS

# -----------------------------------------------------------------------------
# Sentinels
# -----------------------------------------------------------------------------

#: Lengths and angles at or below this value mean "not measured"
MISSING_MEASUREMENT_THRESHOLD: float = -999.0

#: LRUD values below this value mean "not measured"
MISSING_LRUD_THRESHOLD: float = 0.0

#: Value written in place of an absent measurement
MISSING_VALUE: float = -9999.0

# -----------------------------------------------------------------------------
# Special Characters
# -----------------------------------------------------------------------------

#: Separates trips in a .DAT file
FORM_FEED: str = "\f"

#: Control-Z, marks the end of the data in old files
END_OF_DATA: str = "\x1a"

#: Line terminator used when writing
LINE_TERMINATOR: str = "\r\n"

# -----------------------------------------------------------------------------
# Column Layout
# -----------------------------------------------------------------------------

#: Width of the FROM station column
FROM_STATION_WIDTH: int = 11

#: Width of the TO station column
TO_STATION_WIDTH: int = 12

#: Width of numeric columns
NUMBER_WIDTH: int = 8

#: Decimal places of numeric columns
NUMBER_PRECISION: int = 2

#: Width of the flags column (including its leading space)
FLAGS_WIDTH: int = 6

#: Width of the DECLINATION value
DECLINATION_WIDTH: int = 7

#: Shortest FORMAT code that carries a backsight flag
FORMAT_BACKSIGHT_MIN_LENGTH: int = 12

#: Shortest FORMAT code that carries an LRUD association
FORMAT_ASSOCIATION_MIN_LENGTH: int = 13

#: Shortest FORMAT code that carries a 5-item shot measurement order
FORMAT_EXTENDED_MIN_LENGTH: int = 15

# -----------------------------------------------------------------------------
# Shot Flag Characters
# -----------------------------------------------------------------------------

#: Shot field of each flag letter, in the order the letters are written
FLAG_CHARS: dict[str, str] = {
    "excluded_from_length": "L",
    "excluded_from_plotting": "P",
    "excluded_from_all_processing": "X",
    "do_not_adjust": "C",
}

#: Opens a flag run on a shot line
FLAGS_START: str = "#|"

#: Closes a flag run on a shot line
FLAGS_END: str = "#"
