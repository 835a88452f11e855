# -*- coding: utf-8 -*-
"""Formatting (serialization) for Compass .DAT survey files.

This module provides functions to convert survey data models back to
the Compass .DAT file format string representation.

All data is written in Compass's fixed internal units (feet, degrees)
and fixed column order. The display units of the header only show up in
the FORMAT code; they never change the numeric columns.
"""

from collections.abc import Callable
from collections.abc import Iterable

from compass_dat.constants import DECLINATION_WIDTH
from compass_dat.constants import FLAGS_END
from compass_dat.constants import FLAGS_START
from compass_dat.constants import FLAGS_WIDTH
from compass_dat.constants import FORM_FEED
from compass_dat.constants import FROM_STATION_WIDTH
from compass_dat.constants import LINE_TERMINATOR
from compass_dat.constants import MISSING_VALUE
from compass_dat.constants import NUMBER_PRECISION
from compass_dat.constants import NUMBER_WIDTH
from compass_dat.constants import TO_STATION_WIDTH
from compass_dat.survey.models import CompassShot
from compass_dat.survey.models import CompassTrip
from compass_dat.survey.models import CompassTripHeader
from compass_dat.validation import validate_station_name

COLUMN_HEADERS = (
    "        FROM           TO   LENGTH  BEARING      INC"
    "     LEFT       UP     DOWN    RIGHT"
)
BACKSIGHT_COLUMN_HEADERS = "     AZM2     INC2"
TRAILING_COLUMN_HEADERS = "   FLAGS  COMMENTS"

# Written in place of a missing survey date
_UNKNOWN_DATE = "1 1 1"


def format_number(value: float | None) -> str:
    """Format a number with the fixed precision of the file.

    Args:
        value: Numeric value (None for missing)

    Returns:
        The value with 2 decimal places, or the missing-value sentinel
    """
    if value is None:
        value = MISSING_VALUE
    # Adding 0.0 turns a rounded -0.0 into 0.0
    return f"{round(value, NUMBER_PRECISION) + 0.0:.{NUMBER_PRECISION}f}"


def _cell(value: float | None) -> str:
    """Format a number as a space-separated, right-aligned column."""
    return " " + format_number(value).rjust(NUMBER_WIDTH)


def format_format_code(header: CompassTripHeader) -> str:
    """Build the FORMAT token of a header.

    Every per-character mapping used when parsing the token is inverted, in
    the same positions. See :attr:`CompassTripHeader.format_code`.
    """
    return header.format_code


def format_surveyors(header: CompassTripHeader) -> str:
    """Render the SURVEY TEAM: line.

    The raw team text is written back unchanged when it is known. Otherwise
    the names are joined with semicolons if any name contains a comma, with
    commas if not, and an empty team is written as ``?``.
    """
    if header.raw_surveyors is not None:
        return header.raw_surveyors
    if header.surveyors:
        if any("," in name for name in header.surveyors):
            return ";".join(header.surveyors)
        return ",".join(header.surveyors)
    return "?"


def format_trip_header(header: CompassTripHeader) -> str:
    """Format a trip header as text.

    Args:
        header: Trip header data

    Returns:
        The six header lines, each terminated with CRLF
    """
    lines = [
        header.cave_name or "",
        f"SURVEY NAME: {header.survey_name or ''}",
    ]

    if header.date:
        date_str = f"{header.date.month} {header.date.day} {header.date.year}"
    else:
        date_str = _UNKNOWN_DATE

    date_line = f"SURVEY DATE: {date_str}"
    # The comment must stay on the date line
    comment = " ".join((header.comment or "").splitlines()).strip()
    if comment:
        date_line += f"  COMMENT:{comment}"
    lines.append(date_line)

    lines.append("SURVEY TEAM:")
    lines.append(format_surveyors(header))

    corrections = " ".join(
        format_number(value)
        for value in (
            header.frontsight_azimuth_correction,
            header.frontsight_inclination_correction,
            header.length_correction,
        )
    )
    declination_line = (
        f"DECLINATION: {format_number(header.declination).rjust(DECLINATION_WIDTH)}"
        f"  FORMAT: {format_format_code(header)}"
        f"  CORRECTIONS: {corrections}"
    )
    if header.has_backsight_corrections:
        declination_line += (
            f"  CORRECTIONS2: {format_number(header.backsight_azimuth_correction)}"
            f" {format_number(header.backsight_inclination_correction)}"
        )
    lines.append(declination_line)

    return LINE_TERMINATOR.join(lines) + LINE_TERMINATOR


def format_shot(shot: CompassShot, header: CompassTripHeader | None = None) -> str:
    """Format a single shot as a line of text.

    All values are output in Compass's fixed internal units (feet, degrees)
    in fixed column order:
    FROM TO LENGTH AZIMUTH INCLINATION LEFT UP DOWN RIGHT [BS_AZ BS_INC] [FLAGS] [COMMENT]

    Args:
        shot: Shot data
        header: Header of the owning trip. Backsight columns are written if
            it has backsights. Without a header they are written only if the
            shot carries a backsight value.

    Returns:
        Formatted shot line, without line terminator

    Raises:
        ValueError: If a station name could not be read back
    """  # noqa: E501
    validate_station_name(shot.from_station_name)
    validate_station_name(shot.to_station_name)

    columns = [
        " " + shot.from_station_name.rjust(FROM_STATION_WIDTH),
        " " + shot.to_station_name.rjust(TO_STATION_WIDTH),
    ]

    # Shot measurements in FIXED order: LENGTH, AZIMUTH, INCLINATION
    columns.append(_cell(shot.length))
    columns.append(_cell(shot.frontsight_azimuth))
    columns.append(_cell(shot.frontsight_inclination))

    # LRUD values in FIXED order: LEFT, UP, DOWN, RIGHT
    columns.append(_cell(shot.left))
    columns.append(_cell(shot.up))
    columns.append(_cell(shot.down))
    columns.append(_cell(shot.right))

    include_backsights = (
        header.has_backsights if header is not None else shot.has_backsight
    )
    if include_backsights:
        columns.append(_cell(shot.backsight_azimuth))
        columns.append(_cell(shot.backsight_inclination))

    flags = shot.flags
    flags_column = f" {FLAGS_START}{flags}{FLAGS_END}" if flags else ""
    columns.append("   " + flags_column.ljust(FLAGS_WIDTH))

    if shot.comment:
        # Clean comment: the shot must stay on one line
        columns.append(" " + " ".join(shot.comment.splitlines()).strip())

    return "".join(columns).rstrip()


def format_trip(trip: CompassTrip, *, include_column_headers: bool = True) -> str:
    """Format a complete trip (header + shots).

    Args:
        trip: Trip data
        include_column_headers: Whether to include the column heading line

    Returns:
        Formatted trip text, every line terminated with CRLF
    """
    lines = [format_trip_header(trip.header)]

    if include_column_headers:
        column_headers = COLUMN_HEADERS
        if trip.header.has_backsights:
            column_headers += BACKSIGHT_COLUMN_HEADERS
        column_headers += TRAILING_COLUMN_HEADERS
        lines.extend(["", column_headers, ""])

    lines.extend(format_shot(shot, trip.header) for shot in trip.shots)

    return lines[0] + "".join(line + LINE_TERMINATOR for line in lines[1:])


def format_dat_file(
    trips: Iterable[CompassTrip],
    *,
    write: Callable[[str], None] | None = None,
) -> str | None:
    """Format a complete DAT file from trips.

    Every trip is followed by a form feed line.

    Args:
        trips: Trips to write
        write: Optional callback for streaming output. If provided,
               chunks are written via this callback and None is returned.

    Returns:
        Formatted file content as string (if write is None),
        or None (if write callback is provided)
    """
    if write is not None:
        # Streaming mode
        for trip in trips:
            write(format_trip(trip))
            write(FORM_FEED + LINE_TERMINATOR)
        return None

    # Return mode
    chunks: list[str] = []
    format_dat_file(trips, write=chunks.append)
    return "".join(chunks)
