# -*- coding: utf-8 -*-
"""Parser for Compass .DAT survey data files.

A .DAT file is a sequence of trips. Each trip is a header block followed by
a table of shot lines, and trips are separated by form feeds (some files
omit them and rely on the next header alone). A Control-Z marks the end of
the data in old files.

Architecture: The grammar is walked with a :class:`SegmentParser` cursor.
Header fields and shot fields are collected into dictionaries which are then
fed to Pydantic models via ``model_validate()``. Parsing is fail-fast: the
first malformed token raises a :class:`GrammarViolation` out of the
generator that was being pulled.
"""

import logging
import re
from collections.abc import Iterator
from datetime import MAXYEAR
from datetime import MINYEAR
from datetime import date
from datetime import timedelta
from typing import Any
from typing import TypeVar

from compass_dat.constants import END_OF_DATA
from compass_dat.constants import FLAG_CHARS
from compass_dat.constants import FLAGS_END
from compass_dat.constants import FORM_FEED
from compass_dat.constants import FORMAT_ASSOCIATION_MIN_LENGTH
from compass_dat.constants import FORMAT_BACKSIGHT_MIN_LENGTH
from compass_dat.constants import FORMAT_EXTENDED_MIN_LENGTH
from compass_dat.enums import AzimuthUnit
from compass_dat.enums import InclinationUnit
from compass_dat.enums import LengthUnit
from compass_dat.enums import LrudAssociation
from compass_dat.enums import LrudItem
from compass_dat.enums import ShotItem
from compass_dat.segment import INLINE_WHITESPACE
from compass_dat.segment import NON_WHITESPACE
from compass_dat.segment import WHITESPACE
from compass_dat.segment import Segment
from compass_dat.segment import SegmentParser
from compass_dat.segment import Span
from compass_dat.survey.codec import NUMBER_PATTERN
from compass_dat.survey.codec import parse_lrud
from compass_dat.survey.codec import parse_measurement
from compass_dat.survey.codec import parse_number
from compass_dat.survey.models import CompassDatFile
from compass_dat.survey.models import CompassShot
from compass_dat.survey.models import CompassTrip
from compass_dat.survey.models import CompassTripHeader
from compass_dat.validation import days_in_month

logger = logging.getLogger(__name__)

_E = TypeVar(
    "_E",
    AzimuthUnit,
    InclinationUnit,
    LengthUnit,
    LrudAssociation,
    LrudItem,
    ShotItem,
)

_FLAG_FIELDS: dict[str, str] = {char: name for name, char in FLAG_CHARS.items()}


class CompassSurveyParser:
    """Parser for Compass .DAT survey data files.

    The three levels of the grammar are exposed separately so callers can
    drive them on their own cursor:

    - :meth:`parse_trip_header` consumes one header block
    - :meth:`parse_shots` lazily yields the shots of one table
    - :meth:`parse_trips` lazily yields whole trips until the end of the data

    Example:
        >>> parser = CompassSurveyParser()
        >>> for trip in parser.iter_trips(text, source="CAVE.DAT"):
        ...     print(trip.header.survey_name, len(trip.shots))
    """

    # Regex patterns
    SURVEY_NAME = re.compile(r"SURVEY NAME:", re.IGNORECASE)
    COMMENT = re.compile(r"\s*COMMENT:", re.IGNORECASE)
    FORMAT = re.compile(r"FORMAT:", re.IGNORECASE)
    CORRECTIONS = re.compile(r"CORRECTIONS:", re.IGNORECASE)
    CORRECTIONS2 = re.compile(r"CORRECTIONS2:", re.IGNORECASE)
    COLUMN_HEADER = re.compile(r"FROM[^\S\r\n]+TO[^\r\n]*", re.IGNORECASE)
    NEXT_LINE_IS_HEADER = re.compile(
        r"[^\r\n]*(?:\r\n?|\n)[^\S\r\n\f]*SURVEY NAME:",
        re.IGNORECASE,
    )
    # Two station names followed by at least the seven required numbers
    SHOT_LINE = re.compile(
        rf"\S+[^\S\r\n]+\S+(?:[^\S\r\n]+{NUMBER_PATTERN.pattern}){{7}}(?=\s|$)"
    )
    SURVEYOR_SEPARATOR_SEMICOLON = re.compile(r"\s*;\s*")
    SURVEYOR_SEPARATOR_COMMA = re.compile(r"\s*,\s*")
    DIGITS = re.compile(r"\d+")
    BLANK = re.compile(r"[^\S\f]+")
    FLAGS_START = re.compile(r"#\|")

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def iter_trips(
        self,
        data: str,
        source: str = "<string>",
    ) -> Iterator[CompassTrip]:
        """Lazily parse trips from a string.

        Args:
            data: Survey data as string
            source: Source identifier for error messages

        Yields:
            One trip at a time
        """
        return self.parse_trips(SegmentParser(Segment(value=data, source=source)))

    def parse_string(
        self,
        data: str,
        source: str = "<string>",
    ) -> CompassDatFile:
        """Parse a complete .DAT file from a string.

        Args:
            data: Survey data as string
            source: Source identifier for error messages

        Returns:
            The parsed file

        Raises:
            GrammarViolation: At the first malformed token
        """
        dat_file = CompassDatFile(trips=list(self.iter_trips(data, source)))
        logger.info(
            "Read %d trips (%d shots) from %s",
            len(dat_file.trips),
            dat_file.total_shots,
            source,
        )
        return dat_file

    # -------------------------------------------------------------------------
    # Trip sequence
    # -------------------------------------------------------------------------

    def parse_trips(self, parser: SegmentParser) -> Iterator[CompassTrip]:
        """Yield trips until the end of input or the end-of-data marker.

        Args:
            parser: Cursor positioned at the start of the survey data

        Yields:
            One trip per header block
        """
        while True:
            parser.skip(WHITESPACE)
            if parser.is_at_end() or parser.current_char() == END_OF_DATA:
                return

            header = self.parse_trip_header(parser)
            # Never skip past a form feed: an empty shot table is legal
            parser.skip(self.BLANK)
            parser.skip(self.COLUMN_HEADER)
            parser.skip(self.BLANK)

            shots = list(self.parse_shots(parser, header))
            yield CompassTrip(header=header, shots=shots)

    # -------------------------------------------------------------------------
    # Trip header
    # -------------------------------------------------------------------------

    def parse_trip_header(self, parser: SegmentParser) -> CompassTripHeader:
        """Parse one trip header block.

        The cursor is left after the line terminator of the DECLINATION line.

        Args:
            parser: Cursor positioned at the cave name line

        Returns:
            The decoded header

        Raises:
            GrammarViolation: If a required keyword or value is missing or
                malformed
        """
        header: dict[str, Any] = {}

        # A blank cave name line has already been swallowed by whitespace
        # skipping when the block starts right at SURVEY NAME:
        if parser.peek(self.SURVEY_NAME):
            header["cave_name"] = None
        else:
            header["cave_name"] = parser.rest_of_line().value.strip() or None

        parser.skip(INLINE_WHITESPACE)
        parser.expect_ignore_case("SURVEY NAME:")
        header["survey_name"] = parser.rest_of_line().value.strip() or None

        parser.skip(INLINE_WHITESPACE)
        parser.expect_ignore_case("SURVEY DATE:")
        parser.skip(INLINE_WHITESPACE)
        header["date"] = self._parse_date(parser)

        has_comment = parser.skip(self.COMMENT)
        rest_of_line = parser.rest_of_line().value.strip()
        header["comment"] = (rest_of_line or None) if has_comment else None

        parser.skip(INLINE_WHITESPACE)
        parser.expect_ignore_case("SURVEY TEAM:")
        parser.rest_of_line()
        raw_surveyors = parser.rest_of_line().value.strip()
        header["raw_surveyors"] = raw_surveyors
        header["surveyors"] = self._split_surveyors(raw_surveyors)

        parser.skip(INLINE_WHITESPACE)
        parser.expect_ignore_case("DECLINATION:")
        parser.skip(INLINE_WHITESPACE)
        header["declination"] = parse_number(
            parser,
            parser.next_token("missing declination"),
            "invalid declination",
        )

        if parser.skip(self.FORMAT):
            parser.skip(INLINE_WHITESPACE)
            header.update(self._parse_format_code(parser))
            parser.skip(INLINE_WHITESPACE)

        if parser.skip(self.CORRECTIONS):
            parser.skip(INLINE_WHITESPACE)
            header["frontsight_azimuth_correction"] = parse_number(
                parser,
                parser.next_token("missing azimuth correction"),
                "invalid azimuth correction",
            )
            header["frontsight_inclination_correction"] = parse_number(
                parser,
                parser.next_token("missing inclination correction"),
                "invalid inclination correction",
            )
            header["length_correction"] = parse_number(
                parser,
                parser.next_token("missing length correction"),
                "invalid length correction",
            )

        if parser.skip(self.CORRECTIONS2):
            parser.skip(INLINE_WHITESPACE)
            header["backsight_azimuth_correction"] = parse_number(
                parser,
                parser.next_token("missing backsight azimuth correction"),
                "invalid backsight azimuth correction",
            )
            header["backsight_inclination_correction"] = parse_number(
                parser,
                parser.next_token("missing backsight inclination correction"),
                "invalid backsight inclination correction",
            )

        parser.rest_of_line()

        trip_header = CompassTripHeader.model_validate(header)
        logger.debug(
            "Parsed header of survey %r (%s)",
            trip_header.survey_name,
            trip_header.date,
        )
        return trip_header

    def _parse_date(self, parser: SegmentParser) -> date:
        """Parse the ``month day year`` triple of SURVEY DATE:."""
        month_token = parser.next_token("missing month")
        month = self._parse_integer(parser, month_token, "invalid month")
        if not 1 <= month <= 12:
            raise parser.error("month out of range", month_token.start, month_token.end)

        day_token = parser.next_token("missing day")
        day = self._parse_integer(parser, day_token, "invalid day")
        if not 1 <= day <= 31:
            raise parser.error("day out of range", day_token.start, day_token.end)

        year_token = parser.next_token("missing year")
        year = self._parse_integer(parser, year_token, "invalid year")

        if not MINYEAR <= year <= MAXYEAR:
            raise parser.error("invalid date", day_token.start, year_token.end)

        # Compass accepts day 31 in any month; the extra days carry over
        # into the following month (2 30 1990 is March 2nd)
        if day > days_in_month(month, year):
            logger.debug(
                "Rolling over survey date %d %d %d %s",
                month,
                day,
                year,
                parser.segment.location(day_token.start, year_token.end),
            )
        return date(year, month, 1) + timedelta(days=day - 1)

    def _parse_integer(self, parser: SegmentParser, token: Span, message: str) -> int:
        if self.DIGITS.fullmatch(token.value) is None:
            raise parser.error(message, token.start, token.end)
        return int(token.value)

    def _split_surveyors(self, raw_surveyors: str) -> list[str]:
        """Split the SURVEY TEAM: line into names.

        ``?`` means an unknown team. Names are separated by semicolons if
        there are any, otherwise by commas.
        """
        if raw_surveyors == "?":
            return []
        if ";" in raw_surveyors:
            separator = self.SURVEYOR_SEPARATOR_SEMICOLON
        else:
            separator = self.SURVEYOR_SEPARATOR_COMMA
        return [name.strip() for name in separator.split(raw_surveyors) if name.strip()]

    def _parse_format_code(self, parser: SegmentParser) -> dict[str, Any]:
        """Decode the FORMAT code into header settings.

        Format code structure:
        - Position 0: Azimuth unit (D/Q/G)
        - Position 1: Length unit (D/I/M)
        - Position 2: LRUD unit (D/I/M)
        - Position 3: Inclination unit (D/G/M/R/W)
        - Positions 4-7: LRUD order (L/R/U/D)
        - Positions 8-10, or 8-12 if the code has 15+ characters: shot
          measurement order (L/A/D/a/d)
        - Next, if the code has 12+ characters: B = has backsights,
          anything else = no backsights
        - Next, if the code has 13+ characters: LRUD association (F/T)

        Args:
            parser: Cursor positioned at the first character of the code

        Returns:
            Header fields decoded from the code
        """
        start = parser.index
        code = parser.match(NON_WHITESPACE, "missing format").group()
        position = 0

        def one_of(enum_cls: type[_E], item_type: str) -> _E:
            nonlocal position
            offset = start + position
            if position >= len(code):
                raise parser.error(f"missing {item_type}", offset)
            try:
                item = enum_cls(code[position])
            except ValueError:
                raise parser.error(f"invalid {item_type}", offset, offset + 1) from None
            position += 1
            return item

        fields: dict[str, Any] = {
            "azimuth_unit": one_of(AzimuthUnit, "azimuth unit"),
            "length_unit": one_of(LengthUnit, "length unit"),
            "lrud_unit": one_of(LengthUnit, "lrud unit"),
            "inclination_unit": one_of(InclinationUnit, "inclination unit"),
        }

        lrud_start = start + position
        lrud_order = [one_of(LrudItem, "lrud item") for _ in range(4)]
        if len(set(lrud_order)) != len(lrud_order):
            raise parser.error("invalid lrud order", lrud_start, lrud_start + 4)
        fields["lrud_order"] = lrud_order

        order_length = 5 if len(code) >= FORMAT_EXTENDED_MIN_LENGTH else 3
        order_start = start + position
        shot_order = [
            one_of(ShotItem, "shot measurement item") for _ in range(order_length)
        ]
        if len(set(shot_order)) != len(shot_order):
            raise parser.error(
                "invalid shot measurement order",
                order_start,
                order_start + order_length,
            )
        fields["shot_measurement_order"] = shot_order

        fields["has_backsights"] = False
        if len(code) >= FORMAT_BACKSIGHT_MIN_LENGTH:
            fields["has_backsights"] = code[position : position + 1] == "B"
            position += 1

        fields["lrud_association"] = None
        if len(code) >= FORMAT_ASSOCIATION_MIN_LENGTH:
            fields["lrud_association"] = one_of(LrudAssociation, "lrud association")

        return fields

    # -------------------------------------------------------------------------
    # Shots
    # -------------------------------------------------------------------------

    def parse_shots(
        self,
        parser: SegmentParser,
        header: CompassTripHeader,
    ) -> Iterator[CompassShot]:
        """Yield the shots of one trip.

        Stops, without consuming it, at a form feed, the end-of-data marker,
        the end of input, or the start of the next trip header.

        Shot lines always hold, in this order:
        FROM TO LENGTH AZIMUTH INCLINATION LEFT UP DOWN RIGHT
        [BS_AZIMUTH BS_INCLINATION] [#|FLAGS#] [COMMENT]

        Args:
            parser: Cursor positioned at the first shot line
            header: Header of the trip the shots belong to

        Yields:
            One shot per non-blank line whose length is not the sentinel
        """
        while True:
            line_start = parser.index
            parser.skip(INLINE_WHITESPACE)
            if parser.is_at_end() or parser.current_char() in (FORM_FEED, END_OF_DATA):
                return
            if parser.is_at_end_of_line():
                parser.rest_of_line()
                continue
            if parser.peek(self.SURVEY_NAME):
                parser.index = line_start
                return
            if parser.peek(self.NEXT_LINE_IS_HEADER):
                # The line before a header is its cave name, unless it reads
                # as a shot: then the next header has no cave name line
                if parser.peek(self.SHOT_LINE) is None:
                    parser.index = line_start
                    return
                logger.warning(
                    "Trip header without cave name line follows shot %s",
                    parser.segment.location(parser.index),
                )

            shot = self._parse_shot(parser, header)
            if shot is not None:
                yield shot

    def _parse_shot(
        self,
        parser: SegmentParser,
        header: CompassTripHeader,
    ) -> CompassShot | None:
        """Parse a single shot line.

        Returns:
            The shot, or None if its length is the "not measured" sentinel
            (a commented-out shot; the rest of the line is skipped)
        """
        shot: dict[str, Any] = {
            "from_station_name": parser.next_token("missing from station").value,
            "to_station_name": parser.next_token("missing to station").value,
        }

        length = parse_measurement(
            parser, parser.next_token("missing length"), "invalid length"
        )
        if length is None:
            skipped = parser.rest_of_line()
            logger.debug(
                "Skipping shot %s-%s without length %s",
                shot["from_station_name"],
                shot["to_station_name"],
                parser.segment.location(skipped.start),
            )
            return None
        shot["length"] = length

        shot["frontsight_azimuth"] = parse_measurement(
            parser,
            parser.next_token("missing frontsight azimuth"),
            "invalid frontsight azimuth",
        )
        shot["frontsight_inclination"] = parse_measurement(
            parser,
            parser.next_token("missing frontsight inclination"),
            "invalid frontsight inclination",
        )

        # LRUD columns are always LEFT UP DOWN RIGHT, whatever the FORMAT says
        for name in ("left", "up", "down", "right"):
            shot[name] = parse_lrud(
                parser, parser.next_token(f"missing {name}"), f"invalid {name}"
            )

        if header.has_backsights:
            shot["backsight_azimuth"] = parse_measurement(
                parser,
                parser.next_token("missing backsight azimuth"),
                "invalid backsight azimuth",
            )
            shot["backsight_inclination"] = parse_measurement(
                parser,
                parser.next_token("missing backsight inclination"),
                "invalid backsight inclination",
            )

        flags_start = parser.index
        if parser.skip(self.FLAGS_START):
            while True:
                char = parser.current_char()
                if parser.is_at_end_of_line():
                    raise parser.error("unterminated flags", flags_start, parser.index)
                parser.index += 1
                if char == FLAGS_END:
                    break
                # Unknown letters (and spaces) are ignored
                if char in _FLAG_FIELDS:
                    shot[_FLAG_FIELDS[char]] = True

        shot["comment"] = parser.rest_of_line().value.strip() or None

        return CompassShot.model_validate(shot)


def iter_trips(data: str, source: str = "<string>") -> Iterator[CompassTrip]:
    """Lazily parse the trips of a .DAT string.

    A :class:`GrammarViolation` surfaces from the ``next()`` call that reaches
    the malformed token; trips yielded before it remain valid.
    """
    return CompassSurveyParser().iter_trips(data, source)


def parse_dat_string(data: str, source: str = "<string>") -> CompassDatFile:
    """Parse a whole .DAT string."""
    return CompassSurveyParser().parse_string(data, source)
