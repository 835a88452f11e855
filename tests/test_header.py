# -*- coding: utf-8 -*-
"""Tests for trip header parsing."""

from datetime import date

import pytest

from compass_dat.enums import AzimuthUnit
from compass_dat.enums import InclinationUnit
from compass_dat.enums import LengthUnit
from compass_dat.enums import LrudAssociation
from compass_dat.enums import LrudItem
from compass_dat.enums import ShotItem
from compass_dat.errors import GrammarViolation
from compass_dat.segment import Segment
from compass_dat.segment import SegmentParser
from compass_dat.survey.models import CompassTripHeader
from compass_dat.survey.parser import CompassSurveyParser

PREAMBLE = (
    "SECRET CAVE\n"
    "SURVEY NAME: A\n"
    "SURVEY DATE: 7 10 1979  COMMENT:Entrance Passage\n"
    "SURVEY TEAM:\n"
    "D.SMITH,R.BROWN,S.MURRAY\n"
)


def parse_header(text: str) -> CompassTripHeader:
    parser = SegmentParser(Segment(value=text, source="SECRET.DAT"))
    return CompassSurveyParser().parse_trip_header(parser)


def parse_format(code: str) -> CompassTripHeader:
    return parse_header(f"{PREAMBLE}DECLINATION: 1.00  FORMAT: {code}\n")


class TestTripHeaderErrors:
    """Tests for malformed trip headers."""

    def test_missing_survey_name(self):
        """Test that SURVEY NAME: is required."""
        with pytest.raises(GrammarViolation) as exc_info:
            parse_header(
                "SECRET CAVE\nSURVEY DATE: 7 10 79  COMMENT:Entrance Passage\n"
            )
        assert str(exc_info.value) == (
            "expected SURVEY NAME: (SECRET.DAT, line 2, col 1)\n"
            "SURVEY DATE: 7 10 79  COMMENT:Entrance Passage\n"
            "^"
        )

    def test_missing_survey_date(self):
        """Test that SURVEY DATE: is required."""
        with pytest.raises(GrammarViolation) as exc_info:
            parse_header(
                "SECRET CAVE\nSURVEY NAME: A\nSURVEY TEAM:\nD.SMITH,R.BROWN,S.MURRAY\n"
            )
        assert str(exc_info.value) == (
            "expected SURVEY DATE: (SECRET.DAT, line 3, col 1)\nSURVEY TEAM:\n^"
        )

    @pytest.mark.parametrize(
        ("date_line", "expected"),
        [
            (
                "SURVEY DATE: 1a 5 14",
                "invalid month (SECRET.DAT, line 3, col 14)\n"
                "SURVEY DATE: 1a 5 14\n"
                "             ^^",
            ),
            (
                "SURVEY DATE: 13 5 14",
                "month out of range (SECRET.DAT, line 3, col 14)\n"
                "SURVEY DATE: 13 5 14\n"
                "             ^^",
            ),
            (
                "SURVEY DATE: 11 5a 14",
                "invalid day (SECRET.DAT, line 3, col 17)\n"
                "SURVEY DATE: 11 5a 14\n"
                "                ^^",
            ),
            (
                "SURVEY DATE: 11 0 14",
                "day out of range (SECRET.DAT, line 3, col 17)\n"
                "SURVEY DATE: 11 0 14\n"
                "                ^",
            ),
            (
                "SURVEY DATE: 11 5 14a",
                "invalid year (SECRET.DAT, line 3, col 19)\n"
                "SURVEY DATE: 11 5 14a\n"
                "                  ^^^",
            ),
        ],
    )
    def test_invalid_date_fields(self, date_line, expected):
        """Test that each date field error points at its token."""
        with pytest.raises(GrammarViolation) as exc_info:
            parse_header(f"SECRET CAVE\nSURVEY NAME: A\n{date_line}\n")
        assert str(exc_info.value) == expected

    @pytest.mark.parametrize(
        ("date_line", "expected"),
        [
            ("SURVEY DATE: 2 30 1990", date(1990, 3, 2)),
            ("SURVEY DATE: 2 29 2000", date(2000, 2, 29)),
            ("SURVEY DATE: 2 29 1900", date(1900, 3, 1)),
            ("SURVEY DATE: 4 31 2021", date(2021, 5, 1)),
            ("SURVEY DATE: 12 31 9999", date(9999, 12, 31)),
        ],
    )
    def test_day_rolls_over_into_next_month(self, date_line, expected):
        """Test that days past the end of the month carry over."""
        header = parse_header(
            f"SECRET CAVE\nSURVEY NAME: A\n{date_line}\nSURVEY TEAM:\n\n"
            "DECLINATION: 0.00\n"
        )
        assert header.date == expected

    @pytest.mark.parametrize(
        "date_line", ["SURVEY DATE: 1 1 0", "SURVEY DATE: 1 1 10000"]
    )
    def test_unsupported_year(self, date_line):
        """Test years that a date cannot represent."""
        with pytest.raises(GrammarViolation, match="invalid date"):
            parse_header(f"SECRET CAVE\nSURVEY NAME: A\n{date_line}\n")

    def test_missing_year(self):
        """Test that a date token may not come from the next line."""
        with pytest.raises(GrammarViolation, match="missing year"):
            parse_header(
                "SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10\nSURVEY TEAM:\n"
            )

    def test_missing_declination(self):
        """Test that DECLINATION: is required."""
        with pytest.raises(GrammarViolation, match="expected DECLINATION:"):
            parse_header(f"{PREAMBLE}FORMAT: DDDDLUDRLADN\n")

    def test_invalid_declination(self):
        """Test a declination that is not a number."""
        with pytest.raises(GrammarViolation, match="invalid declination"):
            parse_header(f"{PREAMBLE}DECLINATION: east\n")

    def test_invalid_correction(self):
        """Test a correction that is not a number."""
        with pytest.raises(GrammarViolation, match="invalid inclination correction"):
            parse_header(
                f"{PREAMBLE}DECLINATION: 1.00  FORMAT: DDDDLUDRLADN"
                "  CORRECTIONS: 2.00 x 4.00\n"
            )

    def test_missing_correction(self):
        """Test that all three corrections are required."""
        with pytest.raises(GrammarViolation, match="missing length correction"):
            parse_header(
                f"{PREAMBLE}DECLINATION: 1.00  FORMAT: DDDDLUDRLADN"
                "  CORRECTIONS: 2.00 3.00\n"
            )


class TestTripHeader:
    """Tests for well-formed trip headers."""

    def test_full_header(self):
        """Test a header with every optional field present."""
        header = parse_header(
            f"{PREAMBLE}DECLINATION: 1.00  FORMAT: DDDDLUDRADLBF"
            "  CORRECTIONS: 2.00 3.00 4.00 CORRECTIONS2: 5.0 6.0\n"
        )
        assert header == CompassTripHeader(
            cave_name="SECRET CAVE",
            survey_name="A",
            date=date(1979, 7, 10),
            comment="Entrance Passage",
            surveyors=["D.SMITH", "R.BROWN", "S.MURRAY"],
            raw_surveyors="D.SMITH,R.BROWN,S.MURRAY",
            declination=1.0,
            azimuth_unit=AzimuthUnit.DEGREES,
            length_unit=LengthUnit.DECIMAL_FEET,
            lrud_unit=LengthUnit.DECIMAL_FEET,
            inclination_unit=InclinationUnit.DEGREES,
            lrud_order=[LrudItem.LEFT, LrudItem.UP, LrudItem.DOWN, LrudItem.RIGHT],
            shot_measurement_order=[
                ShotItem.FRONTSIGHT_AZIMUTH,
                ShotItem.FRONTSIGHT_INCLINATION,
                ShotItem.LENGTH,
            ],
            has_backsights=True,
            lrud_association=LrudAssociation.FROM,
            length_correction=4.0,
            frontsight_azimuth_correction=2.0,
            frontsight_inclination_correction=3.0,
            backsight_azimuth_correction=5.0,
            backsight_inclination_correction=6.0,
        )

    def test_without_comment(self):
        """Test a date line without COMMENT:."""
        header = parse_header(
            "SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10 1979\nSURVEY TEAM:\n"
            "D.SMITH\nDECLINATION: 1.00  FORMAT: DDDDLUDRADLBF\n"
        )
        assert header.comment is None
        assert header.date == date(1979, 7, 10)
        assert header.surveyors == ["D.SMITH"]

    def test_comment_on_next_line(self):
        """Test that COMMENT: may follow the date after a line break."""
        header = parse_header(
            "SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10 1979\n"
            "COMMENT:Entrance Passage\nSURVEY TEAM:\n?\nDECLINATION: 1.00\n"
        )
        assert header.comment == "Entrance Passage"

    def test_empty_comment(self):
        """Test that an empty comment is absent."""
        header = parse_header(
            "SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10 1979  COMMENT:\n"
            "SURVEY TEAM:\n?\nDECLINATION: 1.00\n"
        )
        assert header.comment is None

    def test_two_digit_year_is_kept(self):
        """Test that no century is added to short years."""
        header = parse_header(
            "SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10 79\n"
            "SURVEY TEAM:\n?\nDECLINATION: 1.00\n"
        )
        assert header.date == date(79, 7, 10)

    def test_without_corrections2(self):
        """Test that backsight corrections are absent without CORRECTIONS2:."""
        header = parse_header(
            f"{PREAMBLE}DECLINATION: 1.00  FORMAT: DDDDLUDRADLBF"
            "  CORRECTIONS: 2.00 3.00 4.00\n"
        )
        assert header.frontsight_azimuth_correction == 2.0
        assert header.frontsight_inclination_correction == 3.0
        assert header.length_correction == 4.0
        assert header.backsight_azimuth_correction is None
        assert header.backsight_inclination_correction is None
        assert header.has_backsight_corrections is False

    def test_without_corrections(self):
        """Test that corrections default to zero."""
        header = parse_format("DDDDLUDRADL")
        assert header.frontsight_azimuth_correction == 0.0
        assert header.frontsight_inclination_correction == 0.0
        assert header.length_correction == 0.0

    def test_without_format(self):
        """Test the display settings used without FORMAT:."""
        header = parse_header(f"{PREAMBLE}DECLINATION: 1.00\n")
        assert header.azimuth_unit == AzimuthUnit.DEGREES
        assert header.length_unit == LengthUnit.DECIMAL_FEET
        assert header.lrud_unit == LengthUnit.DECIMAL_FEET
        assert header.inclination_unit == InclinationUnit.DEGREES
        assert header.lrud_order == [
            LrudItem.LEFT,
            LrudItem.UP,
            LrudItem.DOWN,
            LrudItem.RIGHT,
        ]
        assert header.shot_measurement_order == [
            ShotItem.LENGTH,
            ShotItem.FRONTSIGHT_AZIMUTH,
            ShotItem.FRONTSIGHT_INCLINATION,
        ]
        assert header.has_backsights is False
        assert header.lrud_association is None

    def test_cave_name_absent_at_survey_name(self):
        """Test a block that starts directly at SURVEY NAME:."""
        header = parse_header(
            "SURVEY NAME: A+\nSURVEY DATE: 6 20 1987\nSURVEY TEAM:\n?\n"
            "DECLINATION: 11.18\n"
        )
        assert header.cave_name is None
        assert header.survey_name == "A+"

    def test_blank_survey_name(self):
        """Test that an empty survey name is absent."""
        header = parse_header(
            "SECRET CAVE\nSURVEY NAME:\nSURVEY DATE: 6 20 1987\nSURVEY TEAM:\n?\n"
            "DECLINATION: 11.18\n"
        )
        assert header.survey_name is None

    def test_keywords_ignore_case(self):
        """Test lowercase keywords."""
        header = parse_header(
            "SECRET CAVE\nsurvey name: A\nsurvey date: 7 10 1979  comment:x\n"
            "survey team:\n?\ndeclination: 1.00  format: DDDDLUDRLADN"
            "  corrections: 1.00 2.00 3.00\n"
        )
        assert header.comment == "x"
        assert header.length_correction == 3.0

    def test_cursor_after_header(self):
        """Test that the cursor is left after the DECLINATION line."""
        text = f"{PREAMBLE}DECLINATION: 1.00  FORMAT: DDDDLUDRLADN\r\nNEXT"
        parser = SegmentParser(text)
        CompassSurveyParser().parse_trip_header(parser)
        assert parser.text[parser.index :] == "NEXT"


class TestSurveyors:
    """Tests for the SURVEY TEAM: line."""

    @pytest.mark.parametrize(
        ("team", "expected"),
        [
            ("D.SMITH,R.BROWN,S.MURRAY", ["D.SMITH", "R.BROWN", "S.MURRAY"]),
            ("Steve Reames,Stan Allison, , ,", ["Steve Reames", "Stan Allison"]),
            ("Smith, Dave; Brown, Rob", ["Smith, Dave", "Brown, Rob"]),
            (" , , , ,", []),
            ("?", []),
            ("", []),
        ],
    )
    def test_split(self, team, expected):
        """Test splitting the team into names."""
        header = parse_header(
            f"SECRET CAVE\nSURVEY NAME: A\nSURVEY DATE: 7 10 1979\nSURVEY TEAM:\n"
            f"{team}\nDECLINATION: 1.00\n"
        )
        assert header.surveyors == expected
        assert header.raw_surveyors == team.strip()


class TestFormatCode:
    """Tests for decoding the FORMAT code."""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("D", AzimuthUnit.DEGREES),
            ("Q", AzimuthUnit.QUADS),
            ("G", AzimuthUnit.GRADIANS),
        ],
    )
    def test_azimuth_unit(self, char, expected):
        """Test every azimuth unit letter."""
        assert parse_format(f"{char}DDDLUDRLAD").azimuth_unit == expected

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("D", LengthUnit.DECIMAL_FEET),
            ("I", LengthUnit.FEET_AND_INCHES),
            ("M", LengthUnit.METERS),
        ],
    )
    def test_length_units(self, char, expected):
        """Test every length unit letter for length and LRUD."""
        header = parse_format(f"D{char}{char}DLUDRLAD")
        assert header.length_unit == expected
        assert header.lrud_unit == expected

    @pytest.mark.parametrize(
        ("char", "expected"),
        [
            ("D", InclinationUnit.DEGREES),
            ("G", InclinationUnit.PERCENT_GRADE),
            ("M", InclinationUnit.DEGREES_AND_MINUTES),
            ("R", InclinationUnit.GRADIANS),
            ("W", InclinationUnit.DEPTH_GAUGE),
        ],
    )
    def test_inclination_unit(self, char, expected):
        """Test every inclination unit letter."""
        assert parse_format(f"DDD{char}LUDRLAD").inclination_unit == expected

    def test_lrud_order(self):
        """Test a non-default LRUD order."""
        assert parse_format("DDDDUDLRLAD").lrud_order == [
            LrudItem.UP,
            LrudItem.DOWN,
            LrudItem.LEFT,
            LrudItem.RIGHT,
        ]

    def test_eleven_characters(self):
        """Test that an 11-character code has no backsight or association."""
        header = parse_format("DDDDLUDRADL")
        assert header.has_backsights is False
        assert header.lrud_association is None

    def test_twelve_characters(self):
        """Test that the 12th character is the backsight flag."""
        assert parse_format("DDDDLUDRLADB").has_backsights is True
        assert parse_format("DDDDLUDRLADN").has_backsights is False
        assert parse_format("DDDDLUDRLADN").lrud_association is None

    def test_non_b_means_no_backsights(self):
        """Test that any letter other than B means no backsights."""
        assert parse_format("DDDDLUDRLADX").has_backsights is False

    def test_thirteen_characters(self):
        """Test that the 13th character is the LRUD association."""
        header = parse_format("DDDDLUDRLADNT")
        assert header.has_backsights is False
        assert header.lrud_association == LrudAssociation.TO

    def test_fifteen_characters(self):
        """Test the 5-item measurement order of a 15-character code."""
        header = parse_format("DDDDLUDRADLadBF")
        assert header.shot_measurement_order == [
            ShotItem.FRONTSIGHT_AZIMUTH,
            ShotItem.FRONTSIGHT_INCLINATION,
            ShotItem.LENGTH,
            ShotItem.BACKSIGHT_AZIMUTH,
            ShotItem.BACKSIGHT_INCLINATION,
        ]
        assert header.has_backsights is True
        assert header.lrud_association == LrudAssociation.FROM

    def test_invalid_azimuth_unit(self):
        """Test that the error points at the offending character."""
        with pytest.raises(GrammarViolation) as exc_info:
            parse_format("XDDDLUDRLAD")
        assert exc_info.value.message == "invalid azimuth unit"
        assert exc_info.value.location.column == 27
        assert exc_info.value.location.length == 1

    def test_alphabet_is_case_sensitive(self):
        """Test that lowercase unit letters are rejected."""
        with pytest.raises(GrammarViolation, match="invalid azimuth unit"):
            parse_format("dDDDLUDRLAD")

    def test_invalid_inclination_unit(self):
        """Test an unknown inclination unit letter."""
        with pytest.raises(GrammarViolation, match="invalid inclination unit"):
            parse_format("DDDXLUDRLAD")

    def test_too_short(self):
        """Test a code that ends inside the LRUD order."""
        with pytest.raises(GrammarViolation, match="missing lrud item"):
            parse_format("DDDDLU")

    def test_repeated_lrud_item(self):
        """Test an LRUD order that is not a permutation."""
        with pytest.raises(GrammarViolation, match="invalid lrud order"):
            parse_format("DDDDLLDRLAD")

    def test_repeated_shot_item(self):
        """Test a measurement order with a repeated item."""
        with pytest.raises(GrammarViolation, match="invalid shot measurement order"):
            parse_format("DDDDLUDRLLD")

    def test_invalid_lrud_association(self):
        """Test an unknown LRUD association letter."""
        with pytest.raises(GrammarViolation, match="invalid lrud association"):
            parse_format("DDDDLUDRLADBX")
