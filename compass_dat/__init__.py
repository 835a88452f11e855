# -*- coding: utf-8 -*-
"""Compass .DAT Library.

A Python library for parsing and formatting the survey data files (.DAT)
of the Compass cave survey software.

Usage:
    from compass_dat import parse_dat_string, format_dat_file

    with open("cave.dat", encoding=COMPASS_ENCODING, newline="") as f:
        dat_file = parse_dat_string(f.read(), source="cave.dat")

    for trip in dat_file.trips:
        print(f"Survey: {trip.header.survey_name} ({len(trip.shots)} shots)")

    text = format_dat_file(dat_file.trips)
"""

__version__ = "0.1.0"

# Constants
from compass_dat.constants import COMPASS_ENCODING
from compass_dat.constants import FEET_TO_METERS
from compass_dat.constants import JSON_ENCODING
from compass_dat.constants import METERS_TO_FEET

# Enums
from compass_dat.enums import AzimuthUnit
from compass_dat.enums import FormatIdentifier
from compass_dat.enums import InclinationUnit
from compass_dat.enums import LengthUnit
from compass_dat.enums import LrudAssociation
from compass_dat.enums import LrudItem
from compass_dat.enums import ShotItem
from compass_dat.errors import GrammarViolation
from compass_dat.errors import SourceLocation
from compass_dat.interface import CompassInterface
from compass_dat.survey.format import format_dat_file
from compass_dat.survey.format import format_shot
from compass_dat.survey.format import format_trip
from compass_dat.survey.format import format_trip_header
from compass_dat.survey.models import CompassDatFile
from compass_dat.survey.models import CompassShot
from compass_dat.survey.models import CompassTrip
from compass_dat.survey.models import CompassTripHeader
from compass_dat.survey.parser import CompassSurveyParser
from compass_dat.survey.parser import iter_trips
from compass_dat.survey.parser import parse_dat_string
from compass_dat.validation import days_in_month
from compass_dat.validation import is_valid_station_name
from compass_dat.validation import validate_station_name

__all__ = [
    # Constants
    "COMPASS_ENCODING",
    "FEET_TO_METERS",
    "JSON_ENCODING",
    "METERS_TO_FEET",
    # Enums
    "AzimuthUnit",
    # Survey Models
    "CompassDatFile",
    # I/O
    "CompassInterface",
    "CompassShot",
    # Parsing
    "CompassSurveyParser",
    "CompassTrip",
    "CompassTripHeader",
    "FormatIdentifier",
    # Errors
    "GrammarViolation",
    "InclinationUnit",
    "LengthUnit",
    "LrudAssociation",
    "LrudItem",
    "ShotItem",
    "SourceLocation",
    "days_in_month",
    # Formatting
    "format_dat_file",
    "format_shot",
    "format_trip",
    "format_trip_header",
    # Validation
    "is_valid_station_name",
    "iter_trips",
    "parse_dat_string",
    "validate_station_name",
]
