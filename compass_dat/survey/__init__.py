# -*- coding: utf-8 -*-
"""Survey module for parsing and formatting Compass .DAT files."""

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

__all__ = [
    "CompassDatFile",
    "CompassShot",
    "CompassSurveyParser",
    "CompassTrip",
    "CompassTripHeader",
    "format_dat_file",
    "format_shot",
    "format_trip",
    "format_trip_header",
    "iter_trips",
    "parse_dat_string",
]
