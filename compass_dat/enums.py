# -*- coding: utf-8 -*-
"""Enumerations for the Compass .DAT FORMAT code.

Except for :class:`FormatIdentifier`, every enum value is the character
that encodes it inside the FORMAT token of a trip header, so
``LengthUnit("M")`` decodes and ``LengthUnit.METERS.value`` encodes.
Letters are case-sensitive: ``a`` and ``A`` name different measurements.
"""

from enum import Enum
from math import radians
from math import tan

from compass_dat.constants import FEET_TO_METERS
from compass_dat.constants import METERS_TO_FEET


class FormatIdentifier(str, Enum):
    """Tag written in the ``format`` key of exported JSON documents."""

    COMPASS_DAT = "compass_dat"


class AzimuthUnit(str, Enum):
    """FORMAT character 0: how the editor shows bearings.

    Attributes:
        DEGREES: ``D``, 0 to 360
        QUADS: ``Q``, quadrant bearings such as N45E
        GRADIANS: ``G``, 400 to the full circle
    """

    DEGREES = "D"
    QUADS = "Q"
    GRADIANS = "G"

    @staticmethod
    def convert(degrees: float | None, to_unit: "AzimuthUnit") -> float | None:
        """Express a bearing stored in degrees in ``to_unit``.

        Quadrant bearings are written with letters, so the number itself
        stays in degrees.

        Args:
            degrees: Stored bearing, or None when absent
            to_unit: Display unit

        Returns:
            The displayed number, None stays None
        """
        if degrees is None:
            return None
        if to_unit == AzimuthUnit.GRADIANS:
            return degrees * 400 / 360
        return degrees


class InclinationUnit(str, Enum):
    """FORMAT character 3: how the editor shows vertical angles.

    Attributes:
        DEGREES: ``D``, -90 to +90
        PERCENT_GRADE: ``G``, rise over run times 100
        DEGREES_AND_MINUTES: ``M``, minutes shown after the degrees
        GRADIANS: ``R``, 100 to the right angle
        DEPTH_GAUGE: ``W``, depth difference of a diving survey
    """

    DEGREES = "D"
    PERCENT_GRADE = "G"
    DEGREES_AND_MINUTES = "M"
    GRADIANS = "R"
    DEPTH_GAUGE = "W"

    @staticmethod
    def convert(value: float | None, to_unit: "InclinationUnit") -> float | None:
        """Express an inclination stored in degrees in ``to_unit``.

        Depth gauge readings depend on the shot length and are not a scale of
        the angle; they are returned unchanged.
        """
        if value is None:
            return None
        if to_unit == InclinationUnit.PERCENT_GRADE:
            return tan(radians(value)) * 100
        if to_unit == InclinationUnit.GRADIANS:
            return value * 200 / 180
        return value


class LengthUnit(str, Enum):
    """FORMAT characters 1 and 2: how the editor shows lengths and LRUDs.

    Attributes:
        DECIMAL_FEET: ``D``
        FEET_AND_INCHES: ``I``
        METERS: ``M``
    """

    DECIMAL_FEET = "D"
    FEET_AND_INCHES = "I"
    METERS = "M"

    @staticmethod
    def convert(feet: float | None, to_unit: "LengthUnit") -> float | None:
        """Express a length stored in feet in ``to_unit``.

        Args:
            feet: Stored length, or None when absent
            to_unit: Display unit

        Returns:
            The displayed number, None stays None
        """
        if feet is None:
            return None
        if to_unit == LengthUnit.METERS:
            return feet * FEET_TO_METERS
        return feet

    @staticmethod
    def to_feet(value: float | None, from_unit: "LengthUnit") -> float | None:
        """Inverse of :meth:`convert`."""
        if value is None:
            return None
        if from_unit == LengthUnit.METERS:
            return value * METERS_TO_FEET
        return value


class LrudAssociation(str, Enum):
    """Last FORMAT character: the station the passage dimensions belong to."""

    FROM = "F"
    TO = "T"


class LrudItem(str, Enum):
    """One of the four passage dimensions in the FORMAT LRUD order."""

    LEFT = "L"
    RIGHT = "R"
    UP = "U"
    DOWN = "D"


class ShotItem(str, Enum):
    """One measurement in the FORMAT shot order.

    The lowercase letters are the backsight readings of the uppercase ones.
    """

    LENGTH = "L"
    FRONTSIGHT_AZIMUTH = "A"
    FRONTSIGHT_INCLINATION = "D"
    BACKSIGHT_AZIMUTH = "a"
    BACKSIGHT_INCLINATION = "d"

    @property
    def is_backsight(self) -> bool:
        return self in (ShotItem.BACKSIGHT_AZIMUTH, ShotItem.BACKSIGHT_INCLINATION)
