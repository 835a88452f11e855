# -*- coding: utf-8 -*-
"""Survey data models for Compass .DAT files.

This module contains Pydantic models for representing survey data:
- CompassShot: A single shot between two stations
- CompassTripHeader: Metadata and display settings for a survey trip
- CompassTrip: A complete trip with header and shots
- CompassDatFile: A DAT file containing one or more trips

All measurements are stored in Compass's fixed internal units:
- Length/LRUD: decimal feet
- Azimuth/Inclination/Backsights/Corrections: degrees
"""

from __future__ import annotations

import datetime  # noqa: TC003

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from compass_dat.constants import FLAG_CHARS
from compass_dat.enums import AzimuthUnit
from compass_dat.enums import InclinationUnit
from compass_dat.enums import LengthUnit
from compass_dat.enums import LrudAssociation
from compass_dat.enums import LrudItem
from compass_dat.enums import ShotItem


class CompassShot(BaseModel):
    """A single survey shot between two stations.

    A shot always has a length; every other measurement may be absent.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    from_station_name: str
    to_station_name: str
    length: float
    frontsight_azimuth: float | None = None
    frontsight_inclination: float | None = None
    backsight_azimuth: float | None = None
    backsight_inclination: float | None = None
    left: float | None = None
    right: float | None = None
    up: float | None = None
    down: float | None = None
    comment: str | None = None
    excluded_from_length: bool = False
    excluded_from_plotting: bool = False
    excluded_from_all_processing: bool = False
    do_not_adjust: bool = False

    # NOTE: Values are not range-checked (azimuth in [0, 360) etc.) so that
    # real-world data round-trips unchanged.

    @property
    def flags(self) -> str:
        """Letters of the set flags, in ``L, P, X, C`` order."""
        return "".join(char for name, char in FLAG_CHARS.items() if getattr(self, name))

    @property
    def has_backsight(self) -> bool:
        return (
            self.backsight_azimuth is not None
            or self.backsight_inclination is not None
        )


class CompassTripHeader(BaseModel):
    """Metadata and display settings for a survey trip.

    The unit and ordering fields are decoded from the FORMAT code. They
    describe how the Compass editor displays the trip; the shot data itself
    is always stored in feet and degrees, in a fixed column order. The only
    FORMAT setting that changes the shot lines is ``has_backsights``.
    """

    model_config = ConfigDict(frozen=True)

    cave_name: str | None = None
    survey_name: str | None = None
    date: datetime.date | None = None
    comment: str | None = None
    surveyors: list[str] = Field(default_factory=list)
    raw_surveyors: str | None = None
    declination: float = 0.0
    azimuth_unit: AzimuthUnit = AzimuthUnit.DEGREES
    length_unit: LengthUnit = LengthUnit.DECIMAL_FEET
    lrud_unit: LengthUnit = LengthUnit.DECIMAL_FEET
    inclination_unit: InclinationUnit = InclinationUnit.DEGREES
    lrud_order: list[LrudItem] = Field(
        default_factory=lambda: [
            LrudItem.LEFT,
            LrudItem.UP,
            LrudItem.DOWN,
            LrudItem.RIGHT,
        ]
    )
    shot_measurement_order: list[ShotItem] = Field(
        default_factory=lambda: [
            ShotItem.LENGTH,
            ShotItem.FRONTSIGHT_AZIMUTH,
            ShotItem.FRONTSIGHT_INCLINATION,
        ]
    )
    has_backsights: bool = False
    lrud_association: LrudAssociation | None = None
    frontsight_azimuth_correction: float = 0.0
    frontsight_inclination_correction: float = 0.0
    length_correction: float = 0.0
    backsight_azimuth_correction: float | None = None
    backsight_inclination_correction: float | None = None

    @field_validator("lrud_order")
    @classmethod
    def validate_lrud_order(cls, v: list[LrudItem]) -> list[LrudItem]:
        if len(v) != len(LrudItem) or set(v) != set(LrudItem):
            raise ValueError(
                "lrud_order must contain each of left, right, up and down once"
            )
        return v

    @field_validator("shot_measurement_order")
    @classmethod
    def validate_shot_measurement_order(cls, v: list[ShotItem]) -> list[ShotItem]:
        if len(v) not in (3, 5) or len(set(v)) != len(v):
            raise ValueError(
                "shot_measurement_order must contain 3 or 5 distinct items"
            )
        return v

    @model_validator(mode="after")
    def validate_extended_order(self) -> CompassTripHeader:
        # A 5-item order is only recognized in a 15-character FORMAT code,
        # which always ends with the LRUD association.
        if len(self.shot_measurement_order) == 5 and self.lrud_association is None:
            raise ValueError("a 5-item shot_measurement_order needs lrud_association")
        return self

    @property
    def format_code(self) -> str:
        """The FORMAT token describing these settings.

        The backsight flag (``B``/``N``) is always written, so the code is at
        least 12 characters long; the LRUD association follows when set.
        """
        code = "".join(
            [
                self.azimuth_unit.value,
                self.length_unit.value,
                self.lrud_unit.value,
                self.inclination_unit.value,
                *(item.value for item in self.lrud_order),
                *(item.value for item in self.shot_measurement_order),
                "B" if self.has_backsights else "N",
            ]
        )
        if self.lrud_association is not None:
            code += self.lrud_association.value
        return code

    @property
    def has_backsight_corrections(self) -> bool:
        return (
            self.backsight_azimuth_correction is not None
            and self.backsight_inclination_correction is not None
        )


class CompassTrip(BaseModel):
    """A complete survey trip with header and shots.

    Every shot was parsed (and is written) under the header's settings.
    """

    model_config = ConfigDict(frozen=True)

    header: CompassTripHeader
    shots: list[CompassShot] = Field(default_factory=list)


class CompassDatFile(BaseModel):
    """A Compass .DAT file containing one or more survey trips."""

    trips: list[CompassTrip] = Field(default_factory=list)

    @property
    def total_shots(self) -> int:
        return sum(len(trip.shots) for trip in self.trips)

    @property
    def trip_names(self) -> list[str]:
        return [trip.header.survey_name or "<unnamed>" for trip in self.trips]

    def get_all_stations(self) -> set[str]:
        stations: set[str] = set()
        for trip in self.trips:
            for shot in trip.shots:
                stations.add(shot.from_station_name)
                stations.add(shot.to_station_name)
        return stations
