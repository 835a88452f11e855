# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides shared fixtures for accessing test artifacts and
building trip headers.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from compass_dat.constants import COMPASS_ENCODING
from compass_dat.enums import LrudAssociation
from compass_dat.enums import ShotItem
from compass_dat.survey.models import CompassTripHeader

# =============================================================================
# Path Constants
# =============================================================================

ARTIFACTS_DIR = Path(__file__).parent / "artifacts"
SAMPLE_DAT = ARTIFACTS_DIR / "sample.dat"


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def artifacts_dir() -> Path:
    """Return path to test artifacts directory."""
    return ARTIFACTS_DIR


@pytest.fixture
def sample_dat_text() -> str:
    """Return the content of the multi-trip sample file."""
    with SAMPLE_DAT.open(encoding=COMPASS_ENCODING, newline="") as f:
        return f.read()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def header() -> CompassTripHeader:
    """Return a header without backsights."""
    return CompassTripHeader(
        cave_name="SECRET CAVE",
        survey_name="A",
        date=date(1979, 7, 10),
        surveyors=["D.SMITH", "R.BROWN"],
        raw_surveyors="D.SMITH,R.BROWN",
    )


@pytest.fixture
def backsight_header() -> CompassTripHeader:
    """Return a header with backsights and a 5-item measurement order."""
    return CompassTripHeader(
        cave_name="SECRET CAVE",
        survey_name="A",
        date=date(1979, 7, 10),
        comment="Entrance Passage",
        surveyors=["D.SMITH", "R.BROWN", "S.MURRAY"],
        raw_surveyors="D.SMITH,R.BROWN,S.MURRAY",
        declination=1.0,
        shot_measurement_order=[
            ShotItem.FRONTSIGHT_AZIMUTH,
            ShotItem.FRONTSIGHT_INCLINATION,
            ShotItem.LENGTH,
            ShotItem.BACKSIGHT_AZIMUTH,
            ShotItem.BACKSIGHT_INCLINATION,
        ],
        has_backsights=True,
        lrud_association=LrudAssociation.FROM,
        length_correction=4.0,
        frontsight_azimuth_correction=2.0,
        frontsight_inclination_correction=3.0,
        backsight_azimuth_correction=5.0,
        backsight_inclination_correction=6.0,
    )
