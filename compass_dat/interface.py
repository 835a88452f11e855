# -*- coding: utf-8 -*-
"""Unified interface for Compass .DAT data.

This module provides the primary entry point for reading and writing
Compass survey data held in memory:

1. The parser produces validated Pydantic models from .DAT text
2. Models serialize to dictionaries via ``model_dump()``
3. The formatter converts models back to .DAT text

Reading and writing files is left to the caller: decode them with
``COMPASS_ENCODING`` and write them with ``newline=""`` so the CRLF line
terminators are kept.
"""

from collections.abc import Iterator

import orjson

from compass_dat.constants import JSON_ENCODING
from compass_dat.enums import FormatIdentifier
from compass_dat.survey.format import format_dat_file
from compass_dat.survey.models import CompassDatFile
from compass_dat.survey.models import CompassTrip
from compass_dat.survey.parser import CompassSurveyParser


class CompassInterface:
    """Unified interface for Compass .DAT data.

    This class follows the pattern:
    - Reading: Text → Parser → model_validate() → Model
    - Writing: Model → Formatter → Text
    - Interchange: Model ↔ model_dump() ↔ JSON

    Example:
        dat_file = CompassInterface.load_dat_string(text, source="cave.dat")

        for trip in dat_file.trips:
            print(trip.header.survey_name)

        json_str = CompassInterface.to_json(dat_file)
    """

    # -------------------------------------------------------------------------
    # Loading Methods (Text → Model)
    # -------------------------------------------------------------------------

    @classmethod
    def load_dat_string(
        cls,
        data: str,
        *,
        source: str = "<string>",
    ) -> CompassDatFile:
        """Parse the complete content of a .DAT file.

        Args:
            data: The decoded file content
            source: Source identifier for error messages

        Returns:
            CompassDatFile with all trips

        Raises:
            GrammarViolation: At the first malformed token
        """
        return CompassSurveyParser().parse_string(data, source)

    @classmethod
    def iter_trips(
        cls,
        data: str,
        *,
        source: str = "<string>",
    ) -> Iterator[CompassTrip]:
        """Lazily parse the trips of a .DAT file.

        Callers that want to keep the trips read before a malformed one can
        catch :class:`GrammarViolation` around each ``next()`` call.

        Args:
            data: The decoded file content
            source: Source identifier for error messages

        Returns:
            Iterator of trips
        """
        return CompassSurveyParser().iter_trips(data, source)

    # -------------------------------------------------------------------------
    # Saving Methods (Model → Text)
    # -------------------------------------------------------------------------

    @classmethod
    def format_dat(cls, dat_file: CompassDatFile) -> str:
        """Render a DAT file back to .DAT text."""
        return format_dat_file(dat_file.trips) or ""

    # -------------------------------------------------------------------------
    # JSON Methods
    # -------------------------------------------------------------------------

    @classmethod
    def to_json(cls, dat_file: CompassDatFile, *, indent: bool = True) -> str:
        """Serialize a DAT file as JSON.

        The document is tagged with its format identifier so that it can be
        told apart from other JSON documents.

        Args:
            dat_file: DAT file to serialize
            indent: Pretty-print with 2 spaces (compact output otherwise)

        Returns:
            JSON document
        """
        document = {
            "format": FormatIdentifier.COMPASS_DAT.value,
            **dat_file.model_dump(mode="json"),
        }
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(document, option=option).decode(JSON_ENCODING)

    @classmethod
    def from_json(cls, data: str | bytes) -> CompassDatFile:
        """Load a DAT file from JSON.

        Args:
            data: JSON document produced by :meth:`to_json`

        Returns:
            Deserialized DAT file

        Raises:
            ValueError: If the document is not a DAT file document
        """
        document = orjson.loads(data)
        if not isinstance(document, dict):
            raise ValueError("Expected a JSON object")

        file_format = document.pop("format", None)
        if file_format != FormatIdentifier.COMPASS_DAT.value:
            raise ValueError(f"Unknown JSON format: `{file_format}`")

        return CompassDatFile.model_validate(document)
