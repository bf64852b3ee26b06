"""
dragdensity: atmospheric density inputs for satellite drag.

Decomposes mission epochs, looks up F10.7 / F10.7A / Ap from historical
records, runs the NRLMSISE-00 model as an external program and returns
its density in SI units for a drag-force computation.
"""

from __future__ import annotations

__version__ = "0.1.0.dev0"

from dragdensity.config import ResolverConfig
from dragdensity.core.calendar import DayOfYearInfo, day_of_year_info, is_leap_year
from dragdensity.core.drag import DragForce, drag_acceleration
from dragdensity.core.epoch import Epoch, parse_epoch
from dragdensity.core.geodetic import GeodeticPosition
from dragdensity.core.resolver import DensityResolution, DragDensityResolver, resolve_density
from dragdensity.data.records import FileRecordSource, HttpRecordSource, TextRecordSource
from dragdensity.data.space_weather import SpaceWeatherIndexStore, SpaceWeatherIndices, average_ap
from dragdensity.errors import (
    DragDensityError,
    EpochFormatError,
    IndexNotFoundError,
    LookupTableError,
    MalformedDensityError,
    ModelInvocationError,
    ModelTimeoutError,
    ParseError,
)
from dragdensity.model.client import DensityModelClient, ModelRequest
from dragdensity.model.normalize import NormalizedDensity, normalize_density

__all__ = [
    "__version__",
    "ResolverConfig",
    "DayOfYearInfo",
    "day_of_year_info",
    "is_leap_year",
    "DragForce",
    "drag_acceleration",
    "Epoch",
    "parse_epoch",
    "GeodeticPosition",
    "DensityResolution",
    "DragDensityResolver",
    "resolve_density",
    "FileRecordSource",
    "HttpRecordSource",
    "TextRecordSource",
    "SpaceWeatherIndexStore",
    "SpaceWeatherIndices",
    "average_ap",
    "DragDensityError",
    "EpochFormatError",
    "IndexNotFoundError",
    "LookupTableError",
    "MalformedDensityError",
    "ModelInvocationError",
    "ModelTimeoutError",
    "ParseError",
    "DensityModelClient",
    "ModelRequest",
    "NormalizedDensity",
    "normalize_density",
]
