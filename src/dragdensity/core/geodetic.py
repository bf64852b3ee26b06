"""Geodetic position and its fixed-width model-input rendering."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Union

from dragdensity.utils.constants import (
    MODEL_ALTITUDE_CUTOFF,
    MODEL_FIELD_WIDTH,
    MODEL_FIXED_DECIMALS,
)


@dataclass(frozen=True)
class GeodeticPosition:
    """Position above the reference ellipsoid.

    Attributes:
        latitude_deg: Geodetic latitude in degrees.
        longitude_deg: Longitude in degrees.
        altitude_km: Height above the ellipsoid in km.
    """

    latitude_deg: float
    longitude_deg: float
    altitude_km: float

    @classmethod
    def coerce(cls, value: PositionLike) -> GeodeticPosition:
        """Accept a position, a ``(lat, lon, alt_km)`` sequence or a mapping.

        Mappings use the keys ``lat``, ``lon`` and ``alt_km``.

        Raises:
            ValueError: If the value has the wrong shape.
        """
        if isinstance(value, GeodeticPosition):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(float(value["lat"]), float(value["lon"]), float(value["alt_km"]))
            except KeyError as e:
                raise ValueError(f"Geodetic mapping is missing key {e}") from e
        try:
            lat, lon, alt = value
        except (TypeError, ValueError) as e:
            raise ValueError(f"Cannot interpret {value!r} as a geodetic position") from e
        return cls(float(lat), float(lon), float(alt))

    def model_fields(self) -> tuple[str, str, str]:
        """Latitude, longitude and altitude as the model's argument strings."""
        return (
            truncate_field(self.latitude_deg),
            truncate_field(self.longitude_deg),
            truncate_field(self.altitude_km, cutoff=MODEL_ALTITUDE_CUTOFF),
        )


PositionLike = Union[GeodeticPosition, Iterable[float], Mapping[str, float]]


def truncate_field(
    value: float,
    *,
    width: int = MODEL_FIELD_WIDTH,
    cutoff: int | None = None,
) -> str:
    """Render ``value`` with 15 fixed decimals and cut it to ``width`` characters.

    The cut is applied only when the text is longer than ``cutoff``
    (``width`` by default). No rounding happens: ``51.64`` becomes
    ``"51.64000"`` and ``-122.4194`` becomes ``"-122.419"``.
    """
    text = f"{value:.{MODEL_FIXED_DECIMALS}f}"
    limit = width if cutoff is None else cutoff
    if len(text) > limit:
        text = text[:width]
    return text
