"""Density resolution for the drag force.

:class:`DragDensityResolver` is the single entry point the drag computation
uses. One call decomposes the epoch, looks up space weather, runs the
external model and normalizes its output::

    resolver = DragDensityResolver.from_config(
        ResolverConfig.from_model_directory("/opt/msis")
    )
    rho = resolver.resolve("15/03/2020 12:30:45.000000 UTC", (51.6, -0.1, 400.0))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from dragdensity.config import ResolverConfig
from dragdensity.core.calendar import DayOfYearInfo, day_of_year_info
from dragdensity.core.epoch import Epoch
from dragdensity.core.geodetic import GeodeticPosition, PositionLike
from dragdensity.data.records import FileRecordSource
from dragdensity.data.space_weather import SpaceWeatherIndexStore, SpaceWeatherIndices
from dragdensity.model.client import DensityModelClient, ModelRequest
from dragdensity.model.normalize import normalize_density
from dragdensity.utils.constants import (
    LEAP_YEARS,
    MIN_DRAG_ALTITUDE_KM,
    SENTINEL_DENSITY_KG_M3,
)

logger = logging.getLogger(__name__)

EpochLike = Union[str, Epoch, datetime]


@dataclass
class DensityResolution:
    """Everything produced while resolving one density.

    Attributes:
        density_kg_m3: Final density in kg/m^3.
        epoch: Decomposed epoch.
        day_info: Day-of-year record.
        position: Geodetic position used.
        indices: Space-weather inputs.
        raw_output: Text returned by the model.
        substituted: True when the sentinel density was used.
        diagnostics: Non-fatal conditions raised during the call.
    """

    density_kg_m3: float
    epoch: Epoch
    day_info: DayOfYearInfo
    position: GeodeticPosition
    indices: SpaceWeatherIndices
    raw_output: str
    substituted: bool = False
    diagnostics: list[str] = field(default_factory=list)


class DragDensityResolver:
    """Resolves atmospheric mass density for an epoch and geodetic position.

    Args:
        store: Space-weather index lookup.
        client: External density model runner.
        sentinel_density: Density used when the model output is unusable.
        leap_years: Years treated as leap years.
        min_altitude_km: Altitudes below this add a diagnostic.
    """

    def __init__(
        self,
        store: SpaceWeatherIndexStore,
        client: DensityModelClient,
        *,
        sentinel_density: float = SENTINEL_DENSITY_KG_M3,
        leap_years: frozenset[int] = LEAP_YEARS,
        min_altitude_km: float = MIN_DRAG_ALTITUDE_KM,
    ) -> None:
        self.store = store
        self.client = client
        self.sentinel_density = sentinel_density
        self.leap_years = frozenset(leap_years)
        self.min_altitude_km = min_altitude_km

    @classmethod
    def from_config(cls, config: ResolverConfig) -> DragDensityResolver:
        """Build a resolver reading records from disk."""
        store = SpaceWeatherIndexStore(
            FileRecordSource(config.f107_path),
            FileRecordSource(config.ap_path),
        )
        client = DensityModelClient(
            config.model_executable,
            config.model_directory,
            timeout_s=config.model_timeout_s,
        )
        return cls(
            store,
            client,
            sentinel_density=config.sentinel_density,
            leap_years=config.leap_years,
            min_altitude_km=config.min_altitude_km,
        )

    def resolve(
        self,
        epoch: EpochLike,
        position: PositionLike,
        diagnostics: list[str] | None = None,
    ) -> float:
        """Density in kg/m^3 at ``position`` and ``epoch``.

        Args:
            epoch: Epoch text, decomposed epoch, or datetime.
            position: Geodetic position, ``(lat, lon, alt_km)`` or a mapping
                with ``lat``, ``lon`` and ``alt_km``.
            diagnostics: If given, non-fatal messages are appended to it.

        Returns:
            Mass density in kg/m^3.

        Raises:
            DragDensityError: The first failure from any stage.
        """
        result = self.resolve_detailed(epoch, position)
        if diagnostics is not None:
            diagnostics.extend(result.diagnostics)
        return result.density_kg_m3

    def resolve_detailed(self, epoch: EpochLike, position: PositionLike) -> DensityResolution:
        """Like :meth:`resolve` but returns every intermediate value."""
        parsed = _coerce_epoch(epoch)
        geodetic = GeodeticPosition.coerce(position)
        diagnostics: list[str] = []

        if geodetic.altitude_km < self.min_altitude_km:
            message = f"Force_drag: Altitude too low, {geodetic.altitude_km!r} km."
            logger.warning("%s", message)
            diagnostics.append(message)

        day_info = day_of_year_info(
            parsed.year, parsed.month, parsed.day, leap_years=self.leap_years
        )
        indices = self.store.indices(parsed, day_info)
        request = ModelRequest.build(parsed, day_info, geodetic, indices)
        raw = self.client.run(request)
        normalized = normalize_density(raw, sentinel=self.sentinel_density)
        if normalized.substituted:
            diagnostics.append(normalized.diagnostic)

        logger.debug(
            "Resolved density %.6e kg/m^3 at %s (doy %d, F10.7 %.1f, F10.7A %.1f, Ap %d)",
            normalized.density_kg_m3, parsed, day_info.day_of_year,
            indices.f107, indices.f107a, indices.ap,
        )

        return DensityResolution(
            density_kg_m3=normalized.density_kg_m3,
            epoch=parsed,
            day_info=day_info,
            position=geodetic,
            indices=indices,
            raw_output=raw,
            substituted=normalized.substituted,
            diagnostics=diagnostics,
        )


def resolve_density(
    config: ResolverConfig,
    epoch: EpochLike,
    position: PositionLike,
    diagnostics: list[str] | None = None,
) -> float:
    """One-shot density resolution from a config. See :meth:`DragDensityResolver.resolve`."""
    return DragDensityResolver.from_config(config).resolve(epoch, position, diagnostics)


def _coerce_epoch(epoch: EpochLike) -> Epoch:
    if isinstance(epoch, Epoch):
        return epoch
    if isinstance(epoch, datetime):
        return Epoch.from_datetime(epoch)
    return Epoch.from_string(epoch)
