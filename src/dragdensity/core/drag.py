"""Drag acceleration from a resolved density.

Only the drag term is computed here; adding it to the other forces is the
propagator's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from dragdensity.core.geodetic import PositionLike
from dragdensity.core.resolver import DragDensityResolver, EpochLike

logger = logging.getLogger(__name__)


def drag_acceleration(
    density_kg_m3: float,
    velocity_m_s: ArrayLike,
    ballistic_coefficient_m2_kg: float,
) -> NDArray[np.float64]:
    """Acceleration ``-0.5 * (Cd*A/m) * rho * |v| * v``.

    Args:
        density_kg_m3: Atmospheric mass density.
        velocity_m_s: Velocity relative to the atmosphere, shape (3,), in m/s.
        ballistic_coefficient_m2_kg: ``Cd * A / m`` in m^2/kg.

    Returns:
        Acceleration in m/s^2, shape (3,).

    Raises:
        ValueError: If the velocity is not a 3-vector or an input is negative.
    """
    v = np.asarray(velocity_m_s, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Velocity must have shape (3,), got {v.shape}")
    if density_kg_m3 < 0:
        raise ValueError(f"Density must be non-negative, got {density_kg_m3}")
    if ballistic_coefficient_m2_kg < 0:
        raise ValueError(
            f"Ballistic coefficient must be non-negative, got {ballistic_coefficient_m2_kg}"
        )

    speed = float(np.linalg.norm(v))
    return -0.5 * ballistic_coefficient_m2_kg * density_kg_m3 * speed * v


@dataclass
class DragForce:
    """Drag on one object, with density from the external model.

    Attributes:
        resolver: Density resolver.
        ballistic_coefficient_m2_kg: ``Cd * A / m`` in m^2/kg.
    """

    resolver: DragDensityResolver
    ballistic_coefficient_m2_kg: float

    @classmethod
    def from_properties(
        cls,
        resolver: DragDensityResolver,
        *,
        drag_coefficient: float,
        area_m2: float,
        mass_kg: float,
    ) -> DragForce:
        if mass_kg <= 0:
            raise ValueError(f"Mass must be positive, got {mass_kg}")
        return cls(resolver, drag_coefficient * area_m2 / mass_kg)

    def acceleration(
        self,
        epoch: EpochLike,
        position: PositionLike,
        velocity_m_s: ArrayLike,
        diagnostics: list[str] | None = None,
    ) -> tuple[NDArray[np.float64], float]:
        """Drag acceleration and the density it was computed with.

        Args:
            epoch: Epoch text, decomposed epoch, or datetime.
            position: Geodetic position of the object.
            velocity_m_s: Velocity relative to the atmosphere in m/s.
            diagnostics: If given, non-fatal messages are appended to it.

        Returns:
            Tuple of (acceleration in m/s^2, density in kg/m^3).
        """
        rho = self.resolver.resolve(epoch, position, diagnostics)
        accel = drag_acceleration(rho, velocity_m_s, self.ballistic_coefficient_m2_kg)
        logger.debug("Drag acceleration %s m/s^2 (rho %.3e)", accel, rho)
        return accel, rho
