"""Resolver configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from dragdensity.utils.constants import (
    AP_FILE_NAME,
    DATA_DIRECTORY_NAME,
    DEFAULT_MODEL_TIMEOUT_S,
    F107_FILE_NAME,
    LEAP_YEARS,
    MIN_DRAG_ALTITUDE_KM,
    MODEL_EXECUTABLE_NAME,
    SENTINEL_DENSITY_KG_M3,
)

PathLike = Union[str, Path]


@dataclass
class ResolverConfig:
    """Where the model and its historical records live, and how to run it.

    Attributes:
        model_executable: Path to the NRLMSISE-00 driver.
        model_directory: Working directory for model runs.
        f107_path: Daily flux record file (SOLFSMY.TXT).
        ap_path: 3-hourly Ap record file (apindex).
        model_timeout_s: Upper bound on one model run.
        sentinel_density: Density used when the model output is unusable.
        leap_years: Years treated as leap years by the day-of-year tables.
        min_altitude_km: Altitudes below this raise a diagnostic.
    """

    model_executable: Path
    model_directory: Path
    f107_path: Path
    ap_path: Path
    model_timeout_s: float = DEFAULT_MODEL_TIMEOUT_S
    sentinel_density: float = SENTINEL_DENSITY_KG_M3
    leap_years: frozenset[int] = field(default=LEAP_YEARS)
    min_altitude_km: float = MIN_DRAG_ALTITUDE_KM

    def __post_init__(self) -> None:
        self.model_executable = Path(self.model_executable)
        self.model_directory = Path(self.model_directory)
        self.f107_path = Path(self.f107_path)
        self.ap_path = Path(self.ap_path)
        self.leap_years = frozenset(self.leap_years)
        if self.model_timeout_s <= 0:
            raise ValueError(f"model_timeout_s must be positive, got {self.model_timeout_s}")

    @classmethod
    def from_model_directory(cls, directory: PathLike, **overrides) -> ResolverConfig:
        """Config for a standard model install.

        Expects ``nrlmsise_test01`` in ``directory`` and the records under
        ``directory/DATA``. Keyword arguments override any field.
        """
        directory = Path(directory)
        data = directory / DATA_DIRECTORY_NAME
        values = {
            "model_executable": directory / MODEL_EXECUTABLE_NAME,
            "model_directory": directory,
            "f107_path": data / F107_FILE_NAME,
            "ap_path": data / AP_FILE_NAME,
        }
        values.update(overrides)
        return cls(**values)
