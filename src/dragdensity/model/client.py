"""External NRLMSISE-00 model invocation.

The model is a small C driver that takes its inputs as positional
arguments and prints the total mass density (g/cm^3) on its first output
line::

    nrlmsise_test01 DOY YEAR SEC ALT LAT LON 0 F107 F107A AP

It is run with its installation directory as the working directory, since
it loads auxiliary files relative to it.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dragdensity.core.calendar import DayOfYearInfo
from dragdensity.core.epoch import Epoch
from dragdensity.core.geodetic import GeodeticPosition
from dragdensity.data.space_weather import SpaceWeatherIndices
from dragdensity.errors import ModelInvocationError, ModelTimeoutError
from dragdensity.utils.constants import (
    DEFAULT_MODEL_TIMEOUT_S,
    MODEL_OUTPUT_WIDTH,
    MODEL_SWITCH_FLAG,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# One model run at a time per process.
_MODEL_LOCK = threading.Lock()


@dataclass(frozen=True)
class ModelRequest:
    """The ten positional inputs of one model run.

    Attributes:
        day_of_year: Ordinal day of the epoch.
        year: Calendar year of the epoch.
        second_of_day: Seconds since midnight UTC.
        altitude: Altitude argument text (km, truncated).
        latitude: Latitude argument text (deg, truncated).
        longitude: Longitude argument text (deg, truncated).
        f107: Previous-day F10.7.
        f107a: 81-day average F10.7.
        ap: Daily Ap.
    """

    day_of_year: int
    year: int
    second_of_day: int
    altitude: str
    latitude: str
    longitude: str
    f107: float
    f107a: float
    ap: int

    @classmethod
    def build(
        cls,
        epoch: Epoch,
        day_info: DayOfYearInfo,
        position: GeodeticPosition,
        indices: SpaceWeatherIndices,
    ) -> ModelRequest:
        latitude, longitude, altitude = position.model_fields()
        return cls(
            day_of_year=day_info.day_of_year,
            year=epoch.year,
            second_of_day=epoch.second_of_day,
            altitude=altitude,
            latitude=latitude,
            longitude=longitude,
            f107=indices.f107,
            f107a=indices.f107a,
            ap=indices.ap,
        )

    def arguments(self) -> list[str]:
        """The positional arguments in model order."""
        return [
            str(self.day_of_year),
            f"{self.year:04d}",
            str(self.second_of_day),
            self.altitude,
            self.latitude,
            self.longitude,
            MODEL_SWITCH_FLAG,
            str(self.f107),
            str(self.f107a),
            str(self.ap),
        ]


class DensityModelClient:
    """Runs the external density model and returns its raw output text.

    Args:
        executable: Path to the model driver.
        working_directory: Directory the model runs in. Defaults to the
            executable's directory.
        timeout_s: Seconds to wait before giving up on a run.
    """

    def __init__(
        self,
        executable: PathLike,
        working_directory: PathLike | None = None,
        *,
        timeout_s: float = DEFAULT_MODEL_TIMEOUT_S,
    ) -> None:
        self.executable = Path(executable)
        self.working_directory = (
            Path(working_directory) if working_directory is not None else self.executable.parent
        )
        self.timeout_s = timeout_s

    def __repr__(self) -> str:
        return (
            f"DensityModelClient(executable={str(self.executable)!r}, "
            f"working_directory={str(self.working_directory)!r}, timeout_s={self.timeout_s})"
        )

    def argv(self, request: ModelRequest) -> list[str]:
        return [str(self.executable), *request.arguments()]

    def run(self, request: ModelRequest) -> str:
        """Run the model once.

        Args:
            request: Model inputs.

        Returns:
            The first output line, at most 24 characters, without the newline.

        Raises:
            ModelTimeoutError: If the run exceeds the timeout.
            ModelInvocationError: If the model cannot be started, or exits
                with an error status and prints nothing.
        """
        argv = self.argv(request)
        logger.debug("Running density model in %s: %s", self.working_directory, " ".join(argv))

        with _MODEL_LOCK:
            try:
                proc = subprocess.run(
                    argv,
                    cwd=self.working_directory,
                    text=True,
                    errors="replace",
                    capture_output=True,
                    check=False,
                    timeout=self.timeout_s,
                )
            except subprocess.TimeoutExpired as e:
                logger.error("Density model timed out after %.1f s", self.timeout_s)
                raise ModelTimeoutError(
                    f"Density model timed out after {self.timeout_s} s: {self.executable}"
                ) from e
            except OSError as e:
                logger.error("Unable to start density model %s: %s", self.executable, e)
                raise ModelInvocationError(
                    f"Unable to start density model {self.executable}: {e}"
                ) from e

        lines = proc.stdout.splitlines()
        first_line = lines[0] if lines else ""

        if proc.returncode != 0:
            if not first_line:
                logger.error("Density model exited with status %d and no output: %s",
                             proc.returncode, proc.stderr.strip())
                raise ModelInvocationError(
                    f"Density model exited with status {proc.returncode} and no output"
                )
            logger.warning("Density model exited with status %d; using its output",
                           proc.returncode)

        raw = first_line[:MODEL_OUTPUT_WIDTH]
        logger.debug("Density model output: %r", raw)
        return raw
