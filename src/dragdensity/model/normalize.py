"""Conversion of raw model output to an SI density.

The model prints a density in g/cm^3 such as ``1.234567e-11``. Moving to
kg/m^3 is done on the text: three is added to the base-10 exponent before
the value is parsed, so no floating-point multiply touches the mantissa.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import numpy as np

from dragdensity.errors import MalformedDensityError
from dragdensity.utils.constants import GCM3_TO_KGM3_EXPONENT, SENTINEL_DENSITY_KG_M3

logger = logging.getLogger(__name__)

_MANTISSA_RE = re.compile(r"^[+-]?\d*\.?\d*")
_NON_FINITE = {"inf", "+inf", "-inf", "infinity", "nan", "-nan"}
_EXPONENT_WIDTH = 3


@dataclass(frozen=True)
class NormalizedDensity:
    """A density ready for the drag computation.

    Attributes:
        density_kg_m3: Mass density in kg/m^3.
        substituted: True when the sentinel replaced the model value.
        diagnostic: Explanation of the substitution, empty otherwise.
    """

    density_kg_m3: float
    substituted: bool = False
    diagnostic: str = ""


def normalize_density(
    raw: str,
    *,
    sentinel: float = SENTINEL_DENSITY_KG_M3,
) -> NormalizedDensity:
    """Convert model output text (g/cm^3) to kg/m^3.

    Output that is non-finite, empty, or has no ``e`` right after the
    mantissa is replaced by ``sentinel``; the run continues.

    Args:
        raw: Text captured from the model's first output line.
        sentinel: Density substituted for unusable output.

    Returns:
        The normalized density.

    Raises:
        MalformedDensityError: If the exponent or the reassembled number
            cannot be parsed.
    """
    text = raw.strip()

    marker = _MANTISSA_RE.match(text).end()
    if (
        text.lower() in _NON_FINITE
        or marker == 0
        or text[marker:marker + 1] != "e"
    ):
        return _substitute(raw, sentinel)

    mantissa = text[:marker]
    exponent_text = text[marker + 1:marker + 1 + _EXPONENT_WIDTH]
    try:
        exponent = int(exponent_text) + GCM3_TO_KGM3_EXPONENT
    except ValueError:
        logger.error("Invalid exponent %r in model output %r", exponent_text, raw)
        raise MalformedDensityError(
            f"Invalid exponent {exponent_text!r} in model output {raw!r}"
        ) from None

    converted = f"{mantissa}E{exponent}"
    try:
        density = float(converted)
    except ValueError:
        logger.error("Cannot parse %r (from model output %r)", converted, raw)
        raise MalformedDensityError(
            f"Cannot parse {converted!r} (from model output {raw!r})"
        ) from None

    if not np.isfinite(density) or density < 0:
        return _substitute(raw, sentinel)

    return NormalizedDensity(density_kg_m3=density)


def _substitute(raw: str, sentinel: float) -> NormalizedDensity:
    message = f"{sentinel:.3e} kg/m^3 substituted for density value {raw.strip()!r} returned by nrlmsise"
    logger.warning("%s", message)
    return NormalizedDensity(density_kg_m3=sentinel, substituted=True, diagnostic=message)
