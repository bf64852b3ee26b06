"""Exceptions raised while resolving an atmospheric density.

Parse failures derive from ``ValueError`` and process failures from
``RuntimeError`` so callers that already catch the builtins keep working.
"""

from __future__ import annotations


class DragDensityError(Exception):
    """Base class for every failure raised by dragdensity."""


class EpochFormatError(DragDensityError, ValueError):
    """The epoch text does not have the documented token layout."""


class LookupTableError(DragDensityError, KeyError):
    """A month is outside the cumulative-day table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class IndexNotFoundError(DragDensityError, LookupError):
    """No historical record matched the requested date."""


class ParseError(DragDensityError, ValueError):
    """A numeric field in a historical record could not be parsed."""


class ModelInvocationError(DragDensityError, RuntimeError):
    """The external density model could not be run."""


class ModelTimeoutError(ModelInvocationError):
    """The external density model did not finish in time."""


class MalformedDensityError(DragDensityError, ValueError):
    """The model output could not be converted to a density."""
