"""
Error kinds raised by the position engine.

Every error derives from OrreryError and from the builtin the caller would
naturally catch (ValueError for bad data, RuntimeError for solver failure),
so plain `except ValueError` handlers keep working.
"""

from __future__ import annotations


class OrreryError(Exception):
    """Base class for all engine errors."""


class InvalidElementsError(OrreryError, ValueError):
    """An orbital element set violates an invariant (raised at construction)."""


class NonConvergenceError(OrreryError, RuntimeError):
    """Kepler's equation did not converge within the iteration cap."""

    def __init__(self, mean_anomaly: float, eccentricity: float, iterations: int):
        self.mean_anomaly = mean_anomaly
        self.eccentricity = eccentricity
        self.iterations = iterations
        super().__init__(
            f"Kepler solver did not converge within {iterations} iterations "
            f"(M={mean_anomaly!r}, e={eccentricity!r})."
        )


class BodyGraphError(OrreryError, ValueError):
    """Body graph topology is invalid."""


class DuplicateBodyError(BodyGraphError):
    pass


class UnknownParentError(BodyGraphError):
    pass


class CycleDetectedError(BodyGraphError):
    pass
