# squad_rotation/errors.py
from __future__ import annotations


class RotationError(Exception):
    """Base class for everything the scheduler raises on purpose."""


class ValidationError(RotationError, ValueError):
    """Raw squad input is malformed or contradictory. Raised before any model is built."""


class InfeasibleModelError(RotationError):
    """The solver found no assignment satisfying the rotation rules."""

    def __init__(self, message: str, status: str = "infeasible"):
        super().__init__(message)
        self.status = status


class SolverUnavailableError(RotationError):
    """The MILP backend could not be created or run."""
