"""
squad_rotation: fair goalkeeper/position/substitute rotations for small-sided teams,
modelled as a binary integer program and solved with PuLP/CBC.
"""
from .errors import InfeasibleModelError, RotationError, SolverUnavailableError, ValidationError
from .models import ScheduleParameters, SolveResult, SquadConfig
from .scheduler import schedule_rotation, solve_parameters
from .validation import validate

__all__ = [
    "InfeasibleModelError",
    "RotationError",
    "ScheduleParameters",
    "SolveResult",
    "SolverUnavailableError",
    "SquadConfig",
    "ValidationError",
    "schedule_rotation",
    "solve_parameters",
    "validate",
]
