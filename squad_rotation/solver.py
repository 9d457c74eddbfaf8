# squad_rotation/solver.py
from __future__ import annotations
import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pulp

from .config import DEFAULT_SOLVER_OPTIONS
from .errors import SolverUnavailableError
from .program import EQ, GE, LE

logger = logging.getLogger(__name__)

Term = Tuple[str, float]


class SolverStatus(str, enum.Enum):
    OPTIMAL = "optimal"
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    UNDEFINED = "undefined"

    @property
    def has_solution(self) -> bool:
        return self in (SolverStatus.OPTIMAL, SolverStatus.FEASIBLE)


@dataclass
class SolverResult:
    status: SolverStatus
    values: Dict[str, float] = field(default_factory=dict)


class MilpSolver(ABC):
    """What the scheduler needs from a mixed-integer backend."""

    @abstractmethod
    def declare_binary(self, name: str) -> None: ...

    @abstractmethod
    def add_constraint(self, name: str, terms: List[Term], sense: str, rhs: float) -> None: ...

    @abstractmethod
    def set_objective(self, terms: List[Term]) -> None:
        """Minimisation objective."""

    @abstractmethod
    def solve(self) -> SolverResult: ...


class PulpSolver(MilpSolver):
    """PuLP model solved by the CBC binary bundled with PuLP."""

    def __init__(
        self,
        name: str = "squad_rotation",
        msg: bool = DEFAULT_SOLVER_OPTIONS["msg"],
        time_limit: Optional[float] = DEFAULT_SOLVER_OPTIONS["time_limit"],
    ):
        self.prob = pulp.LpProblem(name, pulp.LpMinimize)
        self.msg = msg
        self.time_limit = time_limit
        self._vars: Dict[str, pulp.LpVariable] = {}
        self._solved = False

    def _check_fresh(self) -> None:
        if self._solved:
            raise SolverUnavailableError("This PulpSolver already solved a model; create a new one per solve.")

    def declare_binary(self, name: str) -> None:
        self._check_fresh()
        if name in self._vars:
            raise SolverUnavailableError(f"Variable {name} already declared; this PulpSolver already holds a model.")
        self._vars[name] = pulp.LpVariable(name, cat="Binary")

    def _expr(self, terms: List[Term]):
        return pulp.lpSum(coef * self._vars[v] for v, coef in terms)

    def add_constraint(self, name: str, terms: List[Term], sense: str, rhs: float) -> None:
        self._check_fresh()
        if name in self.prob.constraints:
            raise SolverUnavailableError(f"Constraint {name} already added; this PulpSolver already holds a model.")
        expr = self._expr(terms)
        if sense == EQ:
            self.prob += expr == rhs, name
        elif sense == LE:
            self.prob += expr <= rhs, name
        elif sense == GE:
            self.prob += expr >= rhs, name
        else:
            raise ValueError(f"Unknown constraint sense {sense!r}")

    def set_objective(self, terms: List[Term]) -> None:
        self.prob.setObjective(self._expr(terms))

    def _command(self):
        cmd = pulp.PULP_CBC_CMD(msg=self.msg, timeLimit=self.time_limit)
        if not cmd.available():
            raise SolverUnavailableError("CBC solver is not available in this PuLP installation.")
        return cmd

    def solve(self) -> SolverResult:
        self._check_fresh()
        cmd = self._command()
        self._solved = True
        try:
            status = self.prob.solve(cmd)
        except pulp.PulpSolverError as e:
            raise SolverUnavailableError(f"MILP solver failed to run: {e}") from e

        logger.debug("CBC status=%s sol_status=%s", pulp.LpStatus[status], self.prob.sol_status)
        if status == pulp.LpStatusOptimal:
            st = SolverStatus.FEASIBLE if self.prob.sol_status == pulp.LpSolutionIntegerFeasible else SolverStatus.OPTIMAL
        elif status == pulp.LpStatusInfeasible:
            return SolverResult(SolverStatus.INFEASIBLE)
        else:
            return SolverResult(SolverStatus.UNDEFINED)

        values = {name: float(v.varValue or 0.0) for name, v in self._vars.items()}
        return SolverResult(st, values)
