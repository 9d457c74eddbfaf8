# squad_rotation/program.py
"""
Solver-neutral binary integer program.

The model builder writes into an IntegerProgram; `load_into` replays it
through the four MilpSolver operations so any backend can sit behind it.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Tuple

if TYPE_CHECKING:
    from .solver import MilpSolver

EQ = "=="
LE = "<="
GE = ">="
SENSES = (EQ, LE, GE)

Term = Tuple[str, float]  # (variable name, coefficient)


@dataclass
class Constraint:
    name: str
    terms: List[Term]
    sense: str
    rhs: float

    def is_satisfied(self, values: Dict[str, float], tol: float = 1e-6) -> bool:
        lhs = sum(coef * values.get(var, 0.0) for var, coef in self.terms)
        if self.sense == EQ:
            return abs(lhs - self.rhs) <= tol
        if self.sense == LE:
            return lhs <= self.rhs + tol
        return lhs >= self.rhs - tol


@dataclass
class IntegerProgram:
    name: str = "squad_rotation"
    binaries: List[str] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    objective: List[Term] = field(default_factory=list)

    def __post_init__(self):
        self._declared = set(self.binaries)
        self._names = {c.name for c in self.constraints}

    def add_binary(self, name: str) -> str:
        if name in self._declared:
            raise ValueError(f"Variable {name} declared twice")
        self._declared.add(name)
        self.binaries.append(name)
        return name

    def add_constraint(self, name: str, terms: List[Term], sense: str, rhs: float) -> None:
        if sense not in SENSES:
            raise ValueError(f"Unknown constraint sense {sense!r}")
        if name in self._names:
            raise ValueError(f"Constraint {name} added twice")
        unknown = [v for v, _ in terms if v not in self._declared]
        if unknown:
            raise ValueError(f"Constraint {name} uses undeclared variables: {unknown[:3]}")
        self._names.add(name)
        self.constraints.append(Constraint(name, list(terms), sense, rhs))

    def add_eq(self, name: str, terms: List[Term], rhs: float) -> None:
        self.add_constraint(name, terms, EQ, rhs)

    def add_le(self, name: str, terms: List[Term], rhs: float) -> None:
        self.add_constraint(name, terms, LE, rhs)

    def add_ge(self, name: str, terms: List[Term], rhs: float) -> None:
        self.add_constraint(name, terms, GE, rhs)

    def set_objective(self, terms: List[Term]) -> None:
        self.objective = list(terms)

    def constraint(self, name: str) -> Constraint:
        for c in self.constraints:
            if c.name == name:
                return c
        raise KeyError(name)

    def has_constraint(self, name: str) -> bool:
        return name in self._names

    def violated(self, values: Dict[str, float]) -> List[str]:
        return [c.name for c in self.constraints if not c.is_satisfied(values)]

    def load_into(self, solver: "MilpSolver") -> "MilpSolver":
        for name in self.binaries:
            solver.declare_binary(name)
        for c in self.constraints:
            solver.add_constraint(c.name, c.terms, c.sense, c.rhs)
        solver.set_objective(self.objective)
        return solver
