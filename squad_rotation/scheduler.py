# squad_rotation/scheduler.py
from __future__ import annotations
import logging
from typing import Any, Callable, Mapping, Optional, Union

from .constants import INFEASIBLE_HINTS
from .decoder import decode_solution
from .errors import InfeasibleModelError
from .model_builder import build_program
from .models import ScheduleParameters, SolveResult, SquadConfig
from .rng import current_week_label, hash_to_seed, make_rng, shuffle
from .solver import MilpSolver, PulpSolver, SolverStatus
from .validation import coerce_config, validate

logger = logging.getLogger(__name__)


def infeasible_message() -> str:
    return "No feasible schedule found. Try:\n" + "\n".join(f"- {h}" for h in INFEASIBLE_HINTS)


def resolve_seed_text(seed: Optional[str], cfg: Optional[SquadConfig] = None) -> str:
    for candidate in (seed, cfg.seed if cfg else None):
        if candidate is not None and str(candidate).strip():
            return str(candidate).strip()
    return current_week_label()


def solve_parameters(
    params: ScheduleParameters,
    seed_text: str,
    solver_factory: Callable[[], MilpSolver] = PulpSolver,
) -> SolveResult:
    """Build, solve and decode for already validated parameters."""
    seed_num = hash_to_seed(seed_text)
    rng = make_rng(seed_num)

    # Sorting first makes the schedule independent of entry order; the seeded
    # shuffle then varies which player lands on which variable index.
    order = shuffle(sorted(params.players), rng)
    params = params.with_players(order)
    logger.debug("Seed %r -> %d, player order %s", seed_text, seed_num, order)

    lp, meta = build_program(params, rng)

    # one fresh backend per solve; a loaded solver is never reused
    solver = solver_factory()
    lp.load_into(solver)
    result = solver.solve()

    if not result.status.has_solution:
        logger.info("No feasible schedule (status=%s)", result.status.value)
        raise InfeasibleModelError(infeasible_message(), status=result.status.value)
    if result.status is SolverStatus.FEASIBLE:
        logger.info("Solution is feasible but may not be optimal")

    schedule, totals = decode_solution(params, result.values, meta)
    logger.info(
        "Schedule found: squad=%d team=%d subs=%d stayers/match=%d",
        meta.num_players, meta.team_size, meta.substitute_count, meta.stayers_per_match,
    )
    return SolveResult(
        schedule=schedule,
        totals=totals,
        meta=meta,
        status=result.status.value,
        seed_text=seed_text,
        seed=seed_num,
        players=order,
    )


def schedule_rotation(
    raw: Union[SquadConfig, Mapping[str, Any]],
    seed: Optional[str] = None,
    solver_factory: Callable[[], MilpSolver] = PulpSolver,
) -> SolveResult:
    """Validate raw squad input and produce a fair rotation.

    Raises ValidationError, InfeasibleModelError or SolverUnavailableError.
    """
    cfg = coerce_config(raw)
    params = validate(cfg)
    return solve_parameters(params, resolve_seed_text(seed, cfg), solver_factory=solver_factory)
