# squad_rotation/model_builder.py
from __future__ import annotations
import logging
from typing import Callable, Dict, List, Tuple

from .constants import (
    GOALKEEPER,
    GOALKEEPER_KEY,
    GOALKEEPERS_PER_PERIOD,
    SUBSTITUTE,
    SUBSTITUTE_KEY,
    TIE_BREAK_SCALE,
)
from .fairness import fairness_table
from .models import ModelMeta, ScheduleParameters
from .program import IntegerProgram

logger = logging.getLogger(__name__)


# ---------- Variable names ----------
def role_keys(outfield_roles: List[str]) -> Dict[str, str]:
    """Role name -> short key used in variable names. Index based, so any role text is safe."""
    keys = {GOALKEEPER: GOALKEEPER_KEY, SUBSTITUTE: SUBSTITUTE_KEY}
    for k, r in enumerate(outfield_roles):
        keys[r] = f"r{k}"
    return keys


def x_name(i: int, m: int, p: int, key: str) -> str:
    """player i holds role `key` in match m, period p"""
    return f"x_{i}_m{m}_p{p}_{key}"


def on_pitch_name(i: int, m: int, p: int) -> str:
    return f"o_{i}_m{m}_p{p}"


def stayer_name(i: int, m: int) -> str:
    return f"y_{i}_m{m}"


def model_roles(params: ScheduleParameters) -> List[str]:
    """Roles that get decision variables; Substitute only when somebody sits out."""
    base = [GOALKEEPER] + list(params.outfield_roles)
    return [SUBSTITUTE] + base if params.has_substitutes else base


# ---------- Builder ----------
def build_program(
    params: ScheduleParameters,
    rng: Callable[[], float],
) -> Tuple[IntegerProgram, ModelMeta]:
    N = params.num_players
    M = params.num_matches
    PERIODS = range(params.periods_per_match)
    PL = params.period_list
    ROLES = model_roles(params)
    KEY = role_keys(params.outfield_roles)
    has_subs = params.has_substitutes
    players = range(N)

    lp = IntegerProgram(name="squad_rotation")

    def x(i: int, m: int, p: int, role: str) -> str:
        return x_name(i, m, p, KEY[role])

    # Binaries
    for i in players:
        for m, p in PL:
            for r in ROLES:
                lp.add_binary(x(i, m, p, r))

    if has_subs:
        for i in players:
            for m in range(M):
                for p in PERIODS:
                    lp.add_binary(on_pitch_name(i, m, p))
                lp.add_binary(stayer_name(i, m))

    # 1) Exactly one role per player per period
    for i in players:
        for m, p in PL:
            lp.add_eq(f"oneRole_i{i}_m{m}_p{p}", [(x(i, m, p, r), 1) for r in ROLES], 1)

    # 2) Role quotas per period
    for m, p in PL:
        lp.add_eq(
            f"goalieCount_m{m}_p{p}",
            [(x(i, m, p, GOALKEEPER), 1) for i in players],
            GOALKEEPERS_PER_PERIOD,
        )
        for r, cnt in params.outfield_counts.items():
            lp.add_eq(f"roleCount_{KEY[r]}_m{m}_p{p}", [(x(i, m, p, r), 1) for i in players], cnt)
        if has_subs:
            lp.add_eq(
                f"subCount_m{m}_p{p}",
                [(x(i, m, p, SUBSTITUTE), 1) for i in players],
                params.substitute_count,
            )

    # 3) Keeper plays both halves
    if params.goalie_stays:
        for i in players:
            for m in range(M):
                lp.add_eq(
                    f"goalieFixed_i{i}_m{m}",
                    [(x(i, m, 0, GOALKEEPER), 1), (x(i, m, 1, GOALKEEPER), -1)],
                    0,
                )

    # 4) Never on the bench twice in a row, match boundaries included
    if params.no_consecutive_subs and has_subs:
        for i in players:
            for t in range(len(PL) - 1):
                (ma, pa), (mb, pb) = PL[t], PL[t + 1]
                lp.add_le(
                    f"noConsecSub_i{i}_t{t}",
                    [(x(i, ma, pa, SUBSTITUTE), 1), (x(i, mb, pb, SUBSTITUTE), 1)],
                    1,
                )

    # 5) Halftime swap: on_pitch = 1 - sub, stayer = on_pitch0 AND on_pitch1
    if has_subs:
        for i in players:
            for m in range(M):
                for p in PERIODS:
                    lp.add_eq(
                        f"onPitchDef_i{i}_m{m}_p{p}",
                        [(on_pitch_name(i, m, p), 1), (x(i, m, p, SUBSTITUTE), 1)],
                        1,
                    )
                y, o0, o1 = stayer_name(i, m), on_pitch_name(i, m, 0), on_pitch_name(i, m, 1)
                lp.add_le(f"and1_i{i}_m{m}", [(y, 1), (o0, -1)], 0)
                lp.add_le(f"and2_i{i}_m{m}", [(y, 1), (o1, -1)], 0)
                lp.add_le(f"and3_i{i}_m{m}", [(y, -1), (o0, 1), (o1, 1)], 1)
        for m in range(M):
            lp.add_eq(
                f"stayers_m{m}",
                [(stayer_name(i, m), 1) for i in players],
                params.stayers_per_match,
            )

    # 6) Stayers keep their outfield position at halftime
    if params.keep_positions:
        for r in params.outfield_roles:
            for i in players:
                for m in range(M):
                    name = f"keepPos_i{i}_m{m}_{KEY[r]}"
                    if has_subs:
                        # x0 + y - 1 <= x1
                        lp.add_le(
                            name,
                            [(x(i, m, 0, r), 1), (stayer_name(i, m), 1), (x(i, m, 1, r), -1)],
                            1,
                        )
                    else:
                        lp.add_eq(name, [(x(i, m, 0, r), 1), (x(i, m, 1, r), -1)], 0)

    # 7) Fairness: hard min/max periods per role for every player
    bounds = fairness_table(params)
    for r, b in bounds.items():
        for i in players:
            terms = [(x(i, m, p, r), 1) for m, p in PL]
            if b.min > 0:
                lp.add_ge(f"fairMin_i{i}_{KEY[r]}", terms, b.min)
            lp.add_le(f"fairMax_i{i}_{KEY[r]}", terms, b.max)

    # Objective: tiny random weights only break ties between equally fair schedules
    obj = []
    for i in players:
        for m, p in PL:
            for r in ROLES:
                obj.append((x(i, m, p, r), rng() * TIE_BREAK_SCALE))
    lp.set_objective(obj)

    meta = ModelMeta(
        num_players=N,
        team_size=params.team_size,
        substitute_count=params.substitute_count,
        stayers_per_match=params.stayers_per_match,
        outfield_roles=list(params.outfield_roles),
        role_keys=KEY,
        fairness_bounds=bounds,
        num_binaries=len(lp.binaries),
        num_constraints=len(lp.constraints),
    )
    logger.debug(
        "Built model: %d binaries, %d constraints, roles=%s",
        meta.num_binaries, meta.num_constraints, ROLES,
    )
    logger.debug("Fairness bounds per player: %s", {r: b.model_dump() for r, b in bounds.items()})
    return lp, meta
