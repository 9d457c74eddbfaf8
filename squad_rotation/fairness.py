# squad_rotation/fairness.py
from __future__ import annotations
from typing import Dict, List, Mapping, Tuple
import numpy as np

from .constants import GOALKEEPER, GOALKEEPERS_PER_PERIOD, SUBSTITUTE
from .models import FairnessBound, ScheduleParameters


def compute_fairness_bounds(
    role_count: int,
    total_periods: int,
    num_players: int,
    paired: bool = False,
) -> Tuple[int, int, float]:
    """Per-player (min, max, avg) periods in a role across the whole schedule.

    `paired` rounds min down and max up to even numbers, for a keeper who
    always plays both halves.
    """
    if num_players <= 0:
        return 0, 0, 0.0
    avg = total_periods * role_count / num_players
    lb = max(0, int(np.floor(avg - 0.5)))
    ub = int(np.ceil(avg + 0.5))
    if paired:
        lb = (lb // 2) * 2
        ub = -(-ub // 2) * 2
    return lb, ub, avg


def role_slot_counts(params: ScheduleParameters) -> Dict[str, int]:
    """Occupants per period for every role that exists in this squad."""
    counts: Dict[str, int] = {}
    if params.has_substitutes:
        counts[SUBSTITUTE] = params.substitute_count
    counts[GOALKEEPER] = GOALKEEPERS_PER_PERIOD
    counts.update(params.outfield_counts)
    return counts


def fairness_table(params: ScheduleParameters) -> Dict[str, FairnessBound]:
    table: Dict[str, FairnessBound] = {}
    for role, count in role_slot_counts(params).items():
        lb, ub, avg = compute_fairness_bounds(
            role_count=count,
            total_periods=params.total_periods,
            num_players=params.num_players,
            paired=(role == GOALKEEPER and params.goalie_stays),
        )
        table[role] = FairnessBound(min=lb, max=ub, avg=round(avg, 2))
    return table


def bound_violations(
    totals: Mapping[str, Mapping[str, int]],
    bounds: Mapping[str, FairnessBound],
) -> List[Tuple[str, str, int]]:
    """(player, role, count) for every total outside its role's bounds."""
    out = []
    for player, by_role in totals.items():
        for role, b in bounds.items():
            cnt = by_role.get(role, 0)
            if cnt < b.min or cnt > b.max:
                out.append((player, role, cnt))
    return out
