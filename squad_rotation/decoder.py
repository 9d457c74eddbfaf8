# squad_rotation/decoder.py
from __future__ import annotations
from typing import Dict, List, Mapping, Tuple

from .constants import ASSIGNED_THRESHOLD, GOALKEEPER, SUBSTITUTE
from .model_builder import role_keys, x_name
from .models import ModelMeta, ScheduleParameters, ScheduleRow


def output_roles(outfield_roles: List[str]) -> List[str]:
    return [GOALKEEPER] + list(outfield_roles) + [SUBSTITUTE]


def decode_solution(
    params: ScheduleParameters,
    values: Mapping[str, float],
    meta: ModelMeta,
) -> Tuple[List[ScheduleRow], Dict[str, Dict[str, int]]]:
    """Read the solver's variable values back into per-period rows and per-player totals.

    A variable counts as set when its value is above 0.5; variables the model
    never declared (e.g. Substitute with a full-strength squad) read as 0.
    """
    roles = output_roles(meta.outfield_roles)
    keys = role_keys(meta.outfield_roles)

    schedule: List[ScheduleRow] = []
    for m, p in params.period_list:
        row: Dict[str, List[str]] = {r: [] for r in roles}
        for i, name in enumerate(params.players):
            for r in roles:
                if values.get(x_name(i, m, p, keys[r]), 0.0) > ASSIGNED_THRESHOLD:
                    row[r].append(name)
        schedule.append(ScheduleRow(match=m + 1, period=p + 1, roles=row))

    totals: Dict[str, Dict[str, int]] = {name: {r: 0 for r in roles} for name in params.players}
    for row in schedule:
        for r, names in row.roles.items():
            for name in names:
                totals[name][r] += 1

    return schedule, totals
