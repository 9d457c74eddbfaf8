# squad_rotation/reports.py
from __future__ import annotations
from typing import Dict, List, Sequence
import pandas as pd

from .constants import SUBSTITUTE
from .decoder import output_roles
from .fairness import bound_violations
from .models import ScheduleRow, SolveResult


def schedule_frame(result: SolveResult) -> pd.DataFrame:
    roles = output_roles(result.meta.outfield_roles)
    rows = []
    for row in result.schedule:
        rec = {"Match": row.match, "Period": row.period}
        for r in roles:
            rec[r] = ", ".join(row.roles.get(r, []))
        rows.append(rec)
    return pd.DataFrame(rows, columns=["Match", "Period"] + roles)


def totals_frame(result: SolveResult) -> pd.DataFrame:
    roles = output_roles(result.meta.outfield_roles)
    df = pd.DataFrame.from_dict(result.totals, orient="index", columns=roles).fillna(0).astype(int)
    df["On pitch"] = df[[r for r in roles if r != SUBSTITUTE]].sum(axis=1)
    df.index.name = "Player"
    return df.sort_index()


def substitution_changes(schedule: Sequence[ScheduleRow]) -> List[Dict[str, List[str]]]:
    """Per row: who came off the bench (`on`) and who went to it (`off`) since the previous row."""
    out = []
    prev_bench: List[str] = []
    for idx, row in enumerate(schedule):
        bench = row.roles.get(SUBSTITUTE, [])
        if idx == 0:
            out.append({"on": [], "off": []})
        else:
            out.append({
                "on": [n for n in prev_bench if n not in bench],
                "off": [n for n in bench if n not in prev_bench],
            })
        prev_bench = bench
    return out


def fairness_dashboard_frame(result: SolveResult) -> pd.DataFrame:
    bounds = result.meta.fairness_bounds
    flagged = {(p, r) for p, r, _ in bound_violations(result.totals, bounds)}
    rows = []
    for player, by_role in result.totals.items():
        for role, b in bounds.items():
            rows.append({
                "player": player,
                "role": role,
                "periods": by_role.get(role, 0),
                "lower_bound": b.min,
                "upper_bound": b.max,
                "average": b.avg,
                "flag_bound_violation": (player, role) in flagged,
            })
    dash = pd.DataFrame(rows)
    if dash.empty:
        return dash
    return dash.sort_values(["flag_bound_violation", "player", "role"], ascending=[False, True, True])
