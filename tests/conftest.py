from __future__ import annotations
import pytest

from squad_rotation.constants import GOALKEEPER, SUBSTITUTE
from squad_rotation.decoder import decode_solution
from squad_rotation.model_builder import build_program
from squad_rotation.models import ScheduleParameters, SolveResult
from squad_rotation.rng import make_rng

SEVEN = ["Alex", "Blake", "Casey", "Drew", "Emery", "Finley", "Harper"]
FIVE_A_SIDE = ["Defender", "Left", "Right", "Striker"]


@pytest.fixture
def small_params() -> ScheduleParameters:
    # team of 2 (keeper + defender), one on the bench
    return ScheduleParameters(players=["Ann", "Ben", "Cat"], outfield_roles=["Defender"], num_matches=1)


@pytest.fixture
def small_values():
    # period 1: Ann G, Ben D, Cat bench; period 2: Ann G, Cat D, Ben bench
    return {
        "x_0_m0_p0_G": 1.0, "x_1_m0_p0_r0": 0.9999999, "x_2_m0_p0_Sub": 1.0,
        "x_0_m0_p1_G": 1.0, "x_2_m0_p1_r0": 1.0, "x_1_m0_p1_Sub": 1.0,
        "x_1_m0_p0_G": 1e-9, "x_0_m0_p1_r0": 0.2,
    }


@pytest.fixture
def small_result(small_params, small_values) -> SolveResult:
    _, meta = build_program(small_params, make_rng(1))
    schedule, totals = decode_solution(small_params, small_values, meta)
    return SolveResult(
        schedule=schedule, totals=totals, meta=meta, status="optimal",
        seed_text="test", seed=1, players=list(small_params.players),
    )


def assert_valid_schedule(result: SolveResult, num_matches: int, outfield, num_players: int):
    """Quota, total and fairness invariants every decoded schedule must satisfy."""
    subs = num_players - 1 - len(outfield)
    assert len(result.schedule) == num_matches * 2
    for row in result.schedule:
        assert len(row.roles[GOALKEEPER]) == 1
        for r in outfield:
            assert len(row.roles[r]) == 1
        assert len(row.roles[SUBSTITUTE]) == subs
        on_row = [n for names in row.roles.values() for n in names]
        assert sorted(on_row) == sorted(result.players)

    for player, by_role in result.totals.items():
        assert sum(by_role.values()) == num_matches * 2
        for role, b in result.meta.fairness_bounds.items():
            assert b.min <= by_role[role] <= b.max, (player, role, by_role[role])
