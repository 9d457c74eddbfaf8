from squad_rotation.constants import GOALKEEPER, SUBSTITUTE, TIE_BREAK_SCALE
from squad_rotation.model_builder import build_program, model_roles, role_keys
from squad_rotation.models import ScheduleParameters
from squad_rotation.program import EQ, GE, LE
from squad_rotation.rng import make_rng


def _params(n, roles, matches=1, **flags):
    return ScheduleParameters(players=[f"P{i}" for i in range(n)], outfield_roles=roles, num_matches=matches, **flags)


def _names(lp, prefix):
    return [c.name for c in lp.constraints if c.name.startswith(prefix)]


def test_ten_players_one_defender_quotas_and_bounds():
    params = _params(10, ["Defender"], matches=2)
    lp, meta = build_program(params, make_rng(1))

    assert meta.team_size == 2 and meta.substitute_count == 8
    assert len(_names(lp, "goalieCount_")) == 4
    assert lp.constraint("goalieCount_m1_p1").rhs == 1
    assert lp.constraint("roleCount_r0_m0_p0").rhs == 1
    assert lp.constraint("subCount_m0_p1").rhs == 8

    g = meta.fairness_bounds[GOALKEEPER]
    assert (g.min, g.max) == (0, 1)
    assert not _names(lp, "fairMin_i0_G")
    fair_max = lp.constraint("fairMax_i3_G")
    assert fair_max.sense == LE and fair_max.rhs == 1 and len(fair_max.terms) == 4
    sub = meta.fairness_bounds[SUBSTITUTE]
    assert (sub.min, sub.max) == (2, 4)
    assert lp.constraint("fairMin_i3_Sub").sense == GE


def test_variables_are_unique_and_complete():
    params = _params(7, ["Defender", "Left", "Right", "Striker"], matches=3)
    lp, meta = build_program(params, make_rng(1))
    assert len(lp.binaries) == len(set(lp.binaries))
    x_vars = [v for v in lp.binaries if v.startswith("x_")]
    assert len(x_vars) == 7 * 3 * 2 * 6
    # on_pitch per period plus one stayer per match
    assert len([v for v in lp.binaries if v.startswith("o_")]) == 7 * 3 * 2
    assert len([v for v in lp.binaries if v.startswith("y_")]) == 7 * 3
    assert meta.num_binaries == len(lp.binaries)


def test_role_keys_survive_awkward_names():
    keys = role_keys(["Left wing", "Left_wing", "Ünïcödé"])
    assert len(set(keys.values())) == 5
    params = _params(5, ["Left wing", "Left_wing", "Ünïcödé"])
    lp, _ = build_program(params, make_rng(1))
    assert lp.has_constraint("roleCount_r1_m0_p0")


def test_exactly_one_role_covers_every_model_role():
    params = _params(7, ["Defender", "Left", "Right", "Striker"])
    lp, _ = build_program(params, make_rng(1))
    c = lp.constraint("oneRole_i2_m0_p1")
    assert c.sense == EQ and c.rhs == 1
    assert len(c.terms) == len(model_roles(params)) == 6


def test_halftime_swap_bookkeeping():
    params = _params(7, ["Defender", "Left", "Right", "Striker"], matches=2)
    lp, _ = build_program(params, make_rng(1))
    assert lp.constraint("onPitchDef_i0_m1_p0").terms == [("o_0_m1_p0", 1), ("x_0_m1_p0_Sub", 1)]
    assert lp.constraint("and1_i0_m0").terms == [("y_0_m0", 1), ("o_0_m0_p0", -1)]
    assert lp.constraint("and2_i0_m0").terms == [("y_0_m0", 1), ("o_0_m0_p1", -1)]
    and3 = lp.constraint("and3_i0_m0")
    assert and3.terms == [("y_0_m0", -1), ("o_0_m0_p0", 1), ("o_0_m0_p1", 1)] and and3.rhs == 1
    assert lp.constraint("stayers_m1").rhs == 3


def test_stayer_is_and_of_on_pitch():
    params = _params(7, ["Defender", "Left", "Right", "Striker"])
    lp, _ = build_program(params, make_rng(1))
    cons = [lp.constraint(n) for n in ("and1_i0_m0", "and2_i0_m0", "and3_i0_m0")]
    for o0 in (0, 1):
        for o1 in (0, 1):
            for y in (0, 1):
                vals = {"o_0_m0_p0": o0, "o_0_m0_p1": o1, "y_0_m0": y}
                ok = all(c.is_satisfied(vals) for c in cons)
                assert ok == (y == (o0 and o1))


def test_optional_rules_only_when_enabled():
    plain, _ = build_program(_params(7, ["D", "L", "R", "S"], matches=2), make_rng(1))
    assert not _names(plain, "goalieFixed_")
    assert not _names(plain, "noConsecSub_")
    assert not _names(plain, "keepPos_")

    flagged, _ = build_program(
        _params(7, ["D", "L", "R", "S"], matches=2, goalie_stays=True, no_consecutive_subs=True, keep_positions=True),
        make_rng(1),
    )
    assert flagged.constraint("goalieFixed_i4_m1").terms == [("x_4_m1_p0_G", 1), ("x_4_m1_p1_G", -1)]
    # 4 periods -> 3 adjacent pairs per player, including the match boundary
    assert len(_names(flagged, "noConsecSub_i0_")) == 3
    boundary = flagged.constraint("noConsecSub_i0_t1")
    assert boundary.terms == [("x_0_m0_p1_Sub", 1), ("x_0_m1_p0_Sub", 1)] and boundary.rhs == 1
    keep = flagged.constraint("keepPos_i0_m0_r2")
    assert keep.sense == LE and keep.rhs == 1
    assert keep.terms == [("x_0_m0_p0_r2", 1), ("y_0_m0", 1), ("x_0_m0_p1_r2", -1)]


def test_goalkeeper_bounds_even_when_keeper_stays():
    _, meta = build_program(_params(4, ["D"], matches=5, goalie_stays=True), make_rng(1))
    g = meta.fairness_bounds[GOALKEEPER]
    assert g.min % 2 == 0 and g.max % 2 == 0
    assert (g.min, g.max) == (2, 4)


def test_full_strength_squad_has_no_bench_model():
    params = _params(5, ["D", "L", "R", "S"], matches=2, keep_positions=True, no_consecutive_subs=True)
    lp, meta = build_program(params, make_rng(1))
    assert meta.substitute_count == 0
    assert not any(v.endswith("_Sub") for v in lp.binaries)
    assert not any(v.startswith(("o_", "y_")) for v in lp.binaries)
    assert SUBSTITUTE not in meta.fairness_bounds
    assert not _names(lp, "stayers_") and not _names(lp, "noConsecSub_")
    keep = lp.constraint("keepPos_i1_m1_r0")
    assert keep.sense == EQ and keep.rhs == 0
    assert keep.terms == [("x_1_m1_p0_r0", 1), ("x_1_m1_p1_r0", -1)]


def test_objective_is_tiny_and_reproducible():
    params = _params(7, ["D", "L", "R", "S"], matches=2)
    lp1, _ = build_program(params, make_rng(99))
    lp2, _ = build_program(params, make_rng(99))
    lp3, _ = build_program(params, make_rng(100))
    assert lp1.objective == lp2.objective
    assert lp1.objective != lp3.objective
    assert len(lp1.objective) == len([v for v in lp1.binaries if v.startswith("x_")])
    assert all(0 <= w < TIE_BREAK_SCALE for _, w in lp1.objective)
    # the whole objective is worth less than one slot of any constraint
    assert sum(w for _, w in lp1.objective) < 1
