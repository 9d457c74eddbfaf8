# squad_rotation/validation.py
from __future__ import annotations
import math
from typing import Any, List, Mapping, Union

import pydantic

from .constants import GOALKEEPERS_PER_PERIOD, PERIODS_PER_MATCH, RESERVED_ROLES
from .errors import ValidationError
from .models import ScheduleParameters, SquadConfig


def _clean_names(values: List[str]) -> List[str]:
    return [s for s in (str(v).strip() for v in values) if s]


def _as_number(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _duplicates(values: List[str]) -> List[str]:
    seen = set()
    dupes: List[str] = []
    for v in values:
        if v in seen and v not in dupes:
            dupes.append(v)
        seen.add(v)
    return dupes


def coerce_config(raw: Union[SquadConfig, Mapping[str, Any]]) -> SquadConfig:
    if isinstance(raw, SquadConfig):
        return raw
    try:
        return SquadConfig(**dict(raw))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid squad input: {e.errors()[0]['msg']}") from e


def validate(raw: Union[SquadConfig, Mapping[str, Any]]) -> ScheduleParameters:
    """Turn raw squad input into ScheduleParameters, failing on the first problem found."""
    cfg = coerce_config(raw)

    players = _clean_names(cfg.players)
    if not players:
        raise ValidationError("Please enter at least one player name.")

    dupes = _duplicates(players)
    if dupes:
        raise ValidationError(
            f"Duplicate player names detected: {', '.join(dupes)}. Each player must have a unique name."
        )

    matches = _as_number(cfg.num_matches)
    if not math.isfinite(matches) or matches < 1 or matches != math.floor(matches):
        raise ValidationError(
            f"Number of matches must be a whole number of at least 1 (got {cfg.num_matches!r})."
        )

    periods = _as_number(cfg.periods_per_match)
    if periods != PERIODS_PER_MATCH:
        raise ValidationError(
            f"Periods per match must be {PERIODS_PER_MATCH} (to model the halftime swap); "
            f"got {cfg.periods_per_match!r}."
        )

    roles = _clean_names(cfg.positions)
    if not roles:
        raise ValidationError("Please add at least one outfield position.")

    dupes = _duplicates(list(RESERVED_ROLES) + roles)
    if dupes:
        raise ValidationError(
            f"Duplicate position names detected: {', '.join(dupes)}. "
            f"Each position must have a unique name (Goalkeeper and Substitute are reserved)."
        )

    params = ScheduleParameters(
        players=players,
        outfield_roles=roles,
        num_matches=int(matches),
        periods_per_match=PERIODS_PER_MATCH,
        goalie_stays=cfg.goalie_stays,
        no_consecutive_subs=cfg.no_consecutive_subs,
        keep_positions=cfg.keep_positions,
    )

    if params.substitute_count < 0:
        shortfall = -params.substitute_count
        raise ValidationError(
            f"Not enough players for the team configuration. You have {params.num_players} players "
            f"but need {params.team_size} on the pitch (1 goalkeeper + {params.team_size - 1} outfield), "
            f"{shortfall} short. Either add more players or remove positions."
        )

    if params.has_substitutes and params.stayers_per_match < GOALKEEPERS_PER_PERIOD:
        raise ValidationError(
            f"Impossible halftime swap configuration: substitute_count={params.substitute_count}, "
            f"team_size={params.team_size}, stayers_per_match={params.stayers_per_match}, "
            f"but at least {GOALKEEPERS_PER_PERIOD} player must stay on for both halves."
        )

    return params
