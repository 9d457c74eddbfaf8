# squad_rotation/models.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_ROLES,
    GOALKEEPERS_PER_PERIOD,
    OUTFIELD_ROLE_COUNT,
    PERIODS_PER_MATCH,
)


class SquadConfig(BaseModel):
    """Raw squad input as it arrives from a UI, a YAML file or the CLI.

    Counts are left loosely typed; `validation.validate` decides what is acceptable.
    """
    players: List[str] = Field(default_factory=list)
    positions: List[str] = Field(default_factory=lambda: list(DEFAULT_ROLES))
    num_matches: Any = 2
    periods_per_match: Any = PERIODS_PER_MATCH
    goalie_stays: bool = False
    no_consecutive_subs: bool = False
    keep_positions: bool = False
    seed: Optional[str] = None

    @field_validator("players", "positions", mode="before")
    @classmethod
    def _split_lines(cls, v):
        # a textarea-style blob: one name per line
        if isinstance(v, str):
            return v.splitlines()
        return v

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_text(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class ScheduleParameters(BaseModel):
    players: List[str]
    outfield_roles: List[str]
    num_matches: int
    periods_per_match: int = PERIODS_PER_MATCH
    goalie_stays: bool = False
    no_consecutive_subs: bool = False
    keep_positions: bool = False

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def outfield_counts(self) -> Dict[str, int]:
        return {r: OUTFIELD_ROLE_COUNT for r in self.outfield_roles}

    @property
    def team_size(self) -> int:
        return GOALKEEPERS_PER_PERIOD + sum(self.outfield_counts.values())

    @property
    def substitute_count(self) -> int:
        return self.num_players - self.team_size

    @property
    def stayers_per_match(self) -> int:
        """Players on the pitch for both halves of a match."""
        return self.team_size - self.substitute_count

    @property
    def has_substitutes(self) -> bool:
        return self.substitute_count > 0

    @property
    def total_periods(self) -> int:
        return self.num_matches * self.periods_per_match

    @property
    def period_list(self) -> List[Tuple[int, int]]:
        """(match, period) pairs in playing order."""
        return [(m, p) for m in range(self.num_matches) for p in range(self.periods_per_match)]

    def with_players(self, players: List[str]) -> "ScheduleParameters":
        return self.model_copy(update={"players": list(players)})


class FairnessBound(BaseModel):
    min: int
    max: int
    avg: float


class ModelMeta(BaseModel):
    num_players: int
    team_size: int
    substitute_count: int
    stayers_per_match: int
    outfield_roles: List[str]
    role_keys: Dict[str, str]
    fairness_bounds: Dict[str, FairnessBound] = Field(default_factory=dict)
    num_binaries: int = 0
    num_constraints: int = 0


class ScheduleRow(BaseModel):
    match: int   # 1-based
    period: int  # 1-based
    roles: Dict[str, List[str]]


class SolveResult(BaseModel):
    schedule: List[ScheduleRow]
    totals: Dict[str, Dict[str, int]]
    meta: ModelMeta
    status: str
    seed_text: str
    seed: int
    players: List[str]
