# squad_rotation/config.py
from __future__ import annotations
import os
import textwrap

from .constants import DEFAULT_ROLES, PERIODS_PER_MATCH

# ===== Squad defaults (5-a-side, all optional rules off) =====
DEFAULT_CONFIG = {
    "players": [],
    "positions": list(DEFAULT_ROLES),
    "num_matches": 2,
    "periods_per_match": PERIODS_PER_MATCH,
    "goalie_stays": False,
    "no_consecutive_subs": False,
    "keep_positions": False,
    "seed": None,                    # None -> current week label
}

# ===== Solver defaults =====
DEFAULT_SOLVER_OPTIONS = {
    "msg": False,
    "time_limit": None,              # seconds; None waits for CBC to finish
}

DEFAULT_SAMPLE_SQUAD_YAML = textwrap.dedent("""\
# Squad file for squad-rotation
players:
  - Alex
  - Blake
  - Casey
  - Drew
  - Emery
  - Finley
  - Harper
positions:
  - Defender
  - Left
  - Right
  - Striker
num_matches: 3
periods_per_match: 2
goalie_stays: true
no_consecutive_subs: true
keep_positions: false
# seed: "2025-14"
""")


def ensure_sample_config(path: str) -> bool:
    """Write the sample squad file unless one is already there. Returns True if written."""
    if os.path.exists(path):
        return False
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(DEFAULT_SAMPLE_SQUAD_YAML)
    return True
