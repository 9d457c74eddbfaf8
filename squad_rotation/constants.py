# squad_rotation/constants.py
from __future__ import annotations

# --- Fixed roles ---
GOALKEEPER = "Goalkeeper"
SUBSTITUTE = "Substitute"
RESERVED_ROLES = (GOALKEEPER, SUBSTITUTE)

# Short keys used inside solver variable names
GOALKEEPER_KEY = "G"
SUBSTITUTE_KEY = "Sub"

GOALKEEPERS_PER_PERIOD = 1
OUTFIELD_ROLE_COUNT = 1

# Halftime swap model is only defined for two halves
PERIODS_PER_MATCH = 2

# 5-a-side default outfield
DEFAULT_ROLES = ["Defender", "Left", "Right", "Striker"]

# Objective weights stay far below one unit of any constraint
TIE_BREAK_SCALE = 1e-4

# Solver values above this count as "assigned"
ASSIGNED_THRESHOLD = 0.5

INFEASIBLE_HINTS = [
    "Adding more matches",
    "Disabling the 'no consecutive subs' rule",
    "Adjusting team composition (add more players or remove positions)",
]
