"""Engine-wide configuration constants for the duel engine."""

import os

ROUND_CAP = int(os.environ.get("DUEL_ROUND_CAP", "100"))  # Max rounds per session
ROUND_CAP_LIMIT = 200          # Ceiling for any configured or per-request cap
ROUND_CAP_POLICY = os.environ.get("DUEL_ROUND_CAP_POLICY", "defeat")  # "defeat" or "draw"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

PROFICIENCY_BONUS = 2          # Attack bonus with a proficient weapon
BASE_CRIT_THRESHOLD = 20
SPECIALIST_CRIT_THRESHOLD = 19
MIN_CRIT_THRESHOLD = 18
CRIT_CHANCE_CAP = 0.30         # Ceiling on the secondary crit chance
GRAZE_MARGIN = 2               # Ranged near-miss window

GUARD_AC_BONUS = 2
GUARD_DAMAGE_CUT = 2
SHIELD_AC_BONUS = 2
SHIELD_BLOCK_CHANCE = 0.20

SECOND_WIND_DICE = "1d8"
OPPONENT_DAMAGE_DIE = 6
FLEE_BASE_THRESHOLD = 10       # Flee succeeds on d20 + DEX mod >= this + opponent level


def validate() -> None:
    """Check the environment-driven settings are usable."""
    if not 1 <= ROUND_CAP <= ROUND_CAP_LIMIT:
        raise ValueError(f"DUEL_ROUND_CAP must be between 1 and {ROUND_CAP_LIMIT}, got {ROUND_CAP}")
    if ROUND_CAP_POLICY not in ("defeat", "draw"):
        raise ValueError(
            f"DUEL_ROUND_CAP_POLICY must be 'defeat' or 'draw', got {ROUND_CAP_POLICY!r}"
        )
