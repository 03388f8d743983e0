"""Centralized constants for the Facet mastery core.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- EWMA ----------
LIVE_EWMA_ALPHA = 0.15  # single-record update after a fresh review
TIMELINE_EWMA_ALPHA = 0.3  # historical replay in the mastery timeline
NEUTRAL_SCORE = 0.5

# ---------- Combined score ----------
ACCURACY_WEIGHT = 0.7
SPEED_WEIGHT = 0.3

# ---------- Mastery levels (lower bounds) ----------
DEVELOPING_THRESHOLD = 0.5
STRONG_THRESHOLD = 0.7
MASTERED_THRESHOLD = 0.85

# ---------- Weakness severity (exclusive upper bounds) ----------
CRITICAL_THRESHOLD = 0.4
MODERATE_THRESHOLD = 0.55
WEAKNESS_THRESHOLD = 0.7

# ---------- Fragile confidence ----------
FRAGILE_ACCURACY_FLOOR = 0.7
FRAGILE_SPEED_CEILING = 0.5

# ---------- Weakness analysis ----------
MIN_SAMPLE_SIZE = 5
STRONG_DEFINITION_THRESHOLD = 0.8
WEAK_OTHERS_THRESHOLD = 0.6
HEALTH_EXCELLENT = 0.85
HEALTH_GOOD = 0.7
HEALTH_FAIR = 0.5

# ---------- Difficulty ----------
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3
TARGET_TIMES_MS = {1: 5000, 2: 10000, 3: 20000, 4: 40000, 5: 60000}
DIFFICULTY_MULTIPLIERS = (0.5, 0.75, 1.0, 1.5, 2.0)
DIFFICULTY_LABELS = {1: "Very Easy", 2: "Easy", 3: "Medium", 4: "Hard", 5: "Very Hard"}

# ---------- Equality ----------
SCORE_EPSILON = 1e-4

# ---------- Event log ----------
RECENT_EVENT_LIMIT = 10000
DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 3660  # ten years, for the CLI and HTTP entry points
