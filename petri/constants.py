"""
Central configuration constants for the petri dish simulation.

Defines engine tunables that are deliberately not part of SimulationConfig:
geometry of the dish, radius bounds, kill/twin probabilities, lifetime.
"""

# ============================================================================
# Dish Geometry
# ============================================================================

# Logical surface size; the dish is centred on it
SURFACE_WIDTH = 800.0
SURFACE_HEIGHT = 800.0
DISH_CENTER = (SURFACE_WIDTH / 2, SURFACE_HEIGHT / 2)

INITIAL_CONTAINER_RADIUS = 120.0  # Starting size
MAX_CONTAINER_RADIUS = 350.0      # Growth cap
CONTAINER_GROWTH_RATE = 0.15      # Units per running tick


# ============================================================================
# Entity Size & Motion
# ============================================================================

REFERENCE_RADIUS = 8.0  # Nominal size; speed multiplier is 1.0 here
MIN_RADIUS = 4.0
MAX_RADIUS = 20.0

# Initial population radius variance (+/- units around REFERENCE_RADIUS)
INITIAL_RADIUS_VARIANCE = 2.0

# Offspring radius variance (+/- units around parents' average)
OFFSPRING_RADIUS_VARIANCE = 1.0

# Speed factor range drawn per spawn (times ball_speed times size multiplier)
SPEED_FACTOR_MIN = 0.5
SPEED_FACTOR_MAX = 1.0


# ============================================================================
# Lifecycle
# ============================================================================

# Same-type contact kill chance, per type (A is the more aggressive one)
KILL_CHANCE = {
    'A': 0.02,
    'B': 0.01,
}

# Chance that a successful breeding event produces twins
TWIN_CHANCE = 0.1

# Offset of the second twin from the first (both axes)
TWIN_OFFSET = 2.0

# Newborn grace: added to creation/last-breed timestamps (ms)
NEWBORN_GRACE_MS = 2000.0

# Age-based expiry (ms of simulated time since creation)
ENTITY_LIFETIME_MS = 60000.0


# ============================================================================
# Display Hints (consumed by renderers only)
# ============================================================================

TYPE_A_COLOR = '#3b82f6'  # Blue-500
TYPE_B_COLOR = '#22c55e'  # Green-500


# ============================================================================
# Default Simulation Config
# ============================================================================

DEFAULT_CONFIG = {
    'breed_chance': 0.3,
    'initial_population': 20,
    'ball_speed': 2.0,
    'max_population': 200,
    'breed_cooldown_ms': 2000.0,
}

# Lower bound applied to ball_speed when a non-positive value is accepted
MIN_BALL_SPEED = 0.1

# Ceilings applied when a config is accepted
MAX_INITIAL_POPULATION = 100
MAX_POPULATION_LIMIT = 500


# ============================================================================
# Stats & Performance
# ============================================================================

# Minimum interval between stats snapshots (ms of frame timestamp)
STATS_THROTTLE_MS = 200.0

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 100

# Frame interval used by the headless driver (60 Hz)
FRAME_INTERVAL_MS = 1000.0 / 60.0
