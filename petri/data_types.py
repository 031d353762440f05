"""
Data types shared across the petri dish engine.

SimulationConfig mirrors the YAML config structure and is populated by
loader.py (or built directly by callers).
"""

import math
from dataclasses import dataclass, fields
from typing import Dict, Any, Optional
from enum import Enum

from .constants import DEFAULT_CONFIG, MIN_BALL_SPEED, MAX_INITIAL_POPULATION, MAX_POPULATION_LIMIT


class EntityType(Enum):
    """Binary type tag; same type may kill, different types may breed"""
    A = 'A'
    B = 'B'


# ============================================================================
# Simulation Config
# ============================================================================

@dataclass
class SimulationConfig:
    """User-tunable simulation parameters"""
    breed_chance: float = DEFAULT_CONFIG['breed_chance']  # 0.0 to 1.0
    initial_population: int = DEFAULT_CONFIG['initial_population']
    ball_speed: float = DEFAULT_CONFIG['ball_speed']  # Speed scale factor
    max_population: int = DEFAULT_CONFIG['max_population']
    breed_cooldown_ms: float = DEFAULT_CONFIG['breed_cooldown_ms']

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationConfig':
        """Build config from a dict, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'breed_chance': float(self.breed_chance),
            'initial_population': int(self.initial_population),
            'ball_speed': float(self.ball_speed),
            'max_population': int(self.max_population),
            'breed_cooldown_ms': float(self.breed_cooldown_ms),
        }

    def sanitized(self, verbose: bool = True) -> 'SimulationConfig':
        """
        Return a copy with every field clamped into its accepted range.

        Malformed values never raise: non-finite numbers fall back to the
        defaults, out-of-range numbers are clamped. Each adjustment is
        reported with a [WARN] line when verbose.

        Rules:
            breed_chance in [0, 1]
            initial_population in [2, MAX_INITIAL_POPULATION]
            ball_speed > 0 (clamped to MIN_BALL_SPEED)
            max_population in [initial_population, MAX_POPULATION_LIMIT]
            breed_cooldown_ms >= 0
        """
        def warn(name, old, new):
            if verbose:
                print(f"[WARN] Config {name}={old!r} out of range, using {new!r}")

        def finite(name, value):
            try:
                value = float(value)
            except (TypeError, ValueError):
                value = math.nan
            if not math.isfinite(value):
                default = DEFAULT_CONFIG[name]
                warn(name, value, default)
                return float(default)
            return value

        breed_chance = finite('breed_chance', self.breed_chance)
        clamped = min(1.0, max(0.0, breed_chance))
        if clamped != breed_chance:
            warn('breed_chance', breed_chance, clamped)
            breed_chance = clamped

        initial_population = int(finite('initial_population', self.initial_population))
        if initial_population < 2:
            warn('initial_population', initial_population, 2)
            initial_population = 2
        elif initial_population > MAX_INITIAL_POPULATION:
            warn('initial_population', initial_population, MAX_INITIAL_POPULATION)
            initial_population = MAX_INITIAL_POPULATION

        ball_speed = finite('ball_speed', self.ball_speed)
        if ball_speed <= 0.0:
            warn('ball_speed', ball_speed, MIN_BALL_SPEED)
            ball_speed = MIN_BALL_SPEED

        max_population = int(finite('max_population', self.max_population))
        if max_population < initial_population:
            warn('max_population', max_population, initial_population)
            max_population = initial_population
        elif max_population > MAX_POPULATION_LIMIT:
            warn('max_population', max_population, MAX_POPULATION_LIMIT)
            max_population = MAX_POPULATION_LIMIT

        breed_cooldown_ms = finite('breed_cooldown_ms', self.breed_cooldown_ms)
        if breed_cooldown_ms < 0.0:
            warn('breed_cooldown_ms', breed_cooldown_ms, 0.0)
            breed_cooldown_ms = 0.0

        return SimulationConfig(
            breed_chance=breed_chance,
            initial_population=initial_population,
            ball_speed=ball_speed,
            max_population=max_population,
            breed_cooldown_ms=breed_cooldown_ms
        )


# ============================================================================
# Stats & Tick Results
# ============================================================================

@dataclass
class StatsSnapshot:
    """Population summary emitted on the stats throttle cadence"""
    population: int
    count_a: int
    count_b: int
    timestamp_ms: float = 0.0
    tick_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'population': int(self.population),
            'count_a': int(self.count_a),
            'count_b': int(self.count_b),
            'timestamp_ms': float(self.timestamp_ms),
            'tick_count': int(self.tick_count)
        }


@dataclass
class TickResult:
    """
    Outcome of one engine step.

    Counters are zero for paused ticks; `stats` is set only on ticks where
    the stats throttle fired.
    """
    tick_count: int
    population: int
    container_radius: float
    ran: bool = True
    expired: int = 0
    killed: int = 0
    born: int = 0
    collisions: int = 0
    wall_bounces: int = 0
    stats: Optional[StatsSnapshot] = None
