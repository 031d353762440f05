"""
Petri dish simulation kernel.

Main simulation class that owns the entity list and container, and runs
the per-tick pipeline: grow, expire, move, reflect, interact, commit, stats.
"""

import os
import time
from typing import Callable, Dict, List, Optional

from .entity import Entity
from .container import ContainerState
from .data_types import SimulationConfig, StatsSnapshot, TickResult
from .spawning import EntityFactory
from .motion import advance_all, reflect_all
from .interactions import resolve_pairs
from .lifecycle import expire_by_age, commit
from .stats import StatsAggregator
from .rng import make_rng
from .constants import (
    ENTITY_LIFETIME_MS,
    MIN_RADIUS,
    MAX_RADIUS,
    TICK_TIME_WINDOW,
)


class PetriSimulation:
    """
    Main simulation class for the petri dish.

    All mutable state (entities, container, tick counters) lives on the
    instance. Time is never read from the clock for simulation rules; the
    caller passes simulated time into every step.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None,
        rng=None,
        now_ms: float = 0.0,
        verbose: bool = True
    ):
        """
        Initialize simulation and spawn the starting population.

        Args:
            config: Simulation config (clamped on acceptance); defaults if None
            seed: Run seed for the PCG64 source (ignored when rng is given)
            rng: Injected random source exposing random() and uniform(low, high)
            now_ms: Simulated time of the initial spawn
            verbose: Print [OK]/[WARN] status lines
        """
        self.verbose = verbose
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)
        self.config: SimulationConfig = self._accept_config(config or SimulationConfig())

        # Simulation state
        self.container = ContainerState()
        self.factory = EntityFactory(self.rng, self.container.center)
        self.entities: List[Entity] = []
        self.tick_count: int = 0
        self.now_ms: float = now_ms  # Last simulated time seen
        self.lifetime_ms: float = ENTITY_LIFETIME_MS

        self.stats = StatsAggregator()

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW  # Rolling average window

        # Lifetime telemetry
        self._telemetry: Dict[str, int] = {
            'total_expired': 0,
            'total_killed': 0,
            'total_born': 0,
            'total_collisions': 0,
            'total_wall_bounces': 0,
        }

        self._reset_state(now_ms)

        if self.verbose:
            print(f"[OK] Simulation initialized: {len(self.entities)} entities, "
                  f"container radius={self.container.radius:.1f}, seed={self.seed}")

    def _accept_config(self, config: SimulationConfig) -> SimulationConfig:
        return config.sanitized(verbose=self.verbose)

    def set_config(self, config: SimulationConfig):
        """
        Replace the config. Takes effect on the next step; initial_population
        only matters at the next reset.
        """
        self.config = self._accept_config(config)

    def add_stats_listener(self, callback: Callable[[StatsSnapshot], None]):
        self.stats.add_listener(callback)

    def _reset_state(self, now_ms: float):
        """
        Build a fresh population and container radius, then publish both.

        The new list is fully built before it replaces self.entities, so a
        reader between steps sees either the old state or the new one.
        """
        self.factory.reset_ids()
        fresh_container = ContainerState(
            initial_radius=self.container.initial_radius,
            max_radius=self.container.max_radius,
            growth_rate=self.container.growth_rate,
            center=self.container.center
        )
        fresh_entities = self.factory.spawn_initial(
            count=self.config.initial_population,
            container_radius=fresh_container.radius,
            speed_scale=self.config.ball_speed,
            now_ms=now_ms
        )
        self.container, self.entities = fresh_container, fresh_entities

    def reset(self, now_ms: Optional[float] = None, on_complete: Optional[Callable[[], None]] = None):
        """
        Reinitialize the population and shrink the container to its initial radius.

        Args:
            now_ms: Simulated time of the respawn (defaults to the last step time)
            on_complete: Called exactly once after the new state is published
        """
        if now_ms is None:
            now_ms = self.now_ms
        self.now_ms = now_ms
        self._reset_state(now_ms)

        if self.verbose:
            print(f"[OK] Reset: {len(self.entities)} entities, "
                  f"container radius={self.container.radius:.1f}")

        if on_complete is not None:
            on_complete()

    def step(
        self,
        now_ms: float,
        is_running: bool = True,
        config: Optional[SimulationConfig] = None,
        timestamp_ms: Optional[float] = None
    ) -> TickResult:
        """
        Advance simulation by one tick.

        TICK ORDER (Critical Invariant):

        1. Grow container (running only)
        2. Expire entities past their lifetime (before they move)
        3. Move every entity, then reflect every entity off the wall
        4. Pairwise pass over the post-motion snapshot (deferred kills/births)
        5. Commit: drop kills, append births
        6. Stats throttle

        When paused, steps 1-5 are skipped entirely; stats still run.

        Args:
            now_ms: Simulated time for age and cooldown rules
            is_running: False pauses physics and growth
            config: Optional replacement config (clamped on acceptance)
            timestamp_ms: Frame timestamp for the stats throttle (defaults to now_ms)

        Returns:
            TickResult with per-tick counters and optional stats snapshot
        """
        start_time = time.perf_counter()
        self.now_ms = now_ms

        if config is not None:
            self.set_config(config)

        if timestamp_ms is None:
            timestamp_ms = now_ms

        result = TickResult(
            tick_count=self.tick_count,
            population=len(self.entities),
            container_radius=self.container.radius,
            ran=is_running
        )

        if is_running:
            self.container.grow(is_running)

            live, result.expired = expire_by_age(self.entities, now_ms, self.lifetime_ms)

            advance_all(live)
            result.wall_bounces = reflect_all(live, self.container)

            interaction = resolve_pairs(live, now_ms, self.config, self.rng, self.factory)
            result.collisions = interaction.collisions
            result.killed = len(interaction.killed)
            result.born = len(interaction.births)

            self.entities = commit(live, interaction.killed, interaction.births)
            self.tick_count += 1

            self._telemetry['total_expired'] += result.expired
            self._telemetry['total_killed'] += result.killed
            self._telemetry['total_born'] += result.born
            self._telemetry['total_collisions'] += result.collisions
            self._telemetry['total_wall_bounces'] += result.wall_bounces

            if os.getenv('PETRI_DEBUG_INVARIANTS') == '1':
                self._check_invariants()

        result.tick_count = self.tick_count
        result.population = len(self.entities)
        result.container_radius = self.container.radius
        result.stats = self.stats.maybe_emit(timestamp_ms, self.entities, self.tick_count)

        self._record_tick_time(time.perf_counter() - start_time)

        return result

    def _check_invariants(self):
        for entity in self.entities:
            assert MIN_RADIUS <= entity.radius <= MAX_RADIUS, \
                f"{entity.instance_id} radius {entity.radius} out of bounds"
        assert self.container.radius <= self.container.max_radius

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics and lifetime telemetry.

        Returns:
            Dict with tick_count, avg_tick_time_ms, last_tick_time_ms, totals
        """
        if not self._tick_times:
            avg_time = 0.0
            last_time = 0.0
        else:
            avg_time = self._tick_time_sum / len(self._tick_times)
            last_time = self._tick_times[-1]

        stats = {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }
        stats.update(self._telemetry)
        return stats

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_snapshot(self) -> dict:
        """
        Get complete simulation state snapshot.

        Returns:
            Dict with tick_count, container, entities, timing
        """
        return {
            'tick_count': self.tick_count,
            'container_radius': float(self.container.radius),
            'container_center': self.container.center.tolist(),
            'entity_count': len(self.entities),
            'entities': [e.to_dict() for e in self.entities],
            'config': self.config.to_dict(),
            'timing': self.get_tick_stats()
        }

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        print(f"Tick {stats['tick_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:6.3f} ms | "
              f"Entities: {len(self.entities)} | "
              f"Radius: {self.container.radius:6.2f}")
