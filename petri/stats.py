"""
Throttled population stats.

StatsAggregator summarizes the live entity list at most once per
STATS_THROTTLE_MS so consumers are not flooded at frame rate.
PopulationTracker is the consumer-side accumulator for running maxima;
the engine never owns it.
"""

from typing import Callable, List, Optional

from .entity import Entity
from .data_types import EntityType, StatsSnapshot
from .constants import STATS_THROTTLE_MS


def summarize(entities: List[Entity], timestamp_ms: float = 0.0, tick_count: int = 0) -> StatsSnapshot:
    """Count population and per-type totals"""
    count_a = sum(1 for e in entities if e.entity_type is EntityType.A)
    return StatsSnapshot(
        population=len(entities),
        count_a=count_a,
        count_b=len(entities) - count_a,
        timestamp_ms=timestamp_ms,
        tick_count=tick_count
    )


class StatsAggregator:
    """Emits StatsSnapshot to listeners on a fixed throttle"""

    def __init__(self, throttle_ms: float = STATS_THROTTLE_MS):
        self.throttle_ms = throttle_ms
        self.last_emit_ms: Optional[float] = None
        self._listeners: List[Callable[[StatsSnapshot], None]] = []

    def add_listener(self, callback: Callable[[StatsSnapshot], None]):
        self._listeners.append(callback)

    def maybe_emit(self, now_ms: float, entities: List[Entity], tick_count: int = 0) -> Optional[StatsSnapshot]:
        """
        Emit a snapshot if the throttle interval has passed.

        The first call always emits.

        Args:
            now_ms: Frame timestamp
            entities: Live entity list
            tick_count: Engine tick counter, stamped into the snapshot

        Returns:
            The emitted snapshot, or None when throttled
        """
        if self.last_emit_ms is not None and now_ms - self.last_emit_ms < self.throttle_ms:
            return None

        snapshot = summarize(entities, now_ms, tick_count)
        self.last_emit_ms = now_ms

        for callback in self._listeners:
            callback(snapshot)

        return snapshot


class PopulationTracker:
    """
    Stats consumer that remembers the running maximum population.

    Register `observe` as a stats listener.
    """

    def __init__(self, initial_population: int = 0):
        self.latest: Optional[StatsSnapshot] = None
        self.max_population_reached = initial_population
        self.snapshots_seen = 0

    def observe(self, snapshot: StatsSnapshot):
        self.latest = snapshot
        self.snapshots_seen += 1
        self.max_population_reached = max(self.max_population_reached, snapshot.population)

    def reset(self, initial_population: int = 0):
        self.latest = None
        self.max_population_reached = initial_population
        self.snapshots_seen = 0
