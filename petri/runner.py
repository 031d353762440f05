"""
Headless tick driver.

Stands in for a display-refresh scheduler: calls PetriSimulation.step once
per frame with a fixed frame interval, feeds stats into a PopulationTracker
and prints periodic summaries.

Usage:
    python -m petri.runner --ticks 600 --seed 42
    python -m petri.runner --config my_config.yaml --pause-at 300 --resume-at 360
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .simulation import PetriSimulation
from .stats import PopulationTracker
from .loader import load_config, load_default_config, ConfigLoadError
from .data_types import SimulationConfig
from .constants import FRAME_INTERVAL_MS, TICK_SUMMARY_INTERVAL


class TickDriver:
    """
    Frame loop around a PetriSimulation.

    Simulated time advances by frame_interval_ms per frame whether or not
    the engine is running; pausing just stops physics, and resuming carries
    on at the next frame with no catch-up.
    """

    def __init__(
        self,
        sim: PetriSimulation,
        frame_interval_ms: float = FRAME_INTERVAL_MS,
        start_ms: float = 0.0
    ):
        self.sim = sim
        self.frame_interval_ms = frame_interval_ms
        self.now_ms = start_ms
        self.is_running = True
        self.frames = 0
        self.resets_completed = 0

        self.tracker = PopulationTracker(initial_population=len(sim.entities))
        sim.add_stats_listener(self.tracker.observe)

    def pause(self):
        self.is_running = False

    def resume(self):
        self.is_running = True

    def request_reset(self):
        """Pause, respawn, and restart population tracking"""
        self.is_running = False
        self.sim.reset(now_ms=self.now_ms, on_complete=self._on_reset_complete)

    def _on_reset_complete(self):
        self.resets_completed += 1
        self.tracker.reset(initial_population=len(self.sim.entities))

    def run_frame(self):
        self.now_ms += self.frame_interval_ms
        self.frames += 1
        return self.sim.step(self.now_ms, self.is_running)

    def run(
        self,
        frames: int,
        summary_every: Optional[int] = TICK_SUMMARY_INTERVAL,
        pause_at: Optional[int] = None,
        resume_at: Optional[int] = None
    ):
        """
        Run a number of frames.

        Args:
            frames: Frame count
            summary_every: Print a tick summary every N frames (None disables)
            pause_at: Frame index at which to pause
            resume_at: Frame index at which to resume
        """
        for i in range(frames):
            if pause_at is not None and i == pause_at:
                self.pause()
            if resume_at is not None and i == resume_at:
                self.resume()

            self.run_frame()

            if summary_every and (i + 1) % summary_every == 0:
                self.sim.print_tick_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the petri dish simulation headless")
    parser.add_argument('--ticks', type=int, default=600, help="Frames to run (default 600)")
    parser.add_argument('--seed', type=int, default=42, help="Run seed (default 42)")
    parser.add_argument('--config', type=Path, default=None, help="YAML config file")
    parser.add_argument('--summary-every', type=int, default=TICK_SUMMARY_INTERVAL,
                        help="Print a summary every N frames (0 disables)")
    parser.add_argument('--pause-at', type=int, default=None, help="Frame to pause at")
    parser.add_argument('--resume-at', type=int, default=None, help="Frame to resume at")
    parser.add_argument('--breed-chance', type=float, default=None, help="Override breed_chance")
    parser.add_argument('--max-population', type=int, default=None, help="Override max_population")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else load_default_config()
    except ConfigLoadError as e:
        print(f"[FAIL] {e}")
        return 1

    overrides = config.to_dict()
    if args.breed_chance is not None:
        overrides['breed_chance'] = args.breed_chance
    if args.max_population is not None:
        overrides['max_population'] = args.max_population
    config = SimulationConfig.from_dict(overrides)

    sim = PetriSimulation(config=config, seed=args.seed)
    driver = TickDriver(sim)
    driver.run(
        args.ticks,
        summary_every=args.summary_every or None,
        pause_at=args.pause_at,
        resume_at=args.resume_at
    )

    stats = sim.get_tick_stats()
    latest = driver.tracker.latest
    print("=" * 60)
    print(f"  Ticks run:          {stats['tick_count']}")
    print(f"  Population:         {len(sim.entities)}")
    if latest is not None:
        print(f"  Type A / B:         {latest.count_a} / {latest.count_b}")
    print(f"  Max population:     {driver.tracker.max_population_reached}")
    print(f"  Born / killed:      {stats['total_born']} / {stats['total_killed']}")
    print(f"  Expired:            {stats['total_expired']}")
    print(f"  Avg tick time:      {stats['avg_tick_time_ms']:.3f} ms")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
