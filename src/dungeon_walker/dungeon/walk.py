from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from ..config.models import WalkConfig
from ..errors import GenerationCancelled
from ..rng import RandomLike, RandomSource
from .tiles import Cell, Grid, check_dimensions
from .walker import Walker, random_direction

logger = logging.getLogger(__name__)

IterationHook = Callable[[int, Tuple[Walker, ...]], None]
CancelCheck = Callable[[], bool]
ConfigLike = Union[WalkConfig, Mapping[str, Any], None]


@dataclass
class GenerationStats:
    iterations: int = 0
    spawned: int = 0
    destroyed: int = 0
    peak_walkers: int = 1
    final_walkers: int = 1
    floor_cells: int = 0
    stopped_on_fill: bool = False


def _coerce_config(config: ConfigLike) -> WalkConfig:
    if isinstance(config, WalkConfig):
        return config
    return WalkConfig.from_mapping(config)


class DrunkardWalkGenerator:
    """Random-walk ("drunkard's walk") cave generator.

    Algorithm:
    - Start from a solid WALL grid with a single walker on the center cell.
    - Each iteration, every walker marks its cell FLOOR, then the population is
      updated in four passes: destroy (at most one walker), turn, spawn, move.
    - Walkers are clamped to the interior so the 1-cell border stays WALL.
    - Stop after ``max_iterations``, or earlier once ``fill_target`` is reached.

    Every FLOOR cell is visited by a walker descending from the center walker, so
    the carved area is always a single 4-connected region containing the spawn.
    """

    def __init__(
        self,
        config: ConfigLike = None,
        *,
        on_iteration: Optional[IterationHook] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> None:
        self.config = _coerce_config(config)
        self.on_iteration = on_iteration
        self.should_cancel = should_cancel
        self.last_stats: Optional[GenerationStats] = None

    def generate(self, width: int, height: int, rng: Optional[RandomLike] = None) -> Grid:
        check_dimensions(width, height)
        rng = rng if rng is not None else RandomSource()
        cfg = self.config

        grid = Grid.filled(width, height, Cell.WALL)
        interior = grid.interior_size
        stats = GenerationStats()
        cx, cy = grid.spawn
        walkers: List[Walker] = [Walker(cx, cy, random_direction(rng))]
        floor_cells = 0

        for iteration in range(cfg.max_iterations):
            if self.should_cancel is not None and self.should_cancel():
                raise GenerationCancelled(f"Generation cancelled before iteration {iteration}")

            for walker in walkers:
                if grid.get(walker.x, walker.y) != Cell.FLOOR:
                    grid.set(walker.x, walker.y, Cell.FLOOR)
                    floor_cells += 1

            self._destroy_pass(walkers, rng, stats)
            walkers = [
                walker.turned(random_direction(rng))
                if rng.random() < cfg.direction_change_probability
                else walker
                for walker in walkers
            ]
            self._spawn_pass(walkers, rng, stats)
            walkers = [walker.stepped(width, height) for walker in walkers]

            stats.iterations = iteration + 1
            stats.peak_walkers = max(stats.peak_walkers, len(walkers))
            if self.on_iteration is not None:
                self.on_iteration(iteration, tuple(walkers))

            if cfg.fill_target is not None and floor_cells / float(interior) >= cfg.fill_target:
                stats.stopped_on_fill = True
                break

        stats.final_walkers = len(walkers)
        stats.floor_cells = floor_cells
        self.last_stats = stats
        logger.debug(
            "DrunkardWalkGenerator: %dx%d, %d iterations, %d floor cells (%.1f%% of interior), walkers peak=%d final=%d",
            width,
            height,
            stats.iterations,
            floor_cells,
            100.0 * floor_cells / interior,
            stats.peak_walkers,
            stats.final_walkers,
        )
        return grid

    def _destroy_pass(self, walkers: List[Walker], rng: RandomLike, stats: GenerationStats) -> None:
        # The last walker is never removed; at most one removal per iteration.
        for index in range(len(walkers)):
            if rng.random() < self.config.destroy_probability and len(walkers) > 1:
                del walkers[index]
                stats.destroyed += 1
                return

    def _spawn_pass(self, walkers: List[Walker], rng: RandomLike, stats: GenerationStats) -> None:
        # Only walkers present when the pass starts get a spawn roll.
        for index in range(len(walkers)):
            if rng.random() < self.config.spawn_probability and len(walkers) < self.config.max_walkers:
                walkers.append(walkers[index].spawn(random_direction(rng)))
                stats.spawned += 1


def generate(
    width: int,
    height: int,
    config: ConfigLike = None,
    rng: Optional[RandomLike] = None,
) -> Grid:
    """Carve a dungeon with default hooks. See :class:`DrunkardWalkGenerator`."""
    return DrunkardWalkGenerator(config).generate(width, height, rng)
