from __future__ import annotations
import logging
from typing import Optional

from ..config.models import GenerationSettings
from ..rng import RandomLike, RandomSource
from .scaling import scale_grid
from .tiles import Grid, ScaledGrid
from .walk import CancelCheck, DrunkardWalkGenerator, IterationHook

logger = logging.getLogger(__name__)


class DungeonFactory:
    """Factory to produce dungeons from a single settings object.

    Usage:
      settings = build_settings()
      grid = DungeonFactory.generate(settings)
      scaled = DungeonFactory.scaled(settings, grid)
    """

    @staticmethod
    def build_generator(
        settings: GenerationSettings,
        *,
        on_iteration: Optional[IterationHook] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> DrunkardWalkGenerator:
        return DrunkardWalkGenerator(settings.walk, on_iteration=on_iteration, should_cancel=should_cancel)

    @staticmethod
    def make_rng(settings: GenerationSettings) -> RandomSource:
        return RandomSource(settings.seed)

    @staticmethod
    def generate(settings: GenerationSettings, rng: Optional[RandomLike] = None) -> Grid:
        gen = DungeonFactory.build_generator(settings)
        if rng is None:
            rng = DungeonFactory.make_rng(settings)
        logger.info(
            "DungeonFactory: carving %dx%d dungeon (seed=%r, max_iterations=%d)",
            settings.width,
            settings.height,
            settings.seed,
            settings.walk.max_iterations,
        )
        return gen.generate(settings.width, settings.height, rng)

    @staticmethod
    def scaled(settings: GenerationSettings, grid: Grid) -> ScaledGrid:
        return scale_grid(grid, settings.scale)
