from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from . import __version__
from .config.loader import build_settings
from .config.models import GenerationSettings
from .dungeon.factory import DungeonFactory
from .dungeon.pathfinding import floor_regions
from .dungeon.tiles import Cell, Grid
from .dungeon.walk import GenerationStats
from .errors import DungeonError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dungeon-walker",
        description="Carve a dungeon with a drunkard's walk and print it or open it in a window",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", dest="config_path", type=Path, default=None, help="Settings YAML file")
    parser.add_argument("--seed", default=None, help="Integer or string seed for a reproducible dungeon")
    parser.add_argument("--width", type=int, default=None, help="Grid width in cells")
    parser.add_argument("--height", type=int, default=None, help="Grid height in cells")
    parser.add_argument("--scale", type=int, default=None, help="Upscale factor before painting")
    parser.add_argument("--iterations", type=int, default=None, help="Walk iterations (default 500)")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--window", action="store_true", help="Open the arcade viewer instead of printing")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {"seed": args.seed, "width": args.width, "height": args.height, "scale": args.scale}
    if args.iterations is not None:
        out["walk"] = {"max_iterations": args.iterations}
    return out


def summarize(settings: GenerationSettings, grid: Grid, stats: Optional[GenerationStats]) -> Dict[str, Any]:
    """JSON-serializable description of one generated dungeon."""
    return {
        "width": grid.width,
        "height": grid.height,
        "seed": settings.seed,
        "spawn": list(grid.spawn),
        "floor_cells": grid.count(Cell.FLOOR),
        "floor_fraction": round(grid.floor_fraction(), 4),
        "regions": len(floor_regions(grid)),
        "stats": asdict(stats) if stats is not None else None,
        "rows": grid.to_text().splitlines(),
    }


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(logging.WARNING, debug=args.debug)

    try:
        settings = build_settings(file_path=args.config_path, overrides=_overrides(args))
        if args.window:
            from .app.arcade_app import run

            run(settings)
            return 0
        generator = DungeonFactory.build_generator(settings)
        grid = generator.generate(settings.width, settings.height, DungeonFactory.make_rng(settings))
    except (DungeonError, FileNotFoundError, RuntimeError) as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(json.dumps(summarize(settings, grid, generator.last_stats), indent=2, sort_keys=True))
    else:
        print(grid.to_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
