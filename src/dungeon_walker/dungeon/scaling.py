from __future__ import annotations

from typing import Tuple

from ..errors import InvalidConfig
from .tiles import Cell, Grid, ScaledGrid


def scale_grid(grid: Grid, factor: int) -> ScaledGrid:
    """Replicate each cell of ``grid`` into a ``factor`` x ``factor`` block.

    Cell (x, y) covers x*factor .. x*factor+factor-1 and y*factor .. y*factor+factor-1
    in the result. The input is never touched and the result shares no rows with it.
    """
    if factor < 1:
        raise InvalidConfig(f"Scale factor must be >= 1, got {factor}")
    rows = []
    for row in grid.cells:
        wide: Tuple[Cell, ...] = tuple(cell for cell in row for _ in range(factor))
        rows.extend([wide] * factor)
    sx, sy = grid.spawn
    return ScaledGrid(
        width=grid.width * factor,
        height=grid.height * factor,
        factor=factor,
        rows=tuple(rows),
        spawn=(sx * factor, sy * factor),
    )
