from collections import deque
from typing import List, Set, Tuple

from .tiles import Cell, Grid

Point = Tuple[int, int]


def flood_fill(grid: Grid, start: Point) -> Set[Point]:
    """Return the 4-connected FLOOR region containing ``start`` (empty if start is not floor)."""
    if not grid.is_floor(*start):
        return set()
    region = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for nx, ny in grid.neighbors4(x, y):
            if (nx, ny) not in region and grid.cells[ny][nx] == Cell.FLOOR:
                region.add((nx, ny))
                q.append((nx, ny))
    return region


def floor_regions(grid: Grid) -> List[Set[Point]]:
    """All 4-connected FLOOR regions, largest first."""
    seen: Set[Point] = set()
    regions: List[Set[Point]] = []
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.cells[y][x] != Cell.FLOOR or (x, y) in seen:
                continue
            region = flood_fill(grid, (x, y))
            seen |= region
            regions.append(region)
    regions.sort(key=len, reverse=True)
    return regions


def is_single_region(grid: Grid) -> bool:
    """True when every FLOOR cell is reachable from the grid's spawn cell."""
    return len(flood_fill(grid, grid.spawn)) == grid.count(Cell.FLOOR)
