import pytest

from dungeon_walker.dungeon.scaling import scale_grid
from dungeon_walker.dungeon.tiles import Cell, Grid
from dungeon_walker.dungeon.walk import generate
from dungeon_walker.errors import InvalidConfig, InvalidDimensions
from dungeon_walker.rng import RandomSource


@pytest.fixture(scope="module")
def carved():
    return generate(13, 9, rng=RandomSource(2024))


def test_factor_one_keeps_content(carved):
    scaled = scale_grid(carved, 1)
    assert (scaled.width, scaled.height) == (carved.width, carved.height)
    assert scaled.to_lists() == carved.cells


@pytest.mark.parametrize("factor", [1, 2, 3, 4])
def test_each_cell_becomes_a_factor_block(carved, factor):
    scaled = scale_grid(carved, factor)
    assert scaled.width == carved.width * factor
    assert scaled.height == carved.height * factor
    assert len(scaled.rows) == scaled.height
    assert all(len(row) == scaled.width for row in scaled.rows)
    for y in range(carved.height):
        for x in range(carved.width):
            for j in range(factor):
                for i in range(factor):
                    assert scaled.get(x * factor + i, y * factor + j) == carved.get(x, y)


def test_row_and_column_order_preserved():
    grid = Grid(3, 3, [[Cell.WALL, Cell.FLOOR, Cell.EMPTY], [Cell.FLOOR] * 3, [Cell.WALL] * 3])
    scaled = scale_grid(grid, 2)
    assert scaled.rows[0] == (Cell.WALL, Cell.WALL, Cell.FLOOR, Cell.FLOOR, Cell.EMPTY, Cell.EMPTY)
    assert scaled.rows[1] == scaled.rows[0]
    assert scaled.rows[2] == (Cell.FLOOR,) * 6


def test_scaled_grid_does_not_alias_input(carved):
    grid = carved.copy()
    scaled = scale_grid(grid, 2)
    before = scaled.to_lists()
    grid.set(1, 1, Cell.EMPTY)
    grid.cells[2][2] = Cell.EMPTY
    assert scaled.to_lists() == before
    assert isinstance(scaled.rows, tuple)


def test_spawn_is_scaled(carved):
    scaled = scale_grid(carved, 3)
    assert scaled.spawn == (carved.spawn[0] * 3, carved.spawn[1] * 3)


@pytest.mark.parametrize("factor", [0, -2])
def test_non_positive_factor_rejected(carved, factor):
    with pytest.raises(InvalidConfig):
        scale_grid(carved, factor)


@pytest.mark.parametrize("width,height", [(2, 5), (5, 0)])
def test_grid_rejects_sizes_without_interior(width, height):
    with pytest.raises(InvalidDimensions):
        Grid(width, height, [[Cell.WALL] * max(width, 0) for _ in range(max(height, 0))])
