"""
Tests for GridTiler.

Tests cover:
- Row/column sizing and cell offsets (row 0 on top)
- Dimension validation
- Holes
- Port exposure with (row, col) metadata
"""

import pytest

from tessera.errors import InconsistentGridDimensions
from tessera.geometry import Bbox, Point, Rect
from tessera.layout.placement.grid import GridTiler
from tessera.layout.port import PortId


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def full_grid(block) -> GridTiler:
    """2x2 grid with row heights [10, 20] and column widths [5, 15]."""
    return GridTiler([
        [block(5, 10), block(15, 10)],
        [block(5, 20), block(15, 20)],
    ])


# =============================================================================
# Sizing
# =============================================================================

class TestGridSizing:

    def test_total_bbox(self, full_grid):
        box = full_grid.bbox()
        assert box.width() == 20
        assert box.height() == 30

    def test_derived_sizes(self, full_grid):
        assert full_grid.row_heights.tolist() == [10, 20]
        assert full_grid.col_widths.tolist() == [5, 15]
        assert full_grid.shape == (2, 2)

    def test_top_row_is_placed_last(self, full_grid):
        assert full_grid.cell(0, 0) == Rect.from_xy(0, 20, 5, 30)
        assert full_grid.cell(0, 1) == Rect.from_xy(5, 20, 20, 30)
        assert full_grid.cell(1, 0) == Rect.from_xy(0, 0, 5, 20)
        assert full_grid.cell(1, 1) == Rect.from_xy(5, 0, 20, 20)

    def test_three_rows_accumulate_upward(self, block):
        grid = GridTiler([[block(1, 3)], [block(1, 5)], [block(1, 7)]])
        assert [grid.cell(i, 0).p0.y for i in range(3)] == [12, 7, 0]

    def test_generate_places_tiles_in_cells(self, block):
        grid = GridTiler([
            [block(5, 10, x=100), block(15, 10, y=-40)],
            [block(5, 20, x=3, y=3), block(15, 20)],
        ])
        group = grid.generate()
        placed = sorted((e.shape.p0.x, e.shape.p0.y, e.shape.p1.x, e.shape.p1.y)
                        for e in group.flatten())
        cells = sorted((c.p0.x, c.p0.y, c.p1.x, c.p1.y)
                       for c in (grid.cell(i, j) for i in range(2) for j in range(2)))
        assert placed == cells
        assert group.bbox() == grid.bbox()


# =============================================================================
# Validation
# =============================================================================

class TestGridValidation:

    def test_row_height_mismatch(self, block):
        with pytest.raises(InconsistentGridDimensions, match='row 0'):
            GridTiler([[block(5, 10), block(15, 12)]])

    def test_column_width_mismatch(self, block):
        with pytest.raises(InconsistentGridDimensions, match='column 0'):
            GridTiler([[block(5, 10)], [block(6, 20)]])

    def test_ragged_rows(self, block):
        with pytest.raises(InconsistentGridDimensions, match='Row 1'):
            GridTiler([[block(5, 10), block(5, 10)], [block(5, 10)]])

    def test_is_value_error(self, block):
        with pytest.raises(ValueError):
            GridTiler([[block(5, 10), block(15, 12)]])


# =============================================================================
# Holes
# =============================================================================

class TestGridHoles:

    def test_hole_reserves_sibling_dims(self, block):
        grid = GridTiler([
            [block(5, 10), None],
            [None, block(15, 20)],
        ])
        assert grid.cell(0, 1) == Rect.from_xy(5, 20, 20, 30)
        assert grid.tile(0, 1) is None
        assert grid.bbox() == Bbox.new(Point(0, 0), Point(20, 30))

    def test_empty_row_has_zero_height(self, block):
        grid = GridTiler([[None], [block(5, 10)]])
        assert grid.row_heights.tolist() == [0, 10]
        assert grid.cell(0, 0) == Rect.from_xy(0, 10, 5, 10)

    def test_translation_of_hole(self, block):
        grid = GridTiler([[None, block(5, 5)]])
        with pytest.raises(LookupError):
            grid.translation(0, 0)

    def test_empty_grid(self):
        assert GridTiler([]).bbox().is_empty()


# =============================================================================
# Ports
# =============================================================================

class TestGridPorts:

    def test_port_map_receives_position(self, block, met1):
        seen = []

        def rename(port, meta):
            seen.append(meta)
            i, j = meta
            return port.with_id(PortId(f"p{i}{j}"))

        grid = GridTiler.new_with_ports([
            [block(5, 10, port='p'), block(15, 10, port='p')],
            [block(5, 20, port='p'), None],
        ], rename)
        assert sorted(seen) == [(0, 0), (0, 1), (1, 0)]
        assert grid.ports.get(PortId('p01')).shapes_on(met1) == [Rect.from_xy(5, 20, 20, 30)]
        assert len(grid.generate().ports) == 3
