"""
Tests for the grid planner.

Covers:
- Exact tilings in size and count mode
- Field-level validation failures
- The lenient layout used for previews
- Purity of repeated calls
"""
from __future__ import annotations

import pytest

from sprite_splitter import grid_planner
from sprite_splitter.grid_planner import GridPlan, ValidationFailure
from sprite_splitter.type_defs import ByCount, BySize

DIVISORS_OF_240 = [1, 2, 3, 4, 5, 6, 8, 10, 12, 15, 16, 20, 24, 30, 40, 48,
                   60, 80, 120, 240]


class TestBySize:
    def test_square_sheet(self) -> None:
        result = grid_planner.plan((256, 256), BySize(64, 64))
        assert result == GridPlan(frame_width=64, frame_height=64,
                                  rows=4, cols=4)
        assert result.total_frames == 16  # noqa: PLR2004

    @pytest.mark.parametrize("fw", DIVISORS_OF_240)
    @pytest.mark.parametrize("fh", [1, 3, 5, 36, 180])
    def test_exact_divisors(self, fw: int, fh: int) -> None:
        width, height = 240, 180
        result = grid_planner.plan((width, height), BySize(fw, fh))
        assert isinstance(result, GridPlan)
        assert result.cols == width // fw
        assert result.rows == height // fh
        assert result.cols * fw == width
        assert result.rows * fh == height

    def test_remainder_on_both_axes(self) -> None:
        result = grid_planner.plan((100, 100), BySize(30, 30))
        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == {"frame_width", "frame_height"}
        assert not grid_planner.is_exportable((100, 100), BySize(30, 30))

    def test_remainder_on_one_axis(self) -> None:
        result = grid_planner.plan((128, 100), BySize(32, 30))
        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == {"frame_height"}
        assert "does not divide" in result.errors["frame_height"]

    def test_frame_larger_than_image(self) -> None:
        result = grid_planner.plan((64, 64), BySize(128, 64))
        assert isinstance(result, ValidationFailure)
        assert "frame_width" in result.errors
        assert result.layout.cols == 0


class TestByCount:
    def test_rows_and_cols(self) -> None:
        result = grid_planner.plan((300, 200), ByCount(rows=2, cols=3))
        assert result == GridPlan(frame_width=100, frame_height=100,
                                  rows=2, cols=3)
        assert result.total_frames == 6  # noqa: PLR2004

    @pytest.mark.parametrize("cols", DIVISORS_OF_240)
    @pytest.mark.parametrize("rows", [1, 2, 9, 20])
    def test_exact_divisors(self, rows: int, cols: int) -> None:
        width, height = 240, 180
        result = grid_planner.plan((width, height), ByCount(rows, cols))
        assert isinstance(result, GridPlan)
        assert result.frame_width * cols == width
        assert result.frame_height * rows == height

    def test_cols_do_not_divide_width(self) -> None:
        result = grid_planner.plan((100, 90), ByCount(rows=3, cols=3))
        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == {"cols"}

    def test_more_cols_than_pixels(self) -> None:
        result = grid_planner.plan((4, 4), ByCount(rows=1, cols=5))
        assert isinstance(result, ValidationFailure)
        assert "cols" in result.errors


class TestIncompleteInput:
    @pytest.mark.parametrize(
        ("spec", "fields"),
        [
            (BySize(None, None), {"frame_width", "frame_height"}),
            (BySize(0, 16), {"frame_width"}),
            (BySize(16, -4), {"frame_height"}),
            (BySize(True, 16), {"frame_width"}),
            (ByCount(None, 4), {"rows"}),
            (ByCount(2, 0), {"cols"}),
        ],
    )
    def test_reports_each_field(
        self,
        spec: BySize | ByCount,
        fields: set[str],
    ) -> None:
        result = grid_planner.plan((64, 64), spec)
        assert isinstance(result, ValidationFailure)
        assert set(result.errors) == fields

    def test_missing_value_message(self) -> None:
        result = grid_planner.plan((64, 64), ByCount(None, None))
        assert isinstance(result, ValidationFailure)
        assert result.errors["rows"] == "rows is required"

    def test_non_integer_is_rejected(self) -> None:
        result = grid_planner.plan((64, 64), BySize(16.0, 16))  # type: ignore[arg-type]
        assert isinstance(result, ValidationFailure)
        assert "positive integer" in result.errors["frame_width"]

    def test_unknown_spec_type(self) -> None:
        with pytest.raises(TypeError):
            grid_planner.plan((64, 64), (16, 16))  # type: ignore[arg-type]


class TestLayout:
    def test_layout_floors_remainders(self) -> None:
        grid = grid_planner.layout((100, 100), BySize(30, 30))
        assert grid == GridPlan(frame_width=30, frame_height=30,
                                rows=3, cols=3)

    def test_failure_carries_layout(self) -> None:
        result = grid_planner.plan((100, 100), ByCount(rows=3, cols=3))
        assert isinstance(result, ValidationFailure)
        assert result.layout == GridPlan(frame_width=33, frame_height=33,
                                         rows=3, cols=3)

    def test_partial_input_is_empty(self) -> None:
        grid = grid_planner.layout((100, 100), BySize(25, None))
        assert grid is grid_planner.EMPTY_PLAN
        assert grid.total_frames == 0
        assert grid.is_empty


class TestPurity:
    def test_repeated_calls_match(self) -> None:
        spec = ByCount(rows=4, cols=8)
        first = grid_planner.plan((256, 128), spec)
        second = grid_planner.plan((256, 128), spec)
        assert first == second

    def test_repeated_failures_match(self) -> None:
        spec = BySize(30, 30)
        assert grid_planner.plan((100, 100), spec) == grid_planner.plan(
            (100, 100), spec,
        )


@pytest.mark.parametrize(
    ("size", "grid", "expected"),
    [
        ((256, 256), GridPlan(64, 64, 4, 4), True),
        ((256, 256), GridPlan(64, 64, 3, 4), False),
        ((256, 256), GridPlan(0, 0, 0, 0), False),
    ],
)
def test_tiles_exactly(
    size: tuple[int, int],
    grid: GridPlan,
    *,
    expected: bool,
) -> None:
    assert grid_planner.tiles_exactly(size, grid) is expected
