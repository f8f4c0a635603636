import math
from dataclasses import replace

import pytest

from container_optimizer.models import BoxSpec, CanvasConfig, ContainerSpec
from container_optimizer.planner import compute_arrangement
from container_optimizer.projection import project_views


def _container_20ft() -> ContainerSpec:
    return ContainerSpec(
        id="20ft",
        name="20ft Standard",
        internal_length=5.898,
        internal_width=2.352,
        internal_height=2.393,
        max_payload=28200,
    )


def _assert_cells_inside_outline(views):
    for view in ("side", "front", "top"):
        outline = views.outlines[view]
        for cell in views.cells(view):
            assert cell.in_bounds_of_container_outline
            assert cell.position_x >= outline.x - 1e-6
            assert cell.position_y >= outline.y - 1e-6
            assert cell.position_x + cell.width <= outline.x + outline.width + 1e-6
            assert cell.position_y + cell.height <= outline.y + outline.height + 1e-6


def test_three_views_follow_arrangement_counts():
    box = BoxSpec(100, 100, 100, 500, quantity=100)
    container = _container_20ft()
    views = project_views(compute_arrangement(box, container), box, container)

    assert views.state == "ready"
    assert len(views.side) == 5 * 2
    assert len(views.front) == 2 * 2
    assert len(views.top) == 5 * 2
    assert all(cell.is_within_requested_quantity for cell in views.side)
    _assert_cells_inside_outline(views)


def test_cells_beyond_requested_quantity_are_tagged():
    box = BoxSpec(100, 100, 100, 500, quantity=3)
    container = _container_20ft()
    views = project_views(compute_arrangement(box, container), box, container)

    within = [cell for cell in views.side if cell.is_within_requested_quantity]
    assert sorted(cell.sequence for cell in within) == [1, 2, 3]
    # side view numbers column by column, bottom row first
    assert {(cell.column, cell.row) for cell in within} == {(0, 0), (0, 1), (1, 0)}
    assert len(views.side) == 10


def test_side_view_rows_stand_on_the_floor():
    box = BoxSpec(100, 100, 100, 500)
    container = _container_20ft()
    views = project_views(compute_arrangement(box, container), box, container)
    outline = views.outlines["side"]

    floor_cells = [cell for cell in views.side if cell.row == 0]
    for cell in floor_cells:
        assert cell.position_y + cell.height == pytest.approx(outline.y + outline.height)

    top_row0 = [cell for cell in views.top if cell.row == 0]
    for cell in top_row0:
        assert cell.position_y == pytest.approx(outline.y)


def test_scale_uses_default_canvas_spans():
    box = BoxSpec(100, 100, 100, 500)
    container = _container_20ft()
    views = project_views(compute_arrangement(box, container), box, container)
    side = views.outlines["side"]

    assert side.scale_x == pytest.approx(400 / 5.898)
    assert side.scale_y == pytest.approx(300 / 2.393)
    assert side.width == pytest.approx(400)
    assert side.height == pytest.approx(300)
    assert views.side[0].width == pytest.approx(400 / 5.898)


def test_small_container_is_scaled_against_minimum_extent():
    container = ContainerSpec(
        id="sliver",
        name="Sliver",
        internal_length=0.01,
        internal_width=2.352,
        internal_height=2.393,
        max_payload=100000,
    )
    box = BoxSpec(0.5, 50, 50, 1)
    result = compute_arrangement(box, container)
    views = project_views(result, box, container)

    for outline in views.outlines.values():
        assert math.isfinite(outline.scale_x) and outline.scale_x > 0
        assert math.isfinite(outline.scale_y) and outline.scale_y > 0
        assert outline.width >= 0
        assert outline.height >= 0
    assert views.outlines["side"].scale_x == pytest.approx(400 / 3.0)
    _assert_cells_inside_outline(views)


def test_zero_length_container_does_not_divide_by_zero():
    container = ContainerSpec(
        id="flat",
        name="Flat",
        internal_length=0.0,
        internal_width=2.352,
        internal_height=2.393,
        max_payload=1000,
    )
    box = BoxSpec(10, 10, 10, 1)
    views = project_views(compute_arrangement(box, container), box, container)

    assert views.state == "empty"
    assert views.outlines["top"].width == 0
    assert views.side == [] and views.front == [] and views.top == []


def test_missing_arrangement_gives_empty_state():
    box = BoxSpec(50, 50, 50, 2000, quantity=1000)
    container = _container_20ft()
    views = project_views(compute_arrangement(box, container), box, container)

    assert views.state == "empty"
    assert views.is_placeholder
    assert views.status_title == "Enter Box Dimensions"
    assert set(views.outlines) == {"side", "front", "top"}
    assert views.side == [] and views.front == [] and views.top == []


def test_validation_errors_suppress_cells():
    box = BoxSpec(100, 100, 100, 500)
    container = _container_20ft()
    arrangement = compute_arrangement(box, container)
    views = project_views(arrangement, box, container, has_validation_errors=True)

    assert views.state == "invalid"
    assert views.status_title == "Input Validation Required"
    assert views.side == [] and views.front == [] and views.top == []


def test_grid_is_clamped_to_what_fits_on_the_canvas():
    box = BoxSpec(100, 100, 100, 500, quantity=1000)
    container = _container_20ft()
    arrangement = compute_arrangement(box, container)
    # counts larger than the drawn outline can hold
    inflated = replace(arrangement, length_count=9, max_capacity=9 * 2 * 2)
    views = project_views(inflated, box, container)

    assert views.outlines["side"].grid_columns == 5
    assert max(cell.column for cell in views.side) == 4
    _assert_cells_inside_outline(views)


def test_custom_canvas_changes_cell_size():
    box = BoxSpec(100, 100, 100, 500)
    container = _container_20ft()
    canvas = CanvasConfig(length_span=800, width_span=600, height_span=600, padding=10)
    views = project_views(compute_arrangement(box, container), box, container, canvas)

    assert views.outlines["top"].x == 10
    assert views.outlines["top"].width == pytest.approx(800)
    assert views.top[0].width == pytest.approx(800 / 5.898)
    assert len(views.top) == 10


def test_cells_use_the_winning_orientation():
    box = BoxSpec(length=100, width=50, height=50, weight=10)
    container = _container_20ft()
    arrangement = compute_arrangement(box, container)
    views = project_views(arrangement, box, container)

    # WLH: 0.5m along the container length, 1.0m across
    top = views.outlines["top"]
    assert views.top[0].width == pytest.approx(0.5 * top.scale_x)
    assert views.top[0].height == pytest.approx(1.0 * top.scale_y)
    assert len(views.top) == 11 * 2
