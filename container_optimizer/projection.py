from __future__ import annotations

import logging
import math

from container_optimizer.models import (
    ArrangementResult,
    BoxSpec,
    CanvasConfig,
    ContainerSpec,
    ProjectedViews,
    ViewCell,
    ViewOutline,
)

logger = logging.getLogger(__name__)

# view -> (horizontal axis, vertical axis, rows stacked from the floor)
VIEW_AXES = {
    "side": ("length", "height", True),
    "front": ("width", "height", True),
    "top": ("length", "width", False),
}

STATE_EMPTY = "empty"
STATE_INVALID = "invalid"
STATE_READY = "ready"

STATUS_MESSAGES = {
    STATE_EMPTY: ("Enter Box Dimensions", "Fill in box dimensions to see optimal arrangement"),
    STATE_INVALID: ("Input Validation Required", "Please correct the highlighted errors above"),
    STATE_READY: ("", ""),
}

_EDGE_TOLERANCE = 1e-9


def _container_dims(container: ContainerSpec) -> dict[str, float]:
    return {
        "length": container.internal_length,
        "width": container.internal_width,
        "height": container.internal_height,
    }


def _axis_scale(canvas: CanvasConfig, axis: str, container_dim: float) -> float:
    return canvas.span(axis) / max(container_dim, canvas.min_extent(axis))


def _grid_extent(count: int, outline_span: float, cell_span: float) -> int:
    if cell_span <= 0 or outline_span <= 0:
        return 0
    return max(0, min(count, math.floor(outline_span / cell_span)))


def _box_dims(arrangement: ArrangementResult | None, box: BoxSpec) -> dict[str, float]:
    if arrangement is not None:
        orientation = arrangement.orientation
        return {"length": orientation.length, "width": orientation.width, "height": orientation.height}
    length, width, height = box.dimensions_m()
    return {"length": length, "width": width, "height": height}


def _project_view(
    view: str,
    arrangement: ArrangementResult | None,
    box_dims: dict[str, float],
    container_dims: dict[str, float],
    canvas: CanvasConfig,
) -> tuple[ViewOutline, list[ViewCell]]:
    h_axis, v_axis, grounded = VIEW_AXES[view]
    scale_x = _axis_scale(canvas, h_axis, container_dims[h_axis])
    scale_y = _axis_scale(canvas, v_axis, container_dims[v_axis])
    pad = canvas.padding
    outline_w = container_dims[h_axis] * scale_x
    outline_h = container_dims[v_axis] * scale_y

    cells: list[ViewCell] = []
    columns = rows = 0
    if arrangement is not None:
        counts = {
            "length": arrangement.length_count,
            "width": arrangement.width_count,
            "height": arrangement.height_count,
        }
        cell_w = box_dims[h_axis] * scale_x
        cell_h = box_dims[v_axis] * scale_y
        columns = _grid_extent(counts[h_axis], outline_w, cell_w)
        rows = _grid_extent(counts[v_axis], outline_h, cell_h)
        if columns < counts[h_axis] or rows < counts[v_axis]:
            logger.debug(
                "%s view clamped to %dx%d of %dx%d",
                view,
                columns,
                rows,
                counts[h_axis],
                counts[v_axis],
            )
        right = pad + outline_w + _EDGE_TOLERANCE
        bottom = pad + outline_h + _EDGE_TOLERANCE
        for col in range(columns):
            for row in range(rows):
                sequence = col * counts[v_axis] + row + 1
                x = pad + col * cell_w
                if grounded:
                    y = pad + outline_h - (row + 1) * cell_h
                else:
                    y = pad + row * cell_h
                if x + cell_w > right or y + cell_h > bottom or y < pad - _EDGE_TOLERANCE:
                    continue
                cells.append(
                    ViewCell(
                        position_x=x,
                        position_y=y,
                        width=cell_w,
                        height=cell_h,
                        is_within_requested_quantity=sequence <= arrangement.total_boxes,
                        in_bounds_of_container_outline=True,
                        column=col,
                        row=row,
                        sequence=sequence,
                    )
                )

    outline = ViewOutline(
        view=view,
        horizontal_axis=h_axis,
        vertical_axis=v_axis,
        x=pad,
        y=pad,
        width=outline_w,
        height=outline_h,
        scale_x=scale_x,
        scale_y=scale_y,
        horizontal_dim_m=container_dims[h_axis],
        vertical_dim_m=container_dims[v_axis],
        grid_columns=columns,
        grid_rows=rows,
    )
    return outline, cells


def project_views(
    arrangement: ArrangementResult | None,
    box: BoxSpec,
    container: ContainerSpec,
    canvas: CanvasConfig | None = None,
    has_validation_errors: bool = False,
) -> ProjectedViews:
    """Lay out the side, front and top drawings of an arrangement.

    Outlines are always produced so a placeholder can be drawn. Cells are only
    produced in the ``ready`` state, i.e. when an arrangement exists and the
    upstream form reported no validation errors.
    """
    canvas = canvas or CanvasConfig()
    if has_validation_errors:
        state = STATE_INVALID
    elif arrangement is None:
        state = STATE_EMPTY
    else:
        state = STATE_READY
    source = arrangement if state == STATE_READY else None
    box_dims = _box_dims(arrangement, box)
    container_dims = _container_dims(container)
    title, message = STATUS_MESSAGES[state]
    views = ProjectedViews(state=state, status_title=title, status_message=message)
    for view in VIEW_AXES:
        outline, cells = _project_view(view, source, box_dims, container_dims, canvas)
        views.outlines[view] = outline
        setattr(views, view, cells)
    return views
