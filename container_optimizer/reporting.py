from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from container_optimizer.advisory import (
    classify_efficiency,
    efficiency_color_code,
    recommend_shipping_mode,
    weight_utilization_pct,
)
from container_optimizer.models import (
    ArrangementResult,
    BoxSpec,
    ContainerSpec,
    CostBreakdown,
    ProjectedViews,
)


def arrangement_pattern(result: Optional[ArrangementResult]) -> str:
    if result is None:
        return "-"
    return f"{result.length_count} × {result.width_count} × {result.height_count}"


def build_summary_table(
    box: BoxSpec,
    container: ContainerSpec,
    result: Optional[ArrangementResult],
    costs: Optional[CostBreakdown] = None,
) -> pd.DataFrame:
    rows = [
        ("Box dimensions", f"{box.length} × {box.width} × {box.height} {box.unit}"),
        ("Box weight", f"{box.weight} {box.weight_unit}"),
        ("Requested quantity", str(box.quantity)),
        ("CBM per unit", f"{box.cbm():.4f}"),
        ("Container", container.name),
        (
            "Container internal (L×W×H)",
            f"{container.internal_length}m × {container.internal_width}m × {container.internal_height}m",
        ),
        ("Max payload", f"{container.max_payload / 1000:.1f} t"),
    ]
    if result is None:
        rows.append(("Arrangement", "No feasible arrangement"))
    else:
        rows.extend(
            [
                ("Arrangement", arrangement_pattern(result)),
                ("Orientation", result.orientation.rotation_key),
                ("Max capacity", str(result.max_capacity)),
                ("Boxes loaded", str(result.total_boxes)),
                ("Loading efficiency", f"{result.efficiency_percent:.1f}%"),
                ("Efficiency tier", efficiency_color_code(result.efficiency_percent)),
                ("Total weight", f"{result.total_weight:.2f} kg"),
                ("Weight vs payload", f"{weight_utilization_pct(result, container):.1f}%"),
                ("Total CBM", f"{box.cbm() * result.total_boxes:.4f}"),
                (
                    "Remaining space (L/W/H)",
                    f"{result.remaining_space.length:.3f}m / "
                    f"{result.remaining_space.width:.3f}m / "
                    f"{result.remaining_space.height:.3f}m",
                ),
                ("Recommended mode", recommend_shipping_mode(result.efficiency_percent)),
            ]
        )
    if costs is not None:
        rows.extend(
            [
                ("Container rental", f"{costs.container_rental:,.2f}"),
                ("Handling", f"{costs.handling:,.2f}"),
                ("Documentation", f"{costs.documentation:,.2f}"),
                ("Insurance", f"{costs.insurance:,.2f}"),
                ("Total cost", f"{costs.total:,.2f}"),
            ]
        )
    return pd.DataFrame(rows, columns=["parameter", "value"])


def build_comparison_rows(pairs: Iterable[tuple[ContainerSpec, Optional[ArrangementResult]]]) -> pd.DataFrame:
    rows = []
    for container, result in pairs:
        rows.append(
            {
                "container_id": container.id,
                "container_name": container.name,
                "feasible": result is not None,
                "arrangement": arrangement_pattern(result),
                "max_capacity": result.max_capacity if result else 0,
                "total_boxes": result.total_boxes if result else 0,
                "efficiency_percent": result.efficiency_percent if result else 0.0,
                "efficiency_tier": classify_efficiency(result.efficiency_percent if result else None),
                "total_weight_kg": result.total_weight if result else 0.0,
                "weight_utilization_pct": weight_utilization_pct(result, container),
                "rental_cost": container.rental_cost,
            }
        )
    return pd.DataFrame(rows)


def build_view_cell_rows(views: ProjectedViews) -> pd.DataFrame:
    rows = []
    for view in ("side", "front", "top"):
        for cell in views.cells(view):
            rows.append(
                {
                    "view": view,
                    "sequence": cell.sequence,
                    "column": cell.column,
                    "row": cell.row,
                    "x": cell.position_x,
                    "y": cell.position_y,
                    "width": cell.width,
                    "height": cell.height,
                    "within_quantity": cell.is_within_requested_quantity,
                }
            )
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    return df.sort_values(by=["view", "sequence"]).reset_index(drop=True)


def build_calculation_record(
    box: BoxSpec,
    container: ContainerSpec,
    result: ArrangementResult,
    costs: Optional[CostBreakdown] = None,
    route_id: Optional[str] = None,
    cargo_value: float = 0.0,
) -> dict:
    """Row for the saved-calculations store."""
    return {
        "container_type_id": container.id,
        "shipping_route_id": route_id,
        "cargo_length": box.length,
        "cargo_width": box.width,
        "cargo_height": box.height,
        "cargo_weight": box.weight,
        "cargo_quantity": result.requested_quantity,
        "dimension_unit": box.unit,
        "weight_unit": box.weight_unit,
        "cargo_value": cargo_value,
        "max_boxes": result.total_boxes,
        "max_capacity": result.max_capacity,
        "loading_efficiency": result.efficiency_percent,
        "total_weight": result.total_weight,
        "total_cbm": box.cbm() * result.requested_quantity,
        "total_cost": costs.total if costs else None,
        "arrangement_pattern": arrangement_pattern(result),
        "color_code": efficiency_color_code(result.efficiency_percent),
    }
