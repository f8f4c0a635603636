from __future__ import annotations

import logging
from typing import Iterable

from container_optimizer.models import (
    ArrangementResult,
    BoxSpec,
    ContainerSpec,
    PackingCandidate,
    RemainingSpace,
)
from container_optimizer.orientation import enumerate_orientations
from container_optimizer.packing import select_best_orientation

logger = logging.getLogger(__name__)


def clamp_quantity(quantity) -> int:
    """Requested quantity as used by the planner: at least one box."""
    try:
        value = int(quantity)
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, value)


def build_arrangement(
    candidate: PackingCandidate,
    container: ContainerSpec,
    box_weight_kg: float,
    requested_quantity,
) -> ArrangementResult:
    quantity = clamp_quantity(requested_quantity)
    total_boxes = min(candidate.max_capacity, quantity)
    orientation = candidate.orientation
    remaining = RemainingSpace(
        length=max(0.0, container.internal_length - candidate.length_count * orientation.length),
        width=max(0.0, container.internal_width - candidate.width_count * orientation.width),
        height=max(0.0, container.internal_height - candidate.height_count * orientation.height),
    )
    result = ArrangementResult(
        length_count=candidate.length_count,
        width_count=candidate.width_count,
        height_count=candidate.height_count,
        total_boxes=total_boxes,
        max_capacity=candidate.max_capacity,
        efficiency_percent=candidate.efficiency_percent,
        total_weight=total_boxes * box_weight_kg,
        remaining_space=remaining,
        orientation=orientation,
        requested_quantity=quantity,
    )
    if result.is_below_capacity:
        logger.info(
            "%s: %d boxes requested, container holds %d",
            container.id,
            quantity,
            candidate.max_capacity,
        )
    return result


def compute_arrangement(box: BoxSpec, container: ContainerSpec) -> ArrangementResult | None:
    """Best single-type loading of ``box`` into ``container``.

    Returns ``None`` when no orientation both fits and respects the payload
    limit; callers render that as the empty state.
    """
    box_weight = box.weight_kg()
    orientations = enumerate_orientations(*box.dimensions_m())
    best = select_best_orientation(container, orientations, box_weight)
    if best is None:
        logger.debug("%s: no feasible arrangement", container.id)
        return None
    return build_arrangement(best, container, box_weight, box.quantity)


def compare_containers(
    box: BoxSpec,
    containers: Iterable[ContainerSpec],
) -> list[tuple[ContainerSpec, ArrangementResult | None]]:
    return [(container, compute_arrangement(box, container)) for container in containers]
