from __future__ import annotations

import logging
from typing import Iterable

from container_optimizer.models import ContainerSpec, Orientation, PackingCandidate
from container_optimizer.orientation import axis_counts

logger = logging.getLogger(__name__)


def evaluate_orientation(
    container: ContainerSpec,
    orientation: Orientation,
    box_weight_kg: float,
) -> PackingCandidate | None:
    """Fill ``container`` with boxes standing in ``orientation``.

    Orientation axis 1 runs along the container length, axis 2 along its width
    and axis 3 along its height. Returns ``None`` when the box does not fit along
    some axis or when the full pack exceeds the container payload.
    """
    length_count, width_count, height_count = axis_counts(container, orientation)
    if length_count == 0 or width_count == 0 or height_count == 0:
        logger.debug("orientation %s rejected: does not fit", orientation.rotation_key)
        return None
    max_capacity = length_count * width_count * height_count
    total_weight = max_capacity * box_weight_kg
    if total_weight > container.max_payload:
        logger.debug(
            "orientation %s rejected: %.1fkg exceeds payload %.1fkg",
            orientation.rotation_key,
            total_weight,
            container.max_payload,
        )
        return None
    container_volume = container.volume
    if container_volume > 0:
        efficiency = (max_capacity * orientation.volume) / container_volume * 100
    else:
        efficiency = 0.0
    return PackingCandidate(
        orientation=orientation,
        length_count=length_count,
        width_count=width_count,
        height_count=height_count,
        max_capacity=max_capacity,
        total_weight=total_weight,
        efficiency_percent=efficiency,
    )


def select_best_orientation(
    container: ContainerSpec,
    orientations: Iterable[Orientation],
    box_weight_kg: float,
) -> PackingCandidate | None:
    best = None
    for orientation in orientations:
        candidate = evaluate_orientation(container, orientation, box_weight_kg)
        if candidate is None:
            continue
        # strict comparison: the first orientation reaching a capacity keeps it
        if best is None or candidate.max_capacity > best.max_capacity:
            best = candidate
    return best
