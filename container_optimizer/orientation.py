from __future__ import annotations

import math

from container_optimizer.models import BoxSpec, ContainerSpec, InfeasibilityReport, Orientation

ROTATION_KEYS = [
    (0, 1, 2, "LWH"),
    (0, 2, 1, "LHW"),
    (1, 0, 2, "WLH"),
    (1, 2, 0, "WHL"),
    (2, 0, 1, "HLW"),
    (2, 1, 0, "HWL"),
]


def enumerate_orientations(length: float, width: float, height: float) -> list[Orientation]:
    """Return all six axis-aligned placements of a box, cubes included.

    The order is significant: when two orientations give the same capacity the
    earlier one is reported.
    """
    dims = [length, width, height]
    return [
        Orientation(length=dims[a], width=dims[b], height=dims[c], rotation_key=key)
        for a, b, c, key in ROTATION_KEYS
    ]


def axis_counts(container: ContainerSpec, orientation: Orientation) -> tuple[int, int, int]:
    return (
        _fit_count(container.internal_length, orientation.length),
        _fit_count(container.internal_width, orientation.width),
        _fit_count(container.internal_height, orientation.height),
    )


def _fit_count(space: float, size: float) -> int:
    if size <= 0 or space <= 0:
        return 0
    return math.floor(space / size)


def diagnose_infeasible(box: BoxSpec, container: ContainerSpec) -> InfeasibilityReport:
    """Explain why no arrangement exists for ``box`` in ``container``.

    ``TOO_LARGE`` means no orientation fits along all three axes; the overhang of
    the orientation closest to fitting is reported. ``OVERWEIGHT`` means some
    orientation fits but its full pack exceeds the payload; the smallest excess
    is reported. An empty reason means a feasible arrangement exists.
    """
    box_weight = box.weight_kg()
    best_overhang = None
    best_excess = None
    for orientation in enumerate_orientations(*box.dimensions_m()):
        counts = axis_counts(container, orientation)
        if 0 in counts:
            over_L = max(0.0, orientation.length - container.internal_length)
            over_W = max(0.0, orientation.width - container.internal_width)
            over_H = max(0.0, orientation.height - container.internal_height)
            score = over_L + over_W + over_H
            if best_overhang is None or score < best_overhang[0]:
                best_overhang = (score, orientation, over_L, over_W, over_H)
            continue
        capacity = counts[0] * counts[1] * counts[2]
        excess = capacity * box_weight - container.max_payload
        if excess <= 0:
            return InfeasibilityReport(reason="", rotation_key=orientation.rotation_key)
        if best_excess is None or excess < best_excess[0]:
            best_excess = (excess, orientation)
    if best_excess is not None:
        excess, orientation = best_excess
        return InfeasibilityReport(
            reason="OVERWEIGHT",
            over_weight_kg=excess,
            rotation_key=orientation.rotation_key,
        )
    _, orientation, over_L, over_W, over_H = best_overhang
    return InfeasibilityReport(
        reason="TOO_LARGE",
        over_length=over_L,
        over_width=over_W,
        over_height=over_H,
        rotation_key=orientation.rotation_key,
    )
