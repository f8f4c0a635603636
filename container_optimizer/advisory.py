from __future__ import annotations

from container_optimizer.models import ArrangementResult, ContainerSpec, ShippingRoute

# lower bound (inclusive) of each efficiency tier, best first
EFFICIENCY_TIERS = [
    (85.0, "excellent"),
    (70.0, "good"),
    (50.0, "fair"),
]

TIER_COLORS = {
    "excellent": ("Green", "#10B981"),
    "good": ("Blue", "#3B82F6"),
    "fair": ("Orange", "#F59E0B"),
    "poor": ("Red", "#EF4444"),
}

FCL_EFFICIENCY_THRESHOLD = 60.0

LOADING_RECOMMENDATIONS = [
    "Load heavy goods at the bottom of the container for optimal stability",
    "Distribute weight evenly across the whole container floor",
    "Leave at least 10cm of space for air circulation and worker access",
    "Use dunnage or pallets to protect goods from damage",
    "Make sure the total load does not exceed the container payload limit",
    "Secure goods with lashing or straps to prevent shifting in transit",
    "Use moisture absorbers for humidity-sensitive cargo",
    "Photograph the loading process for insurance claims",
]


def classify_efficiency(percent: float | None) -> str:
    value = percent or 0.0
    for lower_bound, tier in EFFICIENCY_TIERS:
        if value >= lower_bound:
            return tier
    return "poor"


def tier_color(percent: float | None) -> str:
    return TIER_COLORS[classify_efficiency(percent)][1]


def efficiency_color_code(percent: float | None) -> str:
    tier = classify_efficiency(percent)
    return f"{TIER_COLORS[tier][0]} ({tier.capitalize()})"


def recommend_shipping_mode(percent: float | None) -> str:
    if (percent or 0.0) > FCL_EFFICIENCY_THRESHOLD:
        return "FCL"
    return "LCL"


def weight_utilization_pct(result: ArrangementResult | None, container: ContainerSpec) -> float:
    if result is None or container.max_payload <= 0:
        return 0.0
    return result.total_weight / container.max_payload * 100


def estimate_gross_weight(result: ArrangementResult | None, container: ContainerSpec) -> float:
    cargo = result.total_weight if result is not None else 0.0
    return cargo + container.tare_weight


def estimate_transit_window(route: ShippingRoute) -> tuple[int, int]:
    """Door-to-door window: sea transit plus four to six days of port handling."""
    return route.transit_days + 4, route.transit_days + 6
