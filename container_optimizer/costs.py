from __future__ import annotations

from container_optimizer.models import ContainerSpec, CostBreakdown, ShippingRoute


def calculate_costs(container: ContainerSpec, route: ShippingRoute, cargo_value: float) -> CostBreakdown:
    container_rental = container.rental_cost
    handling = route.base_handling_cost
    documentation = route.documentation_fee
    # insurance_rate is a percentage of the declared cargo value
    insurance = cargo_value * (route.insurance_rate / 100)
    return CostBreakdown(
        container_rental=container_rental,
        handling=handling,
        documentation=documentation,
        insurance=insurance,
        total=container_rental + handling + documentation + insurance,
    )
