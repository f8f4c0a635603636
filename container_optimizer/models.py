from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from container_optimizer.units import to_cbm, to_kilograms, to_meters


@dataclass(frozen=True)
class BoxSpec:
    length: float
    width: float
    height: float
    weight: float
    unit: str = "cm"
    weight_unit: str = "kg"
    quantity: int = 1

    def dimensions_m(self) -> tuple[float, float, float]:
        return (
            to_meters(self.length, self.unit),
            to_meters(self.width, self.unit),
            to_meters(self.height, self.unit),
        )

    def weight_kg(self) -> float:
        return to_kilograms(self.weight, self.weight_unit)

    def cbm(self) -> float:
        return to_cbm(self.length, self.width, self.height, self.unit)


@dataclass(frozen=True)
class ContainerSpec:
    id: str
    name: str
    internal_length: float
    internal_width: float
    internal_height: float
    max_payload: float
    tare_weight: float = 0.0
    rental_cost: float = 0.0

    @property
    def volume(self) -> float:
        return self.internal_length * self.internal_width * self.internal_height


@dataclass(frozen=True)
class ShippingRoute:
    id: str
    origin_port: str
    destination_port: str
    route_code: str = ""
    transit_days: int = 0
    base_handling_cost: float = 0.0
    documentation_fee: float = 0.0
    insurance_rate: float = 0.0


@dataclass(frozen=True)
class Orientation:
    length: float
    width: float
    height: float
    rotation_key: str

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


@dataclass(frozen=True)
class PackingCandidate:
    orientation: Orientation
    length_count: int
    width_count: int
    height_count: int
    max_capacity: int
    total_weight: float
    efficiency_percent: float


@dataclass(frozen=True)
class RemainingSpace:
    length: float
    width: float
    height: float


@dataclass(frozen=True)
class ArrangementResult:
    length_count: int
    width_count: int
    height_count: int
    total_boxes: int
    max_capacity: int
    efficiency_percent: float
    total_weight: float
    remaining_space: RemainingSpace
    orientation: Orientation
    requested_quantity: int = 1

    @property
    def is_below_capacity(self) -> bool:
        """True when fewer boxes were requested than the container holds."""
        return self.total_boxes != self.max_capacity


@dataclass(frozen=True)
class InfeasibilityReport:
    reason: str
    over_length: float = 0.0
    over_width: float = 0.0
    over_height: float = 0.0
    over_weight_kg: float = 0.0
    rotation_key: str = ""


@dataclass(frozen=True)
class CostBreakdown:
    container_rental: float
    handling: float
    documentation: float
    insurance: float
    total: float


@dataclass(frozen=True)
class CanvasConfig:
    length_span: float = 400.0
    width_span: float = 300.0
    height_span: float = 300.0
    min_length: float = 3.0
    min_width: float = 2.0
    min_height: float = 2.0
    padding: float = 20.0

    def span(self, axis: str) -> float:
        return {"length": self.length_span, "width": self.width_span, "height": self.height_span}[axis]

    def min_extent(self, axis: str) -> float:
        return {"length": self.min_length, "width": self.min_width, "height": self.min_height}[axis]


@dataclass(frozen=True)
class ViewCell:
    position_x: float
    position_y: float
    width: float
    height: float
    is_within_requested_quantity: bool
    in_bounds_of_container_outline: bool
    column: int
    row: int
    sequence: int


@dataclass(frozen=True)
class ViewOutline:
    view: str
    horizontal_axis: str
    vertical_axis: str
    x: float
    y: float
    width: float
    height: float
    scale_x: float
    scale_y: float
    horizontal_dim_m: float
    vertical_dim_m: float
    grid_columns: int = 0
    grid_rows: int = 0


@dataclass
class ProjectedViews:
    state: str
    side: List[ViewCell] = field(default_factory=list)
    front: List[ViewCell] = field(default_factory=list)
    top: List[ViewCell] = field(default_factory=list)
    outlines: Dict[str, ViewOutline] = field(default_factory=dict)
    status_title: str = ""
    status_message: str = ""

    def cells(self, view: str) -> List[ViewCell]:
        return getattr(self, view)

    @property
    def is_placeholder(self) -> bool:
        return self.state != "ready"
