from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml

from container_optimizer.models import ContainerSpec, ShippingRoute

logger = logging.getLogger(__name__)

# Internal dimensions of common ISO dry containers (m), payloads in kg
DEFAULT_CATALOG_YAML = """
containers:
  - id: 20ft
    name: 20ft Standard
    internal_length: 5.898
    internal_width: 2.352
    internal_height: 2.393
    max_payload: 28200
    tare_weight: 2300
    rental_cost: 1500
  - id: 40ft
    name: 40ft Standard
    internal_length: 12.032
    internal_width: 2.352
    internal_height: 2.393
    max_payload: 26700
    tare_weight: 3800
    rental_cost: 2600
  - id: 40ft-hc
    name: 40ft High Cube
    internal_length: 12.032
    internal_width: 2.352
    internal_height: 2.698
    max_payload: 26600
    tare_weight: 3900
    rental_cost: 2850
  - id: 45ft-hc
    name: 45ft High Cube
    internal_length: 13.556
    internal_width: 2.352
    internal_height: 2.698
    max_payload: 27700
    tare_weight: 4800
    rental_cost: 3300
routes:
  - id: BLW-PKG
    origin_port: Belawan
    destination_port: Port Klang
    route_code: IDBLW-MYPKG
    transit_days: 3
    base_handling_cost: 350
    documentation_fee: 75
    insurance_rate: 0.15
  - id: BLW-SIN
    origin_port: Belawan
    destination_port: Singapore
    route_code: IDBLW-SGSIN
    transit_days: 4
    base_handling_cost: 400
    documentation_fee: 85
    insurance_rate: 0.18
  - id: BLW-RTM
    origin_port: Belawan
    destination_port: Rotterdam
    route_code: IDBLW-NLRTM
    transit_days: 28
    base_handling_cost: 900
    documentation_fee: 150
    insurance_rate: 0.35
""".strip()

CONTAINER_FIELDS = ["id", "name", "internal_length", "internal_width", "internal_height", "max_payload"]
ROUTE_FIELDS = ["id", "origin_port", "destination_port"]


class CatalogError(ValueError):
    pass


@dataclass(frozen=True)
class Catalog:
    containers: Dict[str, ContainerSpec] = field(default_factory=dict)
    routes: Dict[str, ShippingRoute] = field(default_factory=dict)

    def get_container(self, container_id: str) -> ContainerSpec:
        try:
            return self.containers[container_id]
        except KeyError as exc:
            raise CatalogError(f"unknown container type: {container_id}") from exc

    def get_route(self, route_id: str) -> ShippingRoute:
        try:
            return self.routes[route_id]
        except KeyError as exc:
            raise CatalogError(f"unknown shipping route: {route_id}") from exc


def _to_float(item: dict, key: str, default=None) -> float:
    raw = item.get(key, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"{key} value '{raw}' is not a number ({item.get('id')})") from exc


def _require(item, required: list[str], kind: str) -> None:
    if not isinstance(item, dict):
        raise CatalogError(f"{kind} entry must be a mapping, got {item!r}")
    missing = [key for key in required if item.get(key) in (None, "")]
    if missing:
        raise CatalogError(f"{kind} {item.get('id', '?')} is missing: {', '.join(missing)}")


def _parse_container(item) -> ContainerSpec:
    _require(item, CONTAINER_FIELDS, "container")
    return ContainerSpec(
        id=str(item["id"]),
        name=str(item["name"]),
        internal_length=_to_float(item, "internal_length"),
        internal_width=_to_float(item, "internal_width"),
        internal_height=_to_float(item, "internal_height"),
        max_payload=_to_float(item, "max_payload"),
        tare_weight=_to_float(item, "tare_weight", 0),
        rental_cost=_to_float(item, "rental_cost", 0),
    )


def _parse_route(item) -> ShippingRoute:
    _require(item, ROUTE_FIELDS, "route")
    return ShippingRoute(
        id=str(item["id"]),
        origin_port=str(item["origin_port"]),
        destination_port=str(item["destination_port"]),
        route_code=str(item.get("route_code", "") or ""),
        transit_days=int(_to_float(item, "transit_days", 0)),
        base_handling_cost=_to_float(item, "base_handling_cost", 0),
        documentation_fee=_to_float(item, "documentation_fee", 0),
        insurance_rate=_to_float(item, "insurance_rate", 0),
    )


def load_catalog(text: str) -> Catalog:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise CatalogError(f"catalog YAML could not be parsed: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError("catalog YAML must be a mapping with 'containers' and 'routes'")
    containers = {}
    for item in data.get("containers") or []:
        spec = _parse_container(item)
        if spec.id in containers:
            raise CatalogError(f"duplicate container type: {spec.id}")
        containers[spec.id] = spec
    routes = {}
    for item in data.get("routes") or []:
        route = _parse_route(item)
        routes[route.id] = route
    logger.info("loaded catalog: %d containers, %d routes", len(containers), len(routes))
    return Catalog(containers=containers, routes=routes)


def load_catalog_file(path) -> Catalog:
    return load_catalog(Path(path).read_text(encoding="utf-8"))


def default_catalog() -> Catalog:
    return load_catalog(DEFAULT_CATALOG_YAML)
