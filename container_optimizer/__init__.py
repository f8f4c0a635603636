from container_optimizer.advisory import classify_efficiency
from container_optimizer.catalog import Catalog, CatalogError, default_catalog, load_catalog
from container_optimizer.io import BoxInputError, parse_box_spec, validate_box_fields
from container_optimizer.models import ArrangementResult, BoxSpec, CanvasConfig, ContainerSpec
from container_optimizer.planner import compare_containers, compute_arrangement
from container_optimizer.projection import project_views

__all__ = [
    "ArrangementResult",
    "BoxInputError",
    "BoxSpec",
    "CanvasConfig",
    "Catalog",
    "CatalogError",
    "ContainerSpec",
    "classify_efficiency",
    "compare_containers",
    "compute_arrangement",
    "default_catalog",
    "load_catalog",
    "parse_box_spec",
    "project_views",
    "validate_box_fields",
]
