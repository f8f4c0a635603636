from container_optimizer.catalog import default_catalog
from container_optimizer.costs import calculate_costs
from container_optimizer.models import BoxSpec
from container_optimizer.pdf_export import build_report_lines, build_text_pdf
from container_optimizer.planner import compare_containers, compute_arrangement
from container_optimizer.projection import project_views
from container_optimizer.reporting import (
    arrangement_pattern,
    build_calculation_record,
    build_comparison_rows,
    build_summary_table,
    build_view_cell_rows,
)


def _scenario(quantity=100):
    catalog = default_catalog()
    container = catalog.get_container("20ft")
    box = BoxSpec(100, 100, 100, 500, quantity=quantity)
    return catalog, container, box, compute_arrangement(box, container)


def test_summary_table_lists_arrangement_figures():
    catalog, container, box, result = _scenario()
    costs = calculate_costs(container, catalog.get_route("BLW-PKG"), 50000)
    table = build_summary_table(box, container, result, costs)
    values = dict(zip(table["parameter"], table["value"]))

    assert arrangement_pattern(result) == "5 × 2 × 2"
    assert values["Max capacity"] == "20"
    assert values["Boxes loaded"] == "20"
    assert values["Recommended mode"] == "FCL"
    assert values["Total cost"] == "2,000.00"


def test_summary_table_without_arrangement():
    catalog = default_catalog()
    container = catalog.get_container("20ft")
    box = BoxSpec(50, 50, 50, 2000, quantity=1000)
    table = build_summary_table(box, container, compute_arrangement(box, container))
    values = dict(zip(table["parameter"], table["value"]))

    assert values["Arrangement"] == "No feasible arrangement"
    assert "Max capacity" not in values
    assert arrangement_pattern(None) == "-"


def test_comparison_rows_cover_every_container():
    catalog = default_catalog()
    box = BoxSpec(100, 100, 100, 500, quantity=1)
    df = build_comparison_rows(compare_containers(box, catalog.containers.values()))

    assert list(df["container_id"]) == ["20ft", "40ft", "40ft-hc", "45ft-hc"]
    assert df["feasible"].all()
    assert df.loc[df["container_id"] == "40ft", "max_capacity"].iloc[0] == 12 * 2 * 2


def test_view_cell_rows_are_sorted_by_view_and_sequence():
    _, container, box, result = _scenario(quantity=3)
    df = build_view_cell_rows(project_views(result, box, container))

    assert set(df["view"]) == {"side", "front", "top"}
    side = df[df["view"] == "side"]
    assert list(side["sequence"]) == sorted(side["sequence"])
    assert side["within_quantity"].sum() == 3

    empty = build_view_cell_rows(project_views(None, box, container))
    assert empty.empty


def test_calculation_record_for_storage():
    catalog, container, box, result = _scenario(quantity=5)
    record = build_calculation_record(box, container, result, route_id="BLW-PKG", cargo_value=1000)

    assert record["container_type_id"] == "20ft"
    assert record["max_boxes"] == 5
    assert record["max_capacity"] == 20
    assert record["arrangement_pattern"] == "5 × 2 × 2"
    assert record["total_cost"] is None


def test_pdf_report_is_well_formed():
    _, container, box, result = _scenario(quantity=2)
    lines = build_report_lines(box, container, result)
    pdf = build_text_pdf(lines)

    assert lines[0] == "Container Loading Report"
    assert any("not full" in line for line in lines)
    assert pdf.startswith(b"%PDF-1.4")
    assert pdf.rstrip().endswith(b"%%EOF")
    assert b"(Container Loading Report) Tj" in pdf
