from __future__ import annotations

import logging

import pandas as pd
from pandas.errors import EmptyDataError
import pydeck as pdk
import streamlit as st

from container_optimizer import (
    CatalogError,
    classify_efficiency,
    compare_containers,
    compute_arrangement,
    load_catalog,
    parse_box_spec,
    project_views,
    validate_box_fields,
)
from container_optimizer.advisory import (
    LOADING_RECOMMENDATIONS,
    efficiency_color_code,
    estimate_gross_weight,
    estimate_transit_window,
    recommend_shipping_mode,
    tier_color,
    weight_utilization_pct,
)
from container_optimizer.catalog import DEFAULT_CATALOG_YAML
from container_optimizer.costs import calculate_costs
from container_optimizer.io import BoxInputError, load_box_csv, normalize_box_rows
from container_optimizer.models import BoxSpec, ProjectedViews
from container_optimizer.orientation import diagnose_infeasible
from container_optimizer.pdf_export import build_report_lines, build_text_pdf
from container_optimizer.reporting import (
    arrangement_pattern,
    build_calculation_record,
    build_comparison_rows,
    build_summary_table,
    build_view_cell_rows,
)
from container_optimizer.units import LENGTH_UNITS, WEIGHT_UNITS, convert_length, convert_weight, density_kg_per_cbm

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Container Loading Calculator", layout="wide")
st.title("Container Loading Calculator")
st.caption("Enter the box dimensions and pick a container to see the best loading pattern.")

VIEW_TITLES = {
    "side": "Side View (Length × Height)",
    "front": "Front View (Width × Height)",
    "top": "Top View (Length × Width)",
}

OUTSIDE_QUANTITY_COLOR = [243, 244, 246, 80]


def _hex_to_rgba(value: str, alpha: int = 205) -> list[int]:
    value = value.lstrip("#")
    return [int(value[i : i + 2], 16) for i in (0, 2, 4)] + [alpha]


def _rect(x: float, y: float, w: float, h: float) -> list[list[float]]:
    return [[x, y], [x + w, y], [x + w, y + h], [x, y + h]]


def _render_view(views: ProjectedViews, view: str, fill_hex: str):
    outline = views.outlines[view]
    cells = [
        {
            "polygon": _rect(cell.position_x, cell.position_y, cell.width, cell.height),
            "fill": _hex_to_rgba(fill_hex) if cell.is_within_requested_quantity else OUTSIDE_QUANTITY_COLOR,
            "sequence": cell.sequence,
        }
        for cell in views.cells(view)
    ]
    layers = [
        pdk.Layer(
            "PolygonLayer",
            data=[{"polygon": _rect(outline.x, outline.y, outline.width, outline.height)}],
            get_polygon="polygon",
            filled=False,
            stroked=True,
            get_line_color=[55, 65, 81],
            line_width_min_pixels=2,
        ),
        pdk.Layer(
            "PolygonLayer",
            data=cells,
            get_polygon="polygon",
            get_fill_color="fill",
            get_line_color=[31, 41, 55],
            line_width_min_pixels=0.5,
            stroked=True,
            pickable=True,
        ),
    ]
    st.markdown(f"**{VIEW_TITLES[view]}**")
    st.pydeck_chart(
        pdk.Deck(
            map_style=None,
            views=[pdk.View(type="OrthographicView", controller=True)],
            initial_view_state=pdk.ViewState(
                target=[outline.x + outline.width / 2, outline.y + outline.height / 2, 0],
                zoom=0,
            ),
            layers=layers,
            tooltip={"text": "Box #{sequence}"},
        ),
        use_container_width=True,
    )
    if views.is_placeholder:
        st.caption(views.status_title)
    else:
        st.caption(
            f"{outline.horizontal_axis}: {outline.horizontal_dim_m:.2f}m | "
            f"{outline.vertical_axis}: {outline.vertical_dim_m:.2f}m | "
            f"Grid: {outline.grid_columns} × {outline.grid_rows}"
        )


with st.sidebar:
    st.header("Master data")
    st.file_uploader("containers.yaml upload", type=["yaml", "yml"], key="catalog_file")
    st.text_area("Container catalog (YAML)", key="catalog_text", value=DEFAULT_CATALOG_YAML, height=240)
    cargo_value = st.number_input("Cargo value (USD)", min_value=0.0, value=50000.0, step=1000.0)

catalog_text = st.session_state.get("catalog_text") or DEFAULT_CATALOG_YAML
if st.session_state.get("catalog_file") is not None:
    catalog_text = st.session_state["catalog_file"].getvalue().decode("utf-8")
try:
    catalog = load_catalog(catalog_text)
except CatalogError as exc:
    st.error(f"Container catalog could not be loaded: {exc}")
    st.stop()

if not catalog.containers:
    st.warning("The catalog has no containers. Check the YAML in the sidebar.")
    st.stop()

capacity_tab, planning_tab, converter_tab, batch_tab = st.tabs(
    ["Capacity", "Loading Plan", "CBM & Conversion", "Batch"]
)

with capacity_tab:
    input_col, result_col = st.columns([1, 2])
    with input_col:
        st.subheader("Box")
        dim_col1, dim_col2, dim_col3 = st.columns(3)
        with dim_col1:
            length = st.number_input("Length", min_value=0.0, value=100.0, step=1.0)
        with dim_col2:
            width = st.number_input("Width", min_value=0.0, value=100.0, step=1.0)
        with dim_col3:
            height = st.number_input("Height", min_value=0.0, value=100.0, step=1.0)
        unit = st.selectbox("Dimension unit", LENGTH_UNITS)
        weight_col, weight_unit_col = st.columns(2)
        with weight_col:
            weight = st.number_input("Weight per box", min_value=0.0, value=500.0, step=1.0)
        with weight_unit_col:
            weight_unit = st.selectbox("Weight unit", WEIGHT_UNITS)
        quantity = st.number_input("Quantity", min_value=1, value=1, step=1)

        container_id = st.selectbox(
            "Container",
            list(catalog.containers),
            format_func=lambda cid: f"{catalog.containers[cid].name} - Max {catalog.containers[cid].max_payload / 1000:.1f}t",
        )
        route_id = None
        if catalog.routes:
            route_id = st.selectbox(
                "Shipping route",
                list(catalog.routes),
                format_func=lambda rid: f"{catalog.routes[rid].origin_port} → {catalog.routes[rid].destination_port}",
            )

    raw_box = {
        "length": length,
        "width": width,
        "height": height,
        "weight": weight,
        "unit": unit,
        "weight_unit": weight_unit,
        "quantity": quantity,
    }
    field_errors = validate_box_fields(raw_box)
    container = catalog.get_container(container_id)
    route = catalog.get_route(route_id) if route_id else None

    box = None
    result = None
    if field_errors:
        for message in field_errors.values():
            input_col.error(message)
    else:
        box = parse_box_spec(raw_box)
        result = compute_arrangement(box, container)
    costs = calculate_costs(container, route, cargo_value) if route else None

    with result_col:
        st.subheader("Result")
        if box is None:
            st.info("Correct the box input to see the loading result.")
        elif result is None:
            report = diagnose_infeasible(box, container)
            if report.reason == "OVERWEIGHT":
                st.error(
                    f"No valid packing: a full load exceeds the payload by {report.over_weight_kg:,.0f} kg."
                )
            else:
                st.error(
                    "No valid packing: the box does not fit the container "
                    f"(over L/W/H: {report.over_length:.3f}m / {report.over_width:.3f}m / {report.over_height:.3f}m)."
                )
        else:
            metric_cols = st.columns(4)
            metric_cols[0].metric("Boxes loaded", f"{result.total_boxes}", f"max {result.max_capacity}")
            metric_cols[1].metric("Arrangement", arrangement_pattern(result))
            metric_cols[2].metric(
                "Efficiency",
                f"{result.efficiency_percent:.1f}%",
                classify_efficiency(result.efficiency_percent),
            )
            metric_cols[3].metric("Total weight", f"{result.total_weight / 1000:.2f} t")
            if result.is_below_capacity:
                st.warning(
                    f"Only {result.total_boxes} boxes requested; the container could hold {result.max_capacity}."
                )
            else:
                st.success("The container is loaded to capacity.")
            st.caption(
                f"Colour code: {efficiency_color_code(result.efficiency_percent)} | "
                f"Recommended: {recommend_shipping_mode(result.efficiency_percent)} | "
                f"Weight vs payload: {weight_utilization_pct(result, container):.1f}% | "
                f"Estimated gross: {estimate_gross_weight(result, container):,.0f} kg"
            )

        if box is not None:
            summary_df = build_summary_table(box, container, result, costs)
            st.dataframe(summary_df, use_container_width=True, hide_index=True)
            download_col1, download_col2 = st.columns(2)
            with download_col1:
                st.download_button(
                    "Summary CSV download",
                    data=summary_df.to_csv(index=False).encode("utf-8-sig"),
                    file_name="container_summary.csv",
                    use_container_width=True,
                )
            with download_col2:
                st.download_button(
                    "Report PDF download",
                    data=build_text_pdf(build_report_lines(box, container, result, costs)),
                    file_name="container_report.pdf",
                    mime="application/pdf",
                    use_container_width=True,
                )
            if result is not None:
                with st.expander("Calculation record"):
                    st.json(build_calculation_record(box, container, result, costs, route_id, cargo_value))

            st.subheader("Container comparison")
            comparison_df = build_comparison_rows(compare_containers(box, catalog.containers.values()))
            st.dataframe(comparison_df, use_container_width=True, hide_index=True)

        if route is not None and costs is not None:
            st.subheader("Costs")
            low, high = estimate_transit_window(route)
            cost_cols = st.columns(5)
            cost_cols[0].metric("Rental", f"{costs.container_rental:,.2f}")
            cost_cols[1].metric("Handling", f"{costs.handling:,.2f}")
            cost_cols[2].metric("Documentation", f"{costs.documentation:,.2f}")
            cost_cols[3].metric("Insurance", f"{costs.insurance:,.2f}")
            cost_cols[4].metric("Total", f"{costs.total:,.2f}")
            st.caption(f"Sea transit {route.transit_days} days, door to door {low}-{high} days")

with planning_tab:
    views = project_views(
        result,
        box or BoxSpec(**raw_box),
        container,
        has_validation_errors=bool(field_errors),
    )
    if views.is_placeholder:
        st.info(f"{views.status_title}: {views.status_message}")
    fill_hex = tier_color(result.efficiency_percent if result else None)
    view_cols = st.columns(3)
    for col, view in zip(view_cols, ("side", "front", "top")):
        with col:
            _render_view(views, view, fill_hex)

    cell_df = build_view_cell_rows(views)
    if not cell_df.empty:
        st.download_button(
            "View cells CSV download",
            data=cell_df.to_csv(index=False).encode("utf-8-sig"),
            file_name="loading_plan_cells.csv",
            use_container_width=True,
        )

    st.subheader("Loading recommendations")
    for tip in LOADING_RECOMMENDATIONS:
        st.markdown(f"- {tip}")

with converter_tab:
    cbm_col, convert_col = st.columns(2)
    with cbm_col:
        st.subheader("CBM calculator")
        if box is not None:
            cbm = box.cbm()
            st.metric("CBM per unit", f"{cbm:.4f}")
            st.metric("Weight per CBM", f"{density_kg_per_cbm(box.weight_kg(), cbm):,.2f} kg/CBM")
            if result is not None:
                st.metric("Loaded CBM", f"{cbm * result.total_boxes:.2f}")
            st.caption(f"Container volume: {container.volume:.2f} CBM")
    with convert_col:
        st.subheader("Unit converter")
        length_value = st.number_input("Length value", min_value=0.0, value=1.0)
        from_length = st.selectbox("From", LENGTH_UNITS + ("m",), key="from_length")
        to_length = st.selectbox("To", ("m",) + LENGTH_UNITS, key="to_length")
        st.write(f"{convert_length(length_value, from_length, to_length):,.4f} {to_length}")
        weight_value = st.number_input("Weight value", min_value=0.0, value=1.0)
        from_weight = st.selectbox("From", WEIGHT_UNITS, key="from_weight")
        to_weight = st.selectbox("To", WEIGHT_UNITS, index=1, key="to_weight")
        st.write(f"{convert_weight(weight_value, from_weight, to_weight):,.4f} {to_weight}")

with batch_tab:
    st.subheader("Batch evaluation")
    st.caption("CSV header: length,width,height,weight,unit,weight_unit,quantity")
    batch_file = st.file_uploader("Box CSV upload", type=["csv"], key="batch")
    batch_text = st.text_area(
        "Box CSV text",
        height=140,
        placeholder="length,width,height,weight,unit,weight_unit,quantity\n100,100,100,500,cm,kg,100",
    )
    if st.button("Evaluate", use_container_width=True):
        try:
            if batch_file is not None:
                batch_df = load_box_csv(batch_file.getvalue().decode("utf-8"))
            elif batch_text.strip():
                batch_df = load_box_csv(batch_text)
            else:
                st.warning("Upload a CSV or paste its text.")
                st.stop()
            boxes = normalize_box_rows(batch_df)
        except EmptyDataError:
            st.error("The CSV is empty.")
        except BoxInputError as exc:
            st.error(str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("batch evaluation failed")
            st.error(f"Could not evaluate the CSV: {exc}")
        else:
            frames = []
            for idx, batch_box in enumerate(boxes, start=1):
                frame = build_comparison_rows([(container, compute_arrangement(batch_box, container))])
                frame.insert(0, "row", idx)
                frames.append(frame)
            batch_result = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
            st.dataframe(batch_result, use_container_width=True, hide_index=True)
