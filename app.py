# app.py  ·  v1.0.0
# ------------------------------------------------
# File chart viewer: upload a table, map columns to chart roles, render
# Upload, Paste, and Sample inputs · chart-type aware role pickers

import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from chart_viewer import state as viewer
from chart_viewer.colors import PaletteColorSource, RandomColorSource
from chart_viewer.columns import detect_column_type
from chart_viewer.config import (
    DEFAULT_COLORS,
    DEFAULT_FONT,
    DEFAULT_PREVIEW_ROWS,
    FONT_FAMILIES,
    SUPPORTED_EXTENSIONS,
    ViewerSettings,
)
from chart_viewer.errors import ParseFailure
from chart_viewer.models import AxisMode, ChartType, Role
from chart_viewer.normalize import load_pasted, normalize
from chart_viewer.render import RenderOptions, export_html, render, uses_point_scale

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("chart_viewer.app")

# ── Page Configuration ────────────────────────────────────────────────────
st.set_page_config(
    page_title="File Chart Viewer",
    layout="wide",
    initial_sidebar_state="expanded"
)

AXIS_MODE_LABELS = {
    AxisMode.CATEGORY: "Category (one label per row)",
    AxisMode.SCALED: "Scaled (counts / sorted time or number axis)",
    AxisMode.DISCRETE: "Discrete (label vs label)",
}
NONE_OPTION = "-- None --"

# Initialize session state
if "viewer" not in st.session_state:
    st.session_state.viewer = viewer.initial_state()

if "colors" not in st.session_state:
    st.session_state.colors = DEFAULT_COLORS.copy()

if "font_family" not in st.session_state:
    st.session_state.font_family = DEFAULT_FONT

if "upload_key" not in st.session_state:
    st.session_state.upload_key = None


# ── Utility Functions ─────────────────────────────────────────────────────
def sample_rows():
    """Generate sample data"""
    return [
        {"Date": "2025-01-01", "Region": "North", "Revenue": "42000", "Profit": "8400", "r": "6"},
        {"Date": "2025-04-01", "Region": "South", "Revenue": "48000", "Profit": "11200", "r": "9"},
        {"Date": "2025-07-01", "Region": "North", "Revenue": "45000", "Profit": "9000", "r": "7"},
        {"Date": "2025-10-01", "Region": "East", "Revenue": "52000", "Profit": "13500", "r": "12"},
    ]


def current_settings(preview, exclusive):
    base = st.session_state.viewer.settings
    return ViewerSettings(
        exclusive_axes=exclusive,
        preview_limit=DEFAULT_PREVIEW_ROWS if preview else None,
        axis_mode=base.axis_mode,
        seed=base.seed,
    )


def color_source(use_palette):
    if use_palette:
        return PaletteColorSource(st.session_state.colors)
    return RandomColorSource()


def option_index(options, value):
    return options.index(value) if value in options else 0


def show_message(state):
    """Show and clear the transient message of a failed event"""
    if state.message:
        st.error(f"❌ {state.message}")
        st.session_state.viewer = viewer.dismiss_message(state)


# ── Main Application ──────────────────────────────────────────────────────
st.title("📊 File Chart Viewer")
st.markdown("*Upload a table, pick columns, get a chart*")

# ── Sidebar: Data Input ───────────────────────────────────────────────────
with st.sidebar:
    st.header("📁 Data Input")

    preview_only = st.checkbox(
        f"Preview first {DEFAULT_PREVIEW_ROWS} rows only", value=False,
        help="Truncate loaded data for a quick look"
    )
    exclusive_axes = st.checkbox(
        "Keep X out of Y", value=True,
        help="A column used for the X axis cannot also be a Y column"
    )
    settings = current_settings(preview_only, exclusive_axes)
    if settings != st.session_state.viewer.settings:
        st.session_state.viewer = viewer.change_settings(st.session_state.viewer, settings)

    tabs = st.tabs(["Upload", "Paste", "Sample"])

    with tabs[0]:
        uploaded_file = st.file_uploader(
            "Choose a file",
            help="Supported: " + ", ".join(f".{ext}" for ext in SUPPORTED_EXTENSIONS)
        )

        # Only parse a given upload once; reruns keep the loaded state
        if uploaded_file is not None:
            upload_key = (uploaded_file.file_id, preview_only)
            if upload_key != st.session_state.upload_key:
                st.session_state.upload_key = upload_key
                before = st.session_state.viewer
                after = viewer.handle_upload(before, uploaded_file.name, uploaded_file.getvalue())
                st.session_state.viewer = after
                if after.dataset is not None and after.dataset is not before.dataset:
                    st.success(f"✅ Loaded {len(after.dataset)} rows × {len(after.dataset.columns)} columns")

    with tabs[1]:
        st.markdown("**Paste your data**")
        st.info("💡 Paste tab-separated, comma-separated, or other delimited data")

        text_input = st.text_area(
            "Data",
            height=200,
            placeholder="Paste tab or comma-separated data here\nExample:\nName,Age,Score\nJohn,25,85\nJane,30,92",
            label_visibility="collapsed"
        )

        if st.button("📊 Process Data", type="primary"):
            if text_input.strip():
                try:
                    dataset = load_pasted(text_input, preview_limit=settings.preview_limit)
                    st.session_state.viewer = viewer.load_dataset(st.session_state.viewer, dataset)
                    st.success("✅ Data parsed successfully!")
                except ParseFailure as e:
                    logger.warning("Pasted data rejected: %s", e)
                    st.error(f"❌ Parse error: {str(e)}")
                    st.info("💡 Make sure your data is properly formatted with consistent delimiters")

    with tabs[2]:
        st.markdown("**Sample dataset for testing**")
        if st.button("📈 Load Chart Sample", use_container_width=True):
            dataset = normalize(sample_rows(), "sample", preview_limit=settings.preview_limit)
            st.session_state.viewer = viewer.load_dataset(st.session_state.viewer, dataset)
            st.success("✅ Chart sample data loaded")

    show_message(st.session_state.viewer)

    # Check if data is loaded
    if st.session_state.viewer.dataset is None:
        st.info("📊 Choose a data input method above to begin creating charts")
        st.stop()

state = st.session_state.viewer
dataset = state.dataset
columns = list(dataset.columns)

# ── Style Configuration ───────────────────────────────────────────────────
with st.sidebar:
    st.header("🎨 Style Configuration")

    st.session_state.font_family = st.selectbox(
        "Font Family",
        options=list(FONT_FAMILIES.keys()),
        index=list(FONT_FAMILIES.keys()).index(st.session_state.font_family),
        key="font_selector"
    )
    use_palette = st.checkbox("Use brand palette", value=False,
                              help="Off: every series gets a random color")
    if use_palette:
        colors = st.session_state.colors.copy()
        for i in range(len(colors)):
            colors[i] = st.color_picker(f"Color {i+1}", value=colors[i], key=f"color_{i}")
        st.session_state.colors = colors

# ── Data Preview ──────────────────────────────────────────────────────────
st.header("📋 Data Preview")

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("Rows", len(dataset))
with col2:
    st.metric("Columns", len(columns))
with col3:
    st.metric("Format", dataset.source_format.upper() or "—")

if dataset.truncated:
    st.warning(f"⚠️ Showing the first {len(dataset)} rows only (preview mode)")

column_types = {col: detect_column_type(dataset.frame[col]) for col in columns}
st.caption(" · ".join(f"**{col}**: {kind}" for col, kind in column_types.items()))
st.dataframe(pd.DataFrame(dataset.rows, columns=columns), use_container_width=True, height=300)

# ── Chart Configuration ───────────────────────────────────────────────────
st.header("📊 Chart Configuration")

chart_types = list(ChartType)
col1, col2 = st.columns(2)

with col1:
    chart_type = st.selectbox(
        "Chart Type",
        chart_types,
        index=chart_types.index(state.chart_type),
        format_func=lambda t: t.display_name,
    )
    if chart_type != state.chart_type:
        state = viewer.change_chart_type(state, chart_type)
        st.session_state.viewer = state

with col2:
    if chart_type in (ChartType.BAR, ChartType.LINE):
        modes = list(AxisMode)
        mode = st.selectbox(
            "Axis Mode", modes,
            index=modes.index(state.mode),
            format_func=lambda m: AXIS_MODE_LABELS[m],
        )
        if mode != state.mode:
            state = viewer.change_mode(state, mode, colors=color_source(use_palette))
            st.session_state.viewer = state

contract = chart_type.contract
col1, col2 = st.columns(2)
# Widget keys carry the chart type and dataset so pickers reset with them
key_suffix = f"{chart_type.value}_{id(dataset)}"

with col1:
    if contract.label_enabled:
        label_options = [NONE_OPTION] + columns
        label = st.selectbox(
            "Label Key (Slice Labels)", label_options,
            index=option_index(label_options, state.roles.label),
            key=f"label_{key_suffix}",
        )
        label = None if label == NONE_OPTION else label
        if label != state.roles.label:
            state = viewer.select_role(state, Role.LABEL, label, colors=color_source(use_palette))
    else:
        x_options = [NONE_OPTION] + columns
        x_col = st.selectbox(
            "X Axis", x_options,
            index=option_index(x_options, state.roles.x),
            disabled=not contract.x_enabled,
            key=f"x_{key_suffix}",
        )
        x_col = None if x_col == NONE_OPTION else x_col
        if x_col != state.roles.x:
            state = viewer.select_role(state, Role.X, x_col, colors=color_source(use_palette))

with col2:
    y_options = [c for c in columns if not (state.settings.exclusive_axes and c == state.roles.x)]
    if contract.y_max == 1:
        value_options = [NONE_OPTION] + y_options
        current = state.roles.y[0] if state.roles.y else None
        y_col = st.selectbox(
            "Value Key" if contract.label_enabled else "Y Axis", value_options,
            index=option_index(value_options, current),
            key=f"y_single_{key_suffix}",
        )
        y_cols = [] if y_col == NONE_OPTION else [y_col]
    else:
        y_cols = st.multiselect(
            "Y Axis", y_options,
            default=[c for c in state.roles.y if c in y_options],
            key=f"y_multi_{key_suffix}",
        )
    if tuple(y_cols) != state.roles.y:
        state = viewer.set_y(state, y_cols, colors=color_source(use_palette))

st.session_state.viewer = state

with st.expander("🔧 Advanced Options"):
    col1, col2 = st.columns(2)
    with col1:
        title = st.text_input("Chart Title", value="", placeholder="Enter chart title")
        show_legend = st.checkbox("Show Legend", value=True)
        responsive = st.checkbox("Responsive width", value=True)
    with col2:
        width = st.number_input("Width (px)", min_value=300, max_value=2000, value=800, step=50)
        height = st.number_input("Height (px)", min_value=200, max_value=1200, value=500, step=50)
        font_size = st.slider("Font Size", min_value=8, max_value=24, value=14)

# ── Chart Generation ──────────────────────────────────────────────────────
st.header("📈 Generated Chart")

if state.chart_data is None:
    if contract.label_enabled:
        st.info("Select a value column to draw the chart")
    else:
        st.info("Select an X axis and Y axis column to draw the chart")
    st.stop()

options = RenderOptions(
    responsive=responsive,
    width=width,
    height=height,
    title=title,
    font_family=st.session_state.font_family,
    font_size=font_size,
    colors=st.session_state.colors,
    show_legend=show_legend,
)

try:
    chart = render(state.chart_data, options)
    if uses_point_scale(state.chart_data):
        st.altair_chart(chart, use_container_width=responsive)
    else:
        st.plotly_chart(chart, use_container_width=responsive)
    st.session_state.viewer = viewer.mark_rendered(state)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    st.download_button(
        "Download HTML",
        export_html(chart).encode(),
        f"chart_{timestamp}.html",
        "text/html"
    )
except Exception as e:
    logger.exception("Rendering %s failed", chart_type.value)
    st.error(f"Error generating chart: {str(e)}")
    st.info("Check your data selection and try again")

# Footer
st.markdown("---")
st.markdown(
    """<div style='text-align:center;color:#999;font-size:12px;'>
    File Chart Viewer v1.0.0 · CSV, TSV, TXT, JSON, YAML, XML, XLS, XLSX
    </div>""",
    unsafe_allow_html=True
)
