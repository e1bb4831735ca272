"""Hourly Precipitation kNN Dashboard - Main Entry Point."""
import os

import streamlit as st

from weather_knn.constants import DEFAULT_CONFIG, FEATURE_COLS, NUMERIC_COLS, TARGET_COL
from weather_knn.data_loader import load_data
from weather_knn.errors import WeatherKNNError
from weather_knn.pipeline import make_config, run_pipeline, metrics_table
from weather_knn.plotting import (
    box_chart, scatter_chart, heatmap_chart, correlation_chart, prediction_vs_actual_chart,
)
from weather_knn.stats_helpers import (
    summary_table, correlation_matrix, target_correlations, hourly_humidity_grid,
)
from weather_knn.ui_components import concept_box, insight_box, metric_cards

DATA_PATH = os.path.join(os.path.dirname(__file__), "noaa_weather_sample.csv")

st.set_page_config(
    page_title="Hourly Precipitation kNN",
    page_icon="🌧️",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_data
def cached_raw(source):
    return load_data(source)


st.title("Hourly Precipitation kNN")
st.subheader("Predicting hourly rainfall from humidity and temperature at a single NOAA station")

# ── Sidebar configuration ────────────────────────────────────────────────────
st.sidebar.header("Data")
uploaded = st.sidebar.file_uploader("NOAA LCD export (CSV)", type=["csv"])
source = uploaded if uploaded is not None else st.sidebar.text_input("or file path", DATA_PATH)

st.sidebar.header("Model")
seed = st.sidebar.number_input("Seed", value=DEFAULT_CONFIG["seed"], step=1)
train_fraction = st.sidebar.slider("Train fraction", 0.5, 0.95, DEFAULT_CONFIG["train_fraction"], 0.05)
k = st.sidebar.slider("Neighbors (k)", 1, 25, DEFAULT_CONFIG["k"])
degree = st.sidebar.slider("Polynomial degree", 2, 4, DEFAULT_CONFIG["polynomial_degree"])
weighted = st.sidebar.checkbox("Distance-weighted", value=DEFAULT_CONFIG["weighted"])
drop_bad = st.sidebar.checkbox("Drop unparseable precipitation rows", value=False)

if uploaded is None and not os.path.exists(source):
    st.info("Upload a NOAA LCD CSV or point the sidebar at one to get started.")
    st.stop()

config = make_config(
    seed=int(seed), train_fraction=train_fraction, k=k, polynomial_degree=degree,
    weighted=weighted, on_parse_error="drop" if drop_bad else "raise",
)
try:
    output = run_pipeline(cached_raw(source), config)
except WeatherKNNError as exc:
    st.error(str(exc))
    st.stop()

dataset = output["dataset"]
split = output["split"]

col1, col2, col3, col4 = st.columns(4)
col1.metric("Rows", f"{len(dataset):,}")
col2.metric("Train", f"{len(split.train):,}")
col3.metric("Test", f"{len(split.test):,}")
col4.metric("Date Range", f"{dataset['timestamp'].min():%Y-%m-%d} to {dataset['timestamp'].max():%Y-%m-%d}")

# ══════════════════════════════════════════════════════════════════════════════
# SECTION 1 -- Exploring the data
# ══════════════════════════════════════════════════════════════════════════════
st.header("1. The Cleaned Dataset")
concept_box(
    "Cleaning the precipitation field",
    "NOAA records trace rain as <b>T</b> and tags some readings with a trailing <b>s</b>. "
    "Trace amounts become 0.0, the marker is stripped and blank hours count as no rain."
)
st.dataframe(dataset.head(20), use_container_width=True)
st.dataframe(summary_table(dataset), use_container_width=True)
st.plotly_chart(box_chart(dataset, NUMERIC_COLS, title="Distribution of each measurement"),
                use_container_width=True)

st.header("2. Relationships")
corr = correlation_matrix(dataset)
left, right = st.columns(2)
left.plotly_chart(correlation_chart(corr), use_container_width=True)
right.plotly_chart(scatter_chart(dataset, FEATURE_COLS[0], TARGET_COL,
                                 title="Humidity vs precipitation"), use_container_width=True)
strongest = target_correlations(dataset)
insight_box(f"{strongest.index[0]} has the strongest linear relationship with precipitation "
            f"(r = {strongest.iloc[0]:.2f}).")
st.plotly_chart(heatmap_chart(hourly_humidity_grid(dataset), x_label="Hour of day",
                            y_label="Relative humidity (%)",
                            title="Mean hourly precipitation by humidity band", color_scale="Blues"),
                use_container_width=True)

# ══════════════════════════════════════════════════════════════════════════════
# SECTION 3 -- Model results
# ══════════════════════════════════════════════════════════════════════════════
st.header("3. kNN Results")
for result in output["results"]:
    st.subheader(f"{result['name'].title()} features: {', '.join(result['preprocessor'].feature_names_out_)}")
    metric_cards(result["metrics"])

st.dataframe(metrics_table(output["results"]), use_container_width=True)
st.plotly_chart(prediction_vs_actual_chart(output["results"]), use_container_width=True)
