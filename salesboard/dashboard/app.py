# salesboard/dashboard/app.py: Streamlit dashboard
#   streamlit run salesboard/dashboard/app.py

import os

import streamlit as st

from salesboard.core.config import configure_logging
from salesboard.dashboard.charts import metric_bar_chart, summary_cards
from salesboard.dashboard.store import DashboardStore
from salesboard.services.filters import categories_of

configure_logging(os.getenv("LOG_LEVEL", "INFO"))
st.set_page_config(page_title="Restaurant Sales", layout="wide")

API_URL = os.getenv("SALESBOARD_API_URL", "http://127.0.0.1:8000")
TIMEOUT = float(os.getenv("DASHBOARD_TIMEOUT_SECONDS", "30"))
NO_CATEGORY = "(none)"

# one store per browser session
if "store" not in st.session_state:
    store = DashboardStore(API_URL, timeout=TIMEOUT)
    store.refresh()
    store.set_filter(categories_of(store.dataset))
    st.session_state.store = store
store: DashboardStore = st.session_state.store

# ---------- Upload ----------
st.sidebar.header("Upload")
uploaded = st.sidebar.file_uploader("CSV files", type=["csv"], accept_multiple_files=True)
if st.sidebar.button("Upload", disabled=not uploaded):
    with st.spinner("Uploading..."):
        if store.upload([(f.name, f.getvalue()) for f in uploaded]):
            store.set_filter(categories_of(store.dataset))

# ---------- Filters ----------
st.sidebar.header("Filters")
options = categories_of(store.dataset)
picked = st.sidebar.multiselect(
    "Categories",
    options=options,
    format_func=lambda c: NO_CATEGORY if c is None else c,
    default=[c for c in options if c in store.selected],
)
if set(picked) != store.selected:
    store.set_filter(picked)

# ---------- Cards ----------
st.title("Restaurant Sales")
cards = summary_cards(store.filtered)
col1, col2, col3 = st.columns(3)
col1.metric("Items", f"{cards['Items']:,}")
col2.metric("Units sold", f"{cards['Units sold']:,.0f}")
col3.metric("Revenue", f"${cards['Revenue']:,.2f}")

# ---------- Charts ----------
if not store.filtered:
    st.info("Pick at least one category.")
    st.stop()

st.plotly_chart(metric_bar_chart(store.filtered, "units_sold"), use_container_width=True)
st.plotly_chart(metric_bar_chart(store.filtered, "revenue"), use_container_width=True)
