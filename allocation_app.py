import pandas as pd
import plotly.express as px
import streamlit as st

from casepack.config import configure_logging
from casepack.logic.exceptions import CasepackError
from casepack.logic.models import CasePack
from casepack.logic.optimizer import CasepackOptimizer
from casepack.reporting.excel_report import report_bytes, XLSX_MEDIA_TYPE

configure_logging()

DEFAULT_RATIOS = pd.DataFrame({"qty": [1, 4, 10]})
DEFAULT_STORES = pd.DataFrame({"store": ["str1", "str2", "str3", "str4"], "need": [100, 150, 200, 250]})
DEFAULT_WAREHOUSES = pd.DataFrame({"warehouse": ["wh1", "wh2", "wh3", "wh4"], "available": [15, 10, 12, 6]})


# --- Helper Logic ---
@st.cache_resource
def get_optimizer():
    return CasepackOptimizer()


def frame_to_mapping(df: pd.DataFrame, key_col: str, value_col: str) -> dict:
    df = df.dropna(subset=[key_col])
    mapping = {}
    for _, row in df.iterrows():
        value = row[value_col]
        mapping[str(row[key_col])] = int(value) if pd.notnull(value) else 0
    return mapping


# --- Streamlit UI ---
st.set_page_config(page_title="Casepack Optimizer", layout="wide")

st.title("📦 Casepack Allocation Optimizer")
st.markdown("Fair-share allocation of whole casepacks to stores, drawn proportionally from warehouses.")

# Sidebar
st.sidebar.header("Casepack Bundle")
ratios_df = st.sidebar.data_editor(DEFAULT_RATIOS, num_rows="dynamic", key="ratios")

col_stores, col_wh = st.columns(2)
with col_stores:
    st.subheader("Store Need (items)")
    stores_df = st.data_editor(DEFAULT_STORES, num_rows="dynamic", key="stores")
with col_wh:
    st.subheader("Warehouse Supply (casepacks)")
    warehouses_df = st.data_editor(DEFAULT_WAREHOUSES, num_rows="dynamic", key="warehouses")

if st.sidebar.button("Run Optimizer"):
    ratios = [int(q) for q in ratios_df["qty"].dropna()]
    needs = frame_to_mapping(stores_df, "store", "need")
    supply = frame_to_mapping(warehouses_df, "warehouse", "available")

    try:
        result = get_optimizer().optimize([CasePack.from_ratios(ratios)], needs, supply)
    except CasepackError as e:
        st.error(f"Invalid request: {e}")
        st.stop()

    # Top Metrics
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Items / Casepack", result.items_per_casepack)
    c2.metric("Available Casepacks", result.total_available)
    c3.metric("Allocated Casepacks", result.total_allocated)
    c4.metric("Remaining Supply", result.remaining_supply)

    if result.total_need > result.total_available * result.items_per_casepack:
        st.info(f"**Supply constrained**: need {result.total_need:,} items, "
                f"supply {result.total_available * result.items_per_casepack:,} items. Fair share applied.")

    # Visualizations
    col_left, col_right = st.columns(2)

    with col_left:
        st.subheader("Store Allocation vs Target")
        store_view = pd.DataFrame({
            "Store": list(result.stores.keys()),
            "Allocated": list(result.stores.values()),
            "Target": [result.targets.get(s, 0.0) for s in result.stores],
        }).melt(id_vars="Store", var_name="Series", value_name="Casepacks")
        fig_stores = px.bar(store_view, x="Store", y="Casepacks", color="Series", barmode="group")
        st.plotly_chart(fig_stores, use_container_width=True)

    with col_right:
        st.subheader("Warehouse Draw vs Capacity")
        wh_view = pd.DataFrame({
            "Warehouse": list(result.warehouses.keys()),
            "Drawn": list(result.warehouses.values()),
            "Capacity": [max(0, supply[w]) for w in result.warehouses],
        }).melt(id_vars="Warehouse", var_name="Series", value_name="Casepacks")
        fig_wh = px.bar(wh_view, x="Warehouse", y="Casepacks", color="Series", barmode="group")
        st.plotly_chart(fig_wh, use_container_width=True)

    # Download
    st.download_button(
        "Download Allocation (Excel)",
        report_bytes(result),
        "casepack_allocation.xlsx",
        XLSX_MEDIA_TYPE,
        key='download-xlsx'
    )
else:
    st.info("👈 Edit the bundle, store needs and warehouse supply, then click **Run Optimizer**.")
