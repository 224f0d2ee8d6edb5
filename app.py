import streamlit as st
import streamlit.components.v1 as components
from streamlit_folium import st_folium

from ndvi_bloom.bloom import bloom_table
from ndvi_bloom.config import (
    DATA_SOURCE,
    LOG_FILE,
    LOG_LEVEL,
    MAP_HEIGHT,
    MAP_SECTION_ID,
    SHOW_START_BUTTON,
)
from ndvi_bloom.logging_config import setup_logging
from ndvi_bloom.models import GeoPoint
from ndvi_bloom.presenter import BloomPresenter
from ndvi_bloom.store import NOT_READY, DatasetStore, StoreState
from ndvi_bloom.widgets import (
    NDVI_CLASSES,
    FoliumMapWidget,
    HtmlTextPanel,
    PlotlyChartWidget,
    smooth_scroll_script,
)

# ============================================================================
# CONFIGURATION
# ============================================================================
st.set_page_config(
    page_title="NDVI Bloom Explorer",
    page_icon="🌸",
    layout="wide",
    initial_sidebar_state="expanded"
)

setup_logging(LOG_LEVEL, LOG_FILE)

# ============================================================================
# STATE
# ============================================================================
@st.cache_resource
def get_store():
    """Process-wide NDVI dataset store, loading in the background"""
    store = DatasetStore(DATA_SOURCE)
    store.load()
    return store

def get_presenter(store):
    """Per-session widgets and click presenter"""
    if "presenter" not in st.session_state:
        st.session_state.presenter = BloomPresenter(
            store,
            FoliumMapWidget(),
            PlotlyChartWidget(),
            panel=HtmlTextPanel("Click anywhere on the map to predict the bloom for the nearest sample location."),
            alert=st.warning,
        )
        st.session_state.last_click = None
    return st.session_state.presenter

# ============================================================================
# SIDEBAR
# ============================================================================
def create_ndvi_legend():
    """NDVI class legend for the map overlay"""
    st.sidebar.markdown("**NDVI Scale** (peak per location)")
    for _, range_str, description, color in NDVI_CLASSES:
        st.sidebar.markdown(
            f"""
            <div style="display:flex;align-items:center;justify-content:start;margin-bottom:8px;">
                <div style="width:24px;height:16px;background-color:{color};margin-right:8px;border:1px solid #ddd;"></div>
                <span style="font-size:12px;">{range_str} · {description}</span>
            </div>
            """,
            unsafe_allow_html=True
        )

def show_dataset_status(store):
    """Load status and dataset summary"""
    st.sidebar.header("Dataset")

    if store.state is StoreState.FAILED:
        st.sidebar.error(f"❌ Failed to load NDVI data: {store.error}")
        return

    dataset = store.get()
    if dataset is NOT_READY:
        st.sidebar.info("⏳ Loading NDVI data...")
        st.sidebar.button("🔄 Refresh")
        return

    table = bloom_table(dataset)
    st.sidebar.success(f"✅ {len(dataset)} sample locations loaded")

    col1, col2 = st.sidebar.columns(2)
    with col1:
        st.metric("Blooming", int(table["bloom_step"].notna().sum()))
    with col2:
        if len(table):
            st.metric("Avg Peak NDVI", f"{table['peak_ndvi'].mean():.3f}")
        else:
            st.metric("Avg Peak NDVI", "N/A")

    with st.sidebar.expander("Sample locations"):
        st.dataframe(table, hide_index=True, use_container_width=True)

# ============================================================================
# MAIN APPLICATION
# ============================================================================
def main():
    store = get_store()
    presenter = get_presenter(store)
    map_widget = presenter.map

    # Hero
    st.title("🌸 NDVI Bloom Explorer")
    st.markdown("Simulated vegetation index data · click the map to predict when the nearest location blooms")
    if SHOW_START_BUTTON and st.button("Start Demo"):
        components.html(smooth_scroll_script(MAP_SECTION_ID), height=0)
    st.divider()

    show_dataset_status(store)
    create_ndvi_legend()

    dataset = store.get()
    map_widget.set_overlay(None if dataset is NOT_READY else dataset)

    # Map + prediction
    st.markdown(f"<div id='{MAP_SECTION_ID}'></div>", unsafe_allow_html=True)
    col_map, col_pred = st.columns([1.4, 1])

    with col_map:
        st.subheader("Map")
        out = st_folium(
            map_widget.build(),
            key="ndvi_map",
            height=MAP_HEIGHT,
            use_container_width=True,
            returned_objects=["last_clicked"],
        )

    with col_pred:
        st.subheader("Prediction")
        st.markdown(presenter.panel.html, unsafe_allow_html=True)
        st.plotly_chart(presenter.chart.figure, use_container_width=True)

    # Forward new clicks only; the component keeps returning the last one
    clicked = (out or {}).get("last_clicked")
    if clicked and clicked != st.session_state.last_click:
        st.session_state.last_click = clicked
        previous = presenter.last_result
        map_widget.dispatch_click(GeoPoint(clicked["lat"], clicked["lng"]))
        if presenter.last_result is not previous:
            st.rerun()

    # Footer
    st.markdown("---")
    st.markdown("""
    <div style='text-align:center;color:gray;'>
        <p>🌿 NDVI Bloom Explorer | Built with Streamlit, Folium & Plotly</p>
        <p>All NDVI values are simulated</p>
    </div>
    """, unsafe_allow_html=True)

if __name__ == "__main__":
    main()
