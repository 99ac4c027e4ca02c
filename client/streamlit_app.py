# client/streamlit_app.py
import streamlit as st
import api as API
from barometer.fetcher import FetchStatus
from components import records_frame, show_stats, show_trend, show_by_period, show_table

st.set_page_config(page_title="Weather Analytics Dashboard", layout="wide")
st.title("🌡️ Weather Analytics Dashboard")
st.markdown("Analyzing atmospheric pressure data")

dashboard = API.state()

with st.sidebar:
    st.header("Settings")
    backend_url = st.text_input("Backend URL", value=dashboard.backend_url)
    refresh_clicked = st.button("Refresh data")

# First render loads once; afterwards only the refresh button triggers a fetch
first_load = dashboard.snapshot().status == FetchStatus.IDLE
if first_load or refresh_clicked:
    try:
        API.use_backend(backend_url)
    except ValueError as e:
        st.sidebar.error(e)
    with st.spinner("Loading pressure data..."):
        snap = API.refresh()
else:
    snap = dashboard.snapshot()

if snap.error:
    st.warning(f"{snap.error} (showing sample data instead)")

show_stats(snap.stats)
df = records_frame(snap.records)
show_trend(df)
show_by_period(df)
show_table(df, caption=f"Data shown in hectopascals (hPa). Backend data source: {snap.backend_url}")
