# client/api.py
import streamlit as st
from barometer.fetcher import DashboardState, DashboardSnapshot
from barometer.setup_logging import setup_logging

setup_logging()

def state() -> DashboardState:
    """One DashboardState per browser session; survives Streamlit reruns."""
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardState()
    return st.session_state["dashboard"]

def use_backend(backend_url: str) -> None:
    """Raises ValueError for a blank URL; the previous one stays in use."""
    s = state()
    if (backend_url or "").strip() != s.backend_url:
        s.set_backend_url(backend_url)

def refresh() -> DashboardSnapshot:
    return state().trigger_fetch()
