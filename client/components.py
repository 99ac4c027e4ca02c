# client/components.py
import streamlit as st
import pandas as pd

def records_frame(records) -> pd.DataFrame:
    """NormalizedRecord tuple -> DataFrame with the canonical camelCase columns."""
    return pd.DataFrame([r.to_dict() for r in records])

def show_stats(stats):
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Average Pressure", f"{stats.avg_pressure} hPa")
    c2.metric("Maximum Pressure", f"{stats.max_pressure} hPa")
    c3.metric("Minimum Pressure", f"{stats.min_pressure} hPa")
    c4.metric("Total Records", stats.total_records)

def show_trend(df: pd.DataFrame):
    st.subheader("Pressure Trends")
    if df.empty:
        st.write("No data")
        return
    chart = df.set_index("displayLabel")[["pressureAvg", "pressureMax", "pressureMin"]]
    st.line_chart(chart)

def show_by_period(df: pd.DataFrame):
    st.subheader("Pressure by Period")
    if df.empty:
        return
    st.bar_chart(df.set_index("displayLabel")[["pressureMax", "pressureMin"]])

def show_table(df: pd.DataFrame, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.dataframe(
        df[["region", "districtCode", "displayLabel", "pressureAvg", "pressureMax", "pressureMin"]]
        if not df.empty else df,
        hide_index=True,
    )
