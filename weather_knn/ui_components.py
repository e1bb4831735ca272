"""Shared Streamlit UI components for the dashboard."""
import streamlit as st


def concept_box(title, content):
    """Render a highlighted explanation box."""
    st.markdown(f"""
<div style="background-color: #EBF5FB; padding: 20px; border-radius: 10px; border-left: 5px solid #2E86C1; margin: 10px 0;">
<h4 style="color: #2E86C1; margin-top: 0;">{title}</h4>
<p style="color: #1B4F72;">{content}</p>
</div>
""", unsafe_allow_html=True)


def insight_box(text):
    """Render a key insight callout."""
    st.info(f"**Key Insight:** {text}")


def warning_box(text):
    """Render a warning box."""
    st.warning(text)


def metric_cards(metrics):
    """Show RMSE, MAE and R² side by side, flagging undefined values."""
    cols = st.columns(3)
    for col, key, label in zip(cols, ("rmse", "mae", "r2"), ("RMSE", "MAE", "R²")):
        value = metrics[key]
        col.metric(label, "undefined" if value is None else f"{value:.4f}")
    for metric, reason in metrics["undefined"].items():
        warning_box(f"{metric} is undefined: {reason}")
