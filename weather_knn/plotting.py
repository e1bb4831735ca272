"""Shared Plotly plotting helpers."""
import plotly.express as px
import plotly.graph_objects as go

from weather_knn.constants import FEATURE_LABELS, VARIANT_COLORS


def apply_common_layout(fig, title=None, height=500):
    """Apply common layout settings to a Plotly figure."""
    fig.update_layout(
        template="plotly_white",
        height=height,
        title=title,
        title_x=0.5,
        margin=dict(t=60, b=40, l=60, r=40),
    )
    return fig


def _labels(labels=None):
    lab = {**(labels or {})}
    for k, v in FEATURE_LABELS.items():
        lab.setdefault(k, v)
    return lab


def box_chart(df, columns, title=None, height=500):
    """Side-by-side box plots of several numeric columns."""
    long = df[columns].melt(var_name="variable", value_name="value")
    long["variable"] = long["variable"].map(lambda c: FEATURE_LABELS.get(c, c))
    fig = px.box(long, x="variable", y="value", color="variable", title=title)
    fig.update_layout(showlegend=False, xaxis_title="", yaxis_title="")
    return apply_common_layout(fig, title, height)


def scatter_chart(df, x, y, color=None, title=None, labels=None, height=500, opacity=0.3):
    """Create a scatter plot of two columns."""
    fig = px.scatter(df, x=x, y=y, color=color, labels=_labels(labels),
                     title=title, opacity=opacity)
    return apply_common_layout(fig, title, height)


def heatmap_chart(data, x_label="", y_label="", title=None, height=500, color_scale="RdYlBu_r"):
    """Create a heatmap from a 2D array or DataFrame."""
    fig = go.Figure(data=go.Heatmap(
        z=data.values if hasattr(data, 'values') else data,
        x=data.columns.tolist() if hasattr(data, 'columns') else None,
        y=data.index.tolist() if hasattr(data, 'index') else None,
        colorscale=color_scale,
    ))
    fig.update_layout(xaxis_title=x_label, yaxis_title=y_label)
    return apply_common_layout(fig, title, height)


def correlation_chart(corr, title="Correlation Matrix", height=500):
    """Annotated heatmap of a correlation matrix on a fixed [-1, 1] scale."""
    fig = go.Figure(data=go.Heatmap(
        z=corr.values, x=corr.columns.tolist(), y=corr.index.tolist(),
        colorscale="RdBu_r", zmin=-1, zmax=1,
        text=corr.round(2).values, texttemplate="%{text}",
    ))
    return apply_common_layout(fig, title, height)


def prediction_vs_actual_chart(results, title="Predicted vs Actual Precipitation", height=500):
    """Overlay each variant's test predictions against the actual values."""
    fig = go.Figure()
    upper = 0.0
    for result in results:
        preds = result["predictions"]
        upper = max(upper, preds["actual"].max(), preds["predicted"].max())
        fig.add_trace(go.Scatter(
            x=preds["actual"], y=preds["predicted"], mode="markers",
            name=result["name"], opacity=0.5,
            marker=dict(color=VARIANT_COLORS.get(result["name"])),
        ))
    fig.add_trace(go.Scatter(
        x=[0, upper], y=[0, upper], mode="lines", name="perfect",
        line=dict(dash="dash", color="gray"),
    ))
    fig.update_layout(xaxis_title="Actual (in)", yaxis_title="Predicted (in)")
    return apply_common_layout(fig, title, height)
