"""
Plotly figure renderer.

Turns ChartSpecs into plotly figures. Hover labels play the part of the
shared tooltip; the bar chart carries level codes in customdata so click
events can be mapped back to experience levels. The bar and line charts
carry a layout transition so their first draw grows in from zero.
"""

import logging
from typing import Any

import plotly.graph_objects as go

from salaryflow.charts.base import ChartSpec
from salaryflow.charts.bar import bar_opacity
from salaryflow.data.schemas import ExperienceLevel, Selection

logger = logging.getLogger(__name__)

FONT_FAMILY = "Inter, Helvetica, Arial, sans-serif"
MARGIN = {"t": 60, "r": 30, "b": 80, "l": 100}
SANKEY_MARGIN = {"t": 40, "r": 20, "b": 20, "l": 20}
TEXT_COLOR = "#0f172a"

# First draw of the bar and line charts grows from zero
ENTRANCE_MS = 800
ENTRANCE_EASING = "back-out"


def _hex_to_rgba(color: str, alpha: float) -> str:
    color = color.lstrip("#")
    r, g, b = (int(color[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha})"


def _base_layout(config: dict[str, Any], *, margin: dict[str, int] = MARGIN) -> dict[str, Any]:
    return {
        "height": config.get("height", 400),
        "margin": margin,
        "font": {"family": FONT_FAMILY, "size": 12, "color": TEXT_COLOR},
        "paper_bgcolor": "#ffffff",
        "plot_bgcolor": "#ffffff",
        "hoverlabel": {"bgcolor": "#ffffff", "font": {"family": FONT_FAMILY}},
    }


def entrance_transition(duration_ms: int = ENTRANCE_MS) -> dict[str, Any]:
    return {"duration": duration_ms, "easing": ENTRANCE_EASING}


# =============================================================================
# BAR CHART
# =============================================================================


def bar_hover_text(spec: ChartSpec) -> list[str]:
    return [
        f"<b>{bar['label']}</b><br>Average Salary: {bar['value_label']}<br>"
        f"Count: {bar['count']} jobs<br><i>Click to {'deselect' if bar['selected'] else 'select'}</i>"
        for bar in spec.data["bars"]
    ]


def bar_figure(spec: ChartSpec, *, entrance: bool = False, transition_ms: int = ENTRANCE_MS) -> go.Figure:
    """Bar chart of mean salary per experience level.

    Args:
        spec: Bar chart specification
        entrance: Draw every bar at zero height with no value labels, the
            frame the entrance animation grows from
        transition_ms: Duration of the animated change to the next figure
    """
    bars = spec.data["bars"]
    config = spec.config

    hover = bar_hover_text(spec)
    if entrance:
        heights = [0] * len(bars)
        labels = [""] * len(bars)
    else:
        # Empty groups draw as zero-height bars; the label still reads n/a
        heights = [bar["value"] if bar["value"] is not None else 0 for bar in bars]
        labels = [bar["value_label"] for bar in bars]

    fig = go.Figure(go.Bar(
        x=[bar["label"] for bar in bars],
        y=heights,
        customdata=[bar["level"] for bar in bars],
        text=labels,
        textposition="outside",
        marker={
            "color": [bar["color"] for bar in bars],
            "opacity": [bar["opacity"] for bar in bars],
            "line": {"width": 0},
        },
        hovertext=hover,
        hoverinfo="text",
    ))

    for bar in bars:
        fig.add_annotation(
            x=bar["label"],
            y=0,
            yref="y",
            yshift=-48,
            text=bar["count_label"],
            showarrow=False,
            font={"size": 12, "color": "#64748b"},
        )

    fig.update_layout(
        **_base_layout(config),
        title={"text": "Average Salary by Experience Level", "x": 0.5},
        xaxis={"title": {"text": config["xLabel"], "standoff": 40}, "tickangle": -45},
        yaxis={"title": config["yLabel"], "range": [0, config["yMax"]], "tickprefix": "$", "tickformat": ",.0f"},
        bargap=0.3,
        clickmode="event",
        showlegend=False,
        transition=entrance_transition(transition_ms),
    )
    return fig


def bar_opacities(selection: Selection) -> list[float]:
    """Marker opacities for the bars, in canonical level order."""
    return [bar_opacity(level, selection) for level in ExperienceLevel.ordered()]


# =============================================================================
# LINE CHART
# =============================================================================


def line_figure(spec: ChartSpec, *, entrance: bool = False, transition_ms: int = ENTRANCE_MS) -> go.Figure:
    """Mean salary over time, one line per level, with an x-axis brush.

    With `entrance` set, lines lie flat on the axis with hidden points so the
    real figure rises out of them.
    """
    config = spec.config
    fig = go.Figure()

    for series in spec.data["series"]:
        points = series["points"]
        fig.add_trace(go.Scatter(
            x=[p["x"] for p in points],
            y=[0 if entrance else p["y"] for p in points],
            name=series["label"],
            mode="lines+markers",
            line={"color": series["color"], "width": 3, "shape": "spline", "smoothing": 0.6},
            marker={"size": 0 if entrance else 10, "color": series["color"]},
            customdata=[p["count"] for p in points],
            hovertemplate=(
                f"<b>{series['label']}" + " (%{x})</b><br>"
                "Average Salary: $%{y:,.0f}<br>Count: %{customdata} jobs<extra></extra>"
            ),
        ))

    years = config["years"]
    xaxis = {
        "title": config["xLabel"],
        "tickmode": "array",
        "tickvals": years,
        "ticktext": [str(y) for y in years],
    }
    if years:
        xaxis["range"] = [years[0] - 0.1, years[-1] + 0.1]

    fig.update_layout(
        **_base_layout(config),
        title={"text": "Salary Trends by Experience Level", "x": 0.5},
        xaxis=xaxis,
        yaxis={"title": config["yLabel"], "range": [0, config["yMax"]], "tickprefix": "$", "tickformat": ",.0f", "fixedrange": True},
        dragmode="select",
        selectdirection="h",
        legend={"orientation": "v", "x": 1.0, "xanchor": "right", "y": 1.0},
        transition=entrance_transition(transition_ms),
    )
    return fig


# =============================================================================
# SANKEY DIAGRAM
# =============================================================================


def _empty_figure(config: dict[str, Any], message: str | None) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        **_base_layout(config, margin=SANKEY_MARGIN),
        xaxis={"visible": False},
        yaxis={"visible": False},
    )
    if message:
        fig.add_annotation(
            x=0.5,
            y=0.5,
            xref="paper",
            yref="paper",
            text=message,
            showarrow=False,
            font={"size": 18, "color": "#999999"},
        )
    return fig


def sankey_figure(spec: ChartSpec) -> go.Figure:
    """Sankey diagram with only the layers the chart spec marks visible.

    A dimmed spec draws the outgoing diagram at low alpha, without
    annotations, while it fades out.
    """
    config = spec.config
    layers = config["layers"]
    dimmed = config.get("dimmed", False)

    if config.get("empty"):
        # Nothing was on screen to fade
        return _empty_figure(config, None if dimmed else config.get("emptyMessage"))

    nodes = spec.data["nodes"]
    links = spec.data["links"]
    if dimmed:
        node_colors = [_hex_to_rgba(n["color"], config["fadeOpacity"]) for n in nodes]
        link_alpha = config["fadeOpacity"]
    else:
        node_colors = [n["color"] for n in nodes]
        link_alpha = config["linkOpacity"] if layers["links"] else 0.0
    text_color = _hex_to_rgba(TEXT_COLOR, config["fadeOpacity"]) if dimmed else TEXT_COLOR

    fig = go.Figure(go.Sankey(
        arrangement="snap",
        valueformat=",.0f",
        node={
            "pad": config["nodePadding"],
            "thickness": config["nodeWidth"],
            "line": {"color": "#000000", "width": 0 if dimmed else 0.5},
            "label": [n["name"] if layers["labels"] else "" for n in nodes],
            "color": node_colors,
            "customdata": [n["name"] for n in nodes],
            "hovertemplate": "<b>%{customdata}</b><br>Count: %{value}<extra></extra>",
        },
        link={
            "source": [link["source"] for link in links],
            "target": [link["target"] for link in links],
            "value": [link["value"] for link in links],
            "color": [_hex_to_rgba(link["color"], link_alpha) for link in links],
            "customdata": [f"{link['source_name']} → {link['target_name']}" for link in links],
            "hovertemplate": "<b>%{customdata}</b><br>Count: %{value}<extra></extra>",
        },
        textfont={"size": 10, "family": FONT_FAMILY, "color": text_color},
    ))

    fig.update_layout(**_base_layout(config, margin=SANKEY_MARGIN))

    if dimmed:
        return fig

    if layers["labels"]:
        for x, label, anchor in zip((0.0, 0.5, 1.0), config["columnLabels"], ("left", "center", "right")):
            fig.add_annotation(
                x=x,
                y=1.0,
                xref="paper",
                yref="paper",
                yanchor="bottom",
                xanchor=anchor,
                text=f"<b>{label}</b>",
                showarrow=False,
            )

    if layers["legend"]:
        legend_lines = [f"<b>{config['legendTitle']}</b>"] + [
            f"<span style='color:{item['color']}'>■</span> {item['label']}"
            for item in config["legend"]
        ]
        fig.add_annotation(
            x=1.0,
            y=0.0,
            xref="paper",
            yref="paper",
            xanchor="right",
            yanchor="bottom",
            align="left",
            text="<br>".join(legend_lines),
            showarrow=False,
            bgcolor="rgba(255,255,255,0.85)",
            font={"size": 12},
        )

    return fig


RENDERERS = {
    "bar": bar_figure,
    "line": line_figure,
    "sankey": sankey_figure,
}


def render_figure(spec: ChartSpec) -> go.Figure:
    """Render any supported spec."""
    try:
        renderer = RENDERERS[spec.chart_type]
    except KeyError:
        raise ValueError(f"Unsupported chart type: {spec.chart_type}") from None
    logger.debug(f"Rendering {spec.chart_type} chart {spec.chart_id}")
    return renderer(spec)
