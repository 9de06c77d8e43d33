"""
Sankey diagram specification for the salary flow.

Shows how the selected experience levels flow into the most common job
titles and on into salary buckets. Which layers are visible depends on the
transition stage being played.
"""

from salaryflow.charts.base import ChartSpec
from salaryflow.data.schemas import ExperienceLevel, FlowGraph, NodeKind
from salaryflow.features.salary_buckets import BUCKETS_BY_KEY, SALARY_BUCKETS
from salaryflow.state.transitions import TransitionStage

TITLE_COLOR = "#bbbbbb"
EMPTY_MESSAGE = "No data matches current selection"
COLUMN_LABELS = ["Experience Level", "Job Title", "Salary Range"]

# Alpha of the previous diagram while it fades out
FADE_OPACITY = 0.15

LAYERS = ("nodes", "labels", "links", "legend")

VISIBLE_LAYERS: dict[TransitionStage, frozenset[str]] = {
    TransitionStage.FADE_OUT: frozenset(LAYERS),
    TransitionStage.NODES: frozenset({"nodes"}),
    TransitionStage.LABELS: frozenset({"nodes", "labels"}),
    TransitionStage.LINKS: frozenset({"nodes", "labels", "links"}),
    TransitionStage.LEGEND: frozenset(LAYERS),
    TransitionStage.IDLE: frozenset(LAYERS),
}


def node_color(kind: NodeKind, key: str) -> str:
    if kind == NodeKind.EXPERIENCE_LEVEL:
        return ExperienceLevel(key).color
    if kind == NodeKind.SALARY_BUCKET:
        return BUCKETS_BY_KEY[key].color
    return TITLE_COLOR


def create_sankey_spec(
    graph: FlowGraph,
    *,
    stage: TransitionStage = TransitionStage.IDLE,
    chart_id: str = "sankey",
    height: int = 600,
    node_width: int = 15,
    node_padding: int = 10,
) -> ChartSpec:
    """Create a Sankey diagram specification.

    Args:
        graph: Flow graph for the current selection
        stage: Transition stage to draw
        chart_id: Unique identifier for the chart
        height: Chart height in pixels
        node_width: Width of Sankey nodes
        node_padding: Padding between nodes

    Returns:
        ChartSpec with indexed nodes and links. For an empty graph the spec
        carries only the empty-state message.
    """
    visible = VISIBLE_LAYERS[stage]
    config = {
        "height": height,
        "nodeWidth": node_width,
        "nodePadding": node_padding,
        "stage": stage.value,
        "layers": {layer: layer in visible for layer in LAYERS},
        "linkOpacity": 0.5,
        "dimmed": stage == TransitionStage.FADE_OUT,
        "fadeOpacity": FADE_OPACITY,
        "columnLabels": COLUMN_LABELS,
        "legend": [{"label": b.label, "color": b.color} for b in SALARY_BUCKETS],
        "legendTitle": "Salary Ranges",
    }

    if graph.is_empty:
        config["empty"] = True
        config["emptyMessage"] = EMPTY_MESSAGE
        return ChartSpec(chart_id=chart_id, chart_type="sankey", data={"nodes": [], "links": []}, config=config)

    # Build node list with indices
    nodes = []
    nodes_by_id = {}
    for i, node in enumerate(graph.nodes):
        nodes.append({
            "id": node.node_id,
            "name": node.label,
            "kind": node.kind.value,
            "index": i,
            "color": node_color(node.kind, node.key),
            "value": max(graph.incoming_weight(node.node_id), graph.outgoing_weight(node.node_id)),
        })
        nodes_by_id[node.node_id] = node

    # Links take the level color leaving a level, otherwise the bucket color they enter
    links = []
    for edge, (source_idx, target_idx, weight) in zip(graph.edges, graph.indexed_edges()):
        source, target = nodes_by_id[edge.source], nodes_by_id[edge.target]
        if source.kind == NodeKind.EXPERIENCE_LEVEL:
            color = node_color(source.kind, source.key)
        elif target.kind == NodeKind.SALARY_BUCKET:
            color = node_color(target.kind, target.key)
        else:
            color = TITLE_COLOR
        links.append({
            "source": source_idx,
            "target": target_idx,
            "value": weight,
            "source_id": edge.source,
            "target_id": edge.target,
            "source_name": source.label,
            "target_name": target.label,
            "color": color,
        })

    config["empty"] = False
    return ChartSpec(
        chart_id=chart_id,
        chart_type="sankey",
        data={"nodes": nodes, "links": links, "row_count": graph.row_count},
        config=config,
    )
