"""
Flow-graph builder for the Sankey diagram.

Derives the experience level -> job title -> salary bucket graph from the
rows that pass the current selection. The graph is rebuilt from scratch for
every selection; nodes carry stable ids so nothing downstream depends on the
positions of a previous build.
"""

import logging
from collections import Counter
from typing import Iterable

from salaryflow.data.schemas import (
    ExperienceLevel,
    FlowEdge,
    FlowGraph,
    FlowNode,
    NodeKind,
    SalaryRow,
    Selection,
)
from salaryflow.features.aggregators import top_n_categories
from salaryflow.features.salary_buckets import SALARY_BUCKETS, SalaryBucket, bucket_for_salary

logger = logging.getLogger(__name__)

DEFAULT_TOP_N_TITLES = 10


def level_node(level: ExperienceLevel) -> FlowNode:
    return FlowNode(kind=NodeKind.EXPERIENCE_LEVEL, key=level.value, label=level.label)


def title_node(title: str) -> FlowNode:
    return FlowNode(kind=NodeKind.JOB_TITLE, key=title, label=title)


def bucket_node(bucket: SalaryBucket) -> FlowNode:
    return FlowNode(kind=NodeKind.SALARY_BUCKET, key=bucket.key, label=bucket.label)


def filter_rows(rows: Iterable[SalaryRow], selection: Selection) -> list[SalaryRow]:
    """Rows whose level is selected and whose year is inside the range."""
    return [row for row in rows if selection.includes(row)]


def build_flow_graph(
    rows: Iterable[SalaryRow],
    selection: Selection,
    *,
    top_n: int = DEFAULT_TOP_N_TITLES,
) -> FlowGraph:
    """
    Build the flow graph for a selection.

    Args:
        rows: Full dataset
        selection: Current selection snapshot
        top_n: Number of job titles kept in the middle column

    Returns:
        FlowGraph. When no row survives filtering the graph is empty
        (`is_empty`) and has no nodes or edges.
    """
    filtered = filter_rows(rows, selection)
    top_titles = top_n_categories(filtered, lambda row: row.job_title, top_n)
    title_set = set(top_titles)
    flow_rows = [row for row in filtered if row.job_title in title_set]

    if not flow_rows:
        logger.debug(f"No rows match selection {selection.to_store()}")
        return FlowGraph()

    levels = selection.ordered_levels
    nodes = (
        [level_node(level) for level in levels]
        + [title_node(title) for title in top_titles]
        + [bucket_node(bucket) for bucket in SALARY_BUCKETS]
    )

    level_title_counts: Counter[tuple[ExperienceLevel, str]] = Counter()
    title_bucket_counts: Counter[tuple[str, str]] = Counter()
    for row in flow_rows:
        level_title_counts[(row.experience_level, row.job_title)] += 1
        title_bucket_counts[(row.job_title, bucket_for_salary(row.salary_in_usd).key)] += 1

    edges: list[FlowEdge] = []
    for level in levels:
        source = level_node(level).node_id
        for title in top_titles:
            weight = level_title_counts.get((level, title), 0)
            if weight:
                edges.append(FlowEdge(source=source, target=title_node(title).node_id, weight=weight))

    for title in top_titles:
        source = title_node(title).node_id
        for bucket in SALARY_BUCKETS:
            weight = title_bucket_counts.get((title, bucket.key), 0)
            if weight:
                edges.append(FlowEdge(source=source, target=bucket_node(bucket).node_id, weight=weight))

    graph = FlowGraph(nodes=tuple(nodes), edges=tuple(edges), row_count=len(flow_rows))
    logger.debug(
        f"Built flow graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
        f"{graph.row_count} rows"
    )
    return graph
