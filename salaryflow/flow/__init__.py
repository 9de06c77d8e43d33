"""Experience level → job title → salary range flow graphs."""

from salaryflow.flow.builder import build_flow_graph, filter_rows

__all__ = ["build_flow_graph", "filter_rows"]
