"""
Tests for chart specifications.
"""

import json

import pytest

from salaryflow.charts.bar import DESELECTED_OPACITY, SELECTED_OPACITY, create_bar_spec
from salaryflow.charts.base import ChartSpec, format_salary, padded_max
from salaryflow.charts.line import create_line_spec
from salaryflow.charts.sankey import EMPTY_MESSAGE, FADE_OPACITY, create_sankey_spec
from salaryflow.data.schemas import ExperienceLevel, FlowGraph, SalaryRow, Selection
from salaryflow.features.aggregators import average_salary_by_experience, average_salary_by_year
from salaryflow.flow.builder import build_flow_graph
from salaryflow.state.transitions import TransitionStage


# =============================================================================
# FIXTURES
# =============================================================================


def make_row(level: str, title: str, year: int, salary: float) -> SalaryRow:
    """Helper to create a SalaryRow."""
    return SalaryRow(work_year=year, experience_level=level, job_title=title, salary_in_usd=salary)


@pytest.fixture
def rows() -> list[SalaryRow]:
    return [
        make_row("EN", "Engineer", 2020, 40_000),
        make_row("EN", "Engineer", 2021, 60_000),
        make_row("SE", "Engineer", 2021, 220_000),
        make_row("SE", "Data Analyst", 2022, 120_000),
    ]


# =============================================================================
# BASE TESTS
# =============================================================================


class TestBaseHelpers:
    """Tests for ChartSpec and formatting helpers."""

    def test_to_dict_is_json_serializable(self) -> None:
        spec = ChartSpec(chart_id="x", chart_type="bar", data={"bars": []}, config={"height": 10})
        payload = json.loads(json.dumps(spec.to_dict()))
        assert payload["chart_id"] == "x"
        assert payload["annotations"] == []

    def test_format_salary(self) -> None:
        assert format_salary(95_813.4) == "$95,813"
        assert format_salary(None) == "n/a"

    def test_padded_max(self) -> None:
        assert padded_max([100.0, None, 50.0]) == pytest.approx(110.0)
        assert padded_max([None]) == 1.0


# =============================================================================
# BAR SPEC TESTS
# =============================================================================


class TestBarSpec:
    """Tests for create_bar_spec."""

    def test_one_bar_per_level(self, rows: list[SalaryRow]) -> None:
        spec = create_bar_spec(average_salary_by_experience(rows), Selection())

        bars = spec.data["bars"]
        assert [bar["level"] for bar in bars] == ["EN", "MI", "SE", "EX"]
        assert bars[0]["value"] == pytest.approx(50_000)
        assert bars[0]["value_label"] == "$50,000"
        assert bars[0]["count_label"] == "n = 2"
        assert bars[0]["label"] == "Entry Level"
        assert bars[0]["color"] == ExperienceLevel.EN.color

    def test_empty_level_reads_na(self, rows: list[SalaryRow]) -> None:
        spec = create_bar_spec(average_salary_by_experience(rows), Selection())
        mid = spec.data["bars"][1]
        assert mid["value"] is None
        assert mid["value_label"] == "n/a"
        assert mid["count"] == 0

    def test_selection_drives_opacity(self, rows: list[SalaryRow]) -> None:
        selection = Selection(experience_levels=frozenset({ExperienceLevel.SE}))
        spec = create_bar_spec(average_salary_by_experience(rows), selection)

        opacities = {bar["level"]: bar["opacity"] for bar in spec.data["bars"]}
        assert opacities["SE"] == SELECTED_OPACITY
        assert opacities["EN"] == DESELECTED_OPACITY
        assert [bar["selected"] for bar in spec.data["bars"]] == [False, False, True, False]

    def test_axis_headroom(self, rows: list[SalaryRow]) -> None:
        spec = create_bar_spec(average_salary_by_experience(rows), Selection())
        assert spec.config["yMax"] == pytest.approx(170_000 * 1.1)


# =============================================================================
# LINE SPEC TESTS
# =============================================================================


class TestLineSpec:
    """Tests for create_line_spec."""

    def test_series_per_level_with_data(self, rows: list[SalaryRow]) -> None:
        years = [2020, 2021, 2022, 2023]
        spec = create_line_spec(average_salary_by_year(rows, years), years)

        series = {s["level"]: s for s in spec.data["series"]}
        assert set(series) == {"EN", "SE"}
        assert [p["x"] for p in series["EN"]["points"]] == [2020, 2021]
        assert [p["x"] for p in series["SE"]["points"]] == [2021, 2022]
        assert spec.config["years"] == years
        assert spec.config["brush"]["bounds"] == [2020, 2023]

    def test_no_points(self) -> None:
        spec = create_line_spec([], [2020, 2021])
        assert spec.data["series"] == []
        assert spec.config["yMax"] == 1.0


# =============================================================================
# SANKEY SPEC TESTS
# =============================================================================


class TestSankeySpec:
    """Tests for create_sankey_spec."""

    def test_indices_match_graph(self, rows: list[SalaryRow]) -> None:
        graph = build_flow_graph(rows, Selection())
        spec = create_sankey_spec(graph)

        nodes = spec.data["nodes"]
        assert [n["id"] for n in nodes] == [node.node_id for node in graph.nodes]
        assert [(l["source"], l["target"], l["value"]) for l in spec.data["links"]] == graph.indexed_edges()
        assert spec.data["row_count"] == 4
        assert spec.config["empty"] is False

    def test_link_colors(self, rows: list[SalaryRow]) -> None:
        spec = create_sankey_spec(build_flow_graph(rows, Selection()))
        by_pair = {(l["source_id"], l["target_id"]): l["color"] for l in spec.data["links"]}

        assert by_pair[("experience_level:EN", "job_title:Engineer")] == ExperienceLevel.EN.color
        assert by_pair[("job_title:Engineer", "salary_bucket:lt_50k")] == "#66c2a5"

    @pytest.mark.parametrize("stage, visible", [
        (TransitionStage.FADE_OUT, {"nodes", "labels", "links", "legend"}),
        (TransitionStage.NODES, {"nodes"}),
        (TransitionStage.LABELS, {"nodes", "labels"}),
        (TransitionStage.LINKS, {"nodes", "labels", "links"}),
        (TransitionStage.LEGEND, {"nodes", "labels", "links", "legend"}),
        (TransitionStage.IDLE, {"nodes", "labels", "links", "legend"}),
    ])
    def test_layers_follow_stage(self, rows: list[SalaryRow], stage: TransitionStage, visible: set[str]) -> None:
        spec = create_sankey_spec(build_flow_graph(rows, Selection()), stage=stage)
        shown = {layer for layer, on in spec.config["layers"].items() if on}
        assert shown == visible
        assert spec.config["stage"] == stage.value

    def test_only_fade_out_is_dimmed(self, rows: list[SalaryRow]) -> None:
        graph = build_flow_graph(rows, Selection())
        dimmed = {stage: create_sankey_spec(graph, stage=stage).config["dimmed"] for stage in TransitionStage}
        assert dimmed.pop(TransitionStage.FADE_OUT) is True
        assert not any(dimmed.values())
        assert create_sankey_spec(graph).config["fadeOpacity"] == FADE_OPACITY

    def test_nodes_carry_no_layout_position(self, rows: list[SalaryRow]) -> None:
        spec = create_sankey_spec(build_flow_graph(rows, Selection()))
        assert set(spec.data["nodes"][0]) == {"id", "name", "kind", "index", "color", "value"}

    def test_links_follow_edge_order(self, rows: list[SalaryRow]) -> None:
        graph = build_flow_graph(rows, Selection())
        spec = create_sankey_spec(graph)

        links = spec.data["links"]
        assert [(l["source_id"], l["target_id"]) for l in links] == [(e.source, e.target) for e in graph.edges]
        index = graph.node_index()
        assert all(index[l["source_id"]] == l["source"] and index[l["target_id"]] == l["target"] for l in links)

    def test_empty_graph(self) -> None:
        spec = create_sankey_spec(FlowGraph())
        assert spec.config["empty"] is True
        assert spec.config["emptyMessage"] == EMPTY_MESSAGE
        assert spec.data["nodes"] == []

    def test_legend_lists_buckets(self, rows: list[SalaryRow]) -> None:
        spec = create_sankey_spec(build_flow_graph(rows, Selection()))
        assert [item["label"] for item in spec.config["legend"]][0] == "<$50K"
        assert spec.config["columnLabels"] == ["Experience Level", "Job Title", "Salary Range"]
