from __future__ import annotations

import pytest

from pack_planner.metrics import build_report, format_report
from pack_planner.planner import Planner


def test_report_before_pass(warehouse: Planner) -> None:
    report = warehouse.report()

    assert [c.id for c in report.containers] == ["A", "B", "C"]
    assert all(c.used_volume == 0 for c in report.containers)
    assert report.total_capacity == 85
    assert report.total_used_volume == 0
    assert report.overall_fill_percentage == 0
    assert [i.volume for i in report.pending] == [45, 30, 22, 20, 8, 7, 6]


def test_report_after_partial_failure(warehouse: Planner) -> None:
    warehouse.run_greedy_pass()

    report = warehouse.report()

    by_id = {c.id: c for c in report.containers}
    assert by_id["C"].used_volume == 45
    assert by_id["C"].remaining_space == 5
    assert by_id["C"].fill_percentage == pytest.approx(90.0)
    assert [i.name for i in by_id["B"].items] == ["Armchair"]
    assert report.total_used_volume == 75
    assert report.overall_fill_percentage == pytest.approx(75 / 85 * 100)
    assert [i.name for i in report.pending] == ["Sofa", "TV", "Computer", "Printer"]


def test_report_does_not_mutate(warehouse: Planner) -> None:
    before = warehouse.pending
    warehouse.report()
    warehouse.report()
    assert warehouse.pending == before


def test_report_is_plain_data(warehouse: Planner) -> None:
    warehouse.run_greedy_pass()
    data = warehouse.report().model_dump()

    assert data["containers"][2]["items"] == [{"name": "Wardrobe", "volume": 45.0}]
    assert data["pending"][0] == {"name": "Sofa", "volume": 30.0}


def test_empty_report() -> None:
    report = build_report([], [])
    assert report.total_capacity == 0
    assert report.overall_fill_percentage == 0
    assert format_report(report) == "No containers to report."


def test_format_report(warehouse: Planner) -> None:
    warehouse.run_greedy_pass()

    text = format_report(warehouse.report())

    assert "Container 'C' (45.00 / 50.00) - fill 90.0%" in text
    assert "   - Wardrobe (45)" in text
    assert "Total capacity:    85.00" in text
    assert "Overall fill:      88.2%" in text
    assert text.endswith("- Sofa (30)\n- TV (20)\n- Computer (7)\n- Printer (6)")
