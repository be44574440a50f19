from __future__ import annotations

import math
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from pack_planner.models import Container, Item


class ContainerReport(BaseModel):
    """Point-in-time view of one container."""

    id: str
    capacity: float
    used_volume: float
    remaining_space: float
    fill_percentage: float
    items: list[Item] = Field(default_factory=list)


class PlanReport(BaseModel):
    """Point-in-time view of every container plus the pending queue."""

    containers: list[ContainerReport] = Field(default_factory=list)
    pending: list[Item] = Field(default_factory=list)
    total_capacity: float = 0.0
    total_used_volume: float = 0.0
    overall_fill_percentage: float = 0.0


def container_report(container: Container) -> ContainerReport:
    return ContainerReport(
        id=container.id,
        capacity=container.capacity,
        used_volume=container.current_volume,
        remaining_space=container.remaining_space,
        fill_percentage=container.fill_percentage,
        items=list(container.packed_items),
    )


def compute_totals(containers: Sequence[Container]) -> tuple[float, float, float]:
    total_capacity = math.fsum(c.capacity for c in containers)
    total_used = math.fsum(c.current_volume for c in containers)
    fill = 0.0 if total_capacity == 0 else total_used / total_capacity * 100.0
    return total_capacity, total_used, fill


def build_report(containers: Sequence[Container], pending: Iterable[Item]) -> PlanReport:
    """
    Aggregate containers (registration order) and pending items (priority order).

    Reads only; safe to call at any time, including right after a partial failure.
    """
    total_capacity, total_used, fill = compute_totals(containers)
    return PlanReport(
        containers=[container_report(c) for c in containers],
        pending=list(pending),
        total_capacity=total_capacity,
        total_used_volume=total_used,
        overall_fill_percentage=fill,
    )


def format_report(report: PlanReport) -> str:
    """Plain-text rendering of a PlanReport for consoles and logs."""
    if not report.containers:
        lines = ["No containers to report."]
    else:
        lines = []
        for c in report.containers:
            lines.append(f"Container '{c.id}' ({c.used_volume:.2f} / {c.capacity:.2f}) - fill {c.fill_percentage:.1f}%")
            if c.items:
                lines.append("   Contents:")
                lines.extend(f"   - {item}" for item in c.items)

        lines.append("-" * 34)
        lines.append(f"Total capacity:    {report.total_capacity:.2f}")
        lines.append(f"Total used volume: {report.total_used_volume:.2f}")
        lines.append(f"Overall fill:      {report.overall_fill_percentage:.1f}%")

    if report.pending:
        lines.append("")
        lines.append("Items waiting to be packed:")
        lines.extend(f"- {item}" for item in report.pending)

    return "\n".join(lines)
