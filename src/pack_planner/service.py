"""One-shot planning shared by the CLI and the HTTP API."""

from __future__ import annotations

import logging

from pack_planner.errors import Unplaceable
from pack_planner.io.schemas import PlanRequestSchema, PlanResponseSchema, RejectedItemSchema
from pack_planner.models import Item
from pack_planner.planner import Planner
from pack_planner.queue import DuplicatePolicy

logger = logging.getLogger(__name__)


def build_planner(request: PlanRequestSchema, default_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE) -> Planner:
    """Planner with the request's containers registered, nothing queued yet."""
    planner = Planner(request.duplicate_policy or default_policy)
    for spec in request.containers:
        planner.add_container(spec.to_container())
    return planner


def enqueue_all(planner: Planner, items: list[Item]) -> tuple[list[RejectedItemSchema], list[Item]]:
    """
    Enqueue items, collecting refusals instead of stopping at the first.

    Returns (rejected, collapsed).
    """
    rejected: list[RejectedItemSchema] = []
    collapsed: list[Item] = []
    for item in items:
        try:
            if not planner.enqueue(item):
                collapsed.append(item)
        except Unplaceable as e:
            rejected.append(RejectedItemSchema(item=item, error=e.code.value, detail=e.message))
    return rejected, collapsed


def build_plan(request: PlanRequestSchema, default_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE) -> PlanResponseSchema:
    """
    Build a planner from the request, run one greedy pass and report.

    Containers are all registered before any item is queued, so the
    oversize check sees every container in the request.
    Raises InvalidDimension / InvalidName for invalid containers or items.
    """
    planner = build_planner(request, default_policy)

    items: list[Item] = []
    for spec in request.items:
        items.extend(spec.to_items())

    rejected, collapsed = enqueue_all(planner, items)
    result = planner.run_greedy_pass()

    logger.info(
        f"plan status={result.status.value}, placed={len(result.placements)}, "
        f"unplaced={len(result.unplaced)}, rejected={len(rejected)}, collapsed={len(collapsed)}"
    )

    return PlanResponseSchema(
        status=result.status,
        placements=result.placements,
        unplaced=result.unplaced,
        rejected=rejected,
        collapsed=collapsed,
        report=planner.report(),
    )
