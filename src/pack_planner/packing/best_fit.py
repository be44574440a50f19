# src/pack_planner/packing/best_fit.py

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field

from pack_planner.errors import NoContainersAvailable, PartialPackingFailure
from pack_planner.models import Container, Item
from pack_planner.queue import PriorityQueue

logger = logging.getLogger(__name__)


class PassStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL_FAILURE = "partial_failure"
    NO_CONTAINERS_AVAILABLE = "no_containers_available"


class Placement(BaseModel):
    """One item committed to one container during a pass."""

    item: Item = Field(description="The placed item")
    container_id: str = Field(description="Id of the container that accepted it")


class PassResult(BaseModel):
    """Outcome of one greedy pass."""

    status: PassStatus
    placements: list[Placement] = Field(default_factory=list)
    unplaced: list[Item] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is PassStatus.COMPLETED

    def raise_for_status(self) -> None:
        """Raise the matching PackingError unless the pass completed."""
        if self.status is PassStatus.NO_CONTAINERS_AVAILABLE:
            raise NoContainersAvailable()
        if self.status is PassStatus.PARTIAL_FAILURE:
            raise PartialPackingFailure(self.unplaced)


def candidate_order(containers: Sequence[Container]) -> list[Container]:
    """
    Containers by ascending remaining space (tightest first).

    Stable: containers with equal remaining space keep registration order.
    """
    return sorted(containers, key=lambda c: c.remaining_space)


def run_greedy_pass(queue: PriorityQueue, containers: Sequence[Container]) -> PassResult:
    """
    Drain the queue once, placing each item in the tightest container that accepts it.

    - Items are taken largest first (volume desc, name asc)
    - Containers are re-ranked for every item, since each placement changes remaining space
    - Items no container accepts are held back until the queue is empty, then
      pushed back so the next pass sees them in normal priority order
    - Never raises for packing outcomes; inspect PassResult.status
    """
    if not containers:
        logger.warning(f"Greedy pass skipped: no containers registered ({len(queue)} item(s) pending)")
        return PassResult(status=PassStatus.NO_CONTAINERS_AVAILABLE)

    placements: list[Placement] = []
    pending_repack: list[Item] = []

    while queue:
        item = queue.pop()

        placed = False
        for container in candidate_order(containers):
            if container.try_place(item):
                placements.append(Placement(item=item, container_id=container.id))
                logger.debug(f"Placed {item} into '{container.id}' (remaining {container.remaining_space:.2f})")
                placed = True
                break

        if not placed:
            logger.warning(f"No container has room for {item}")
            pending_repack.append(item)

    for item in pending_repack:
        queue.push(item)

    status = PassStatus.PARTIAL_FAILURE if pending_repack else PassStatus.COMPLETED
    logger.info(f"Greedy pass finished: placed={len(placements)}, unplaced={len(pending_repack)}, status={status.value}")

    return PassResult(status=status, placements=placements, unplaced=pending_repack)
