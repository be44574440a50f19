"""Planner: owns the containers and the pending-item queue."""

from __future__ import annotations

import logging
import threading

from pack_planner.errors import Unplaceable
from pack_planner.metrics import PlanReport, build_report
from pack_planner.models import Container, Item
from pack_planner.packing.best_fit import PassResult, run_greedy_pass
from pack_planner.queue import DuplicatePolicy, PriorityQueue

logger = logging.getLogger(__name__)


class Planner:
    """
    Aggregate root for one packing plan.

    Every item accepted by enqueue() is, at any time, either in the
    pending queue or in exactly one container.

    Not thread-safe. A planner shared between threads must be used under
    `planner.lock` for the whole operation (enqueue, pass, report);
    the planner never acquires it itself.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.COLLAPSE) -> None:
        self._containers: list[Container] = []
        self._queue = PriorityQueue(duplicate_policy)
        self.lock = threading.RLock()

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._queue.duplicate_policy

    @property
    def containers(self) -> tuple[Container, ...]:
        """
        Copies of the registered containers, in registration order.

        Placing into a copy does not touch the planner; items only enter
        planner-owned containers through run_greedy_pass().
        """
        return tuple(c.model_copy(deep=True) for c in self._containers)

    @property
    def pending(self) -> tuple[Item, ...]:
        """Items waiting for placement, in dequeue order."""
        return self._queue.snapshot()

    def add_container(self, container: Container) -> None:
        """Register a container; the planner takes ownership of it."""
        # ids are not required to be unique
        self._containers.append(container)
        logger.debug(f"Registered container '{container.id}' (capacity {container.capacity:g})")

    def enqueue(self, item: Item) -> bool:
        """
        Queue an item for the next pass.

        Raises Unplaceable if containers are registered and the item is
        larger than all of them; only containers present now are considered.
        Returns False if the item collapsed onto an equal queued item.
        """
        if self._containers and all(item.volume > c.capacity for c in self._containers):
            largest = max(c.capacity for c in self._containers)
            logger.warning(f"Rejected {item}: larger than every container (largest {largest:g})")
            raise Unplaceable(item, largest)

        queued = self._queue.push(item)
        if queued:
            logger.debug(f"Queued {item} ({len(self._queue)} pending)")
        else:
            logger.warning(f"Dropped {item}: an equal item is already queued")
        return queued

    def run_greedy_pass(self) -> PassResult:
        """Run one greedy best-fit pass over the pending queue."""
        return run_greedy_pass(self._queue, self._containers)

    def report(self) -> PlanReport:
        return build_report(self._containers, self._queue.snapshot())
