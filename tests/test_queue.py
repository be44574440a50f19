from __future__ import annotations

import pytest

from pack_planner.models import Item
from pack_planner.queue import DuplicatePolicy, PriorityQueue


def drain(queue: PriorityQueue) -> list[Item]:
    out = []
    while queue:
        out.append(queue.pop())
    return out


def test_dequeue_never_increases_in_volume() -> None:
    queue = PriorityQueue()
    for name, volume in [("c", 3), ("a", 7), ("e", 1), ("b", 7), ("d", 5)]:
        queue.push(Item(name=name, volume=volume))

    drained = drain(queue)

    volumes = [i.volume for i in drained]
    assert volumes == sorted(volumes, reverse=True)
    assert [i.name for i in drained] == ["a", "b", "d", "c", "e"]


def test_order_does_not_depend_on_insertion_order() -> None:
    items = [Item(name=n, volume=v) for n, v in [("x", 2), ("y", 2), ("z", 9), ("w", 4)]]
    forward, backward = PriorityQueue(), PriorityQueue()
    for item in items:
        forward.push(item)
    for item in reversed(items):
        backward.push(item)

    assert drain(forward) == drain(backward)


def test_snapshot_and_iteration_do_not_consume() -> None:
    queue = PriorityQueue()
    queue.push(Item(name="small", volume=1))
    queue.push(Item(name="big", volume=9))

    assert [i.name for i in queue.snapshot()] == ["big", "small"]
    assert [i.name for i in queue] == ["big", "small"]
    assert len(queue) == 2
    assert queue.peek().name == "big"


def test_duplicate_key_collapses_by_default() -> None:
    queue = PriorityQueue()
    assert queue.push(Item(name="TV", volume=20)) is True
    assert queue.push(Item(name="TV", volume=20)) is False

    assert len(queue) == 1
    assert Item(name="TV", volume=20) in queue


def test_same_name_different_volume_is_not_a_duplicate() -> None:
    queue = PriorityQueue()
    assert queue.push(Item(name="TV", volume=20))
    assert queue.push(Item(name="TV", volume=21))
    assert len(queue) == 2


def test_keep_policy_queues_duplicates_fifo() -> None:
    queue = PriorityQueue(DuplicatePolicy.KEEP)
    first = Item(name="TV", volume=20)
    second = Item(name="TV", volume=20)
    assert queue.push(first) is True
    assert queue.push(second) is True
    assert len(queue) == 2

    assert queue.pop() is first
    assert Item(name="TV", volume=20) in queue
    assert queue.pop() is second
    assert Item(name="TV", volume=20) not in queue


def test_collapse_allows_reinsert_after_pop() -> None:
    queue = PriorityQueue()
    queue.push(Item(name="TV", volume=20))
    queue.pop()
    assert queue.push(Item(name="TV", volume=20)) is True


def test_pop_and_peek_on_empty_queue() -> None:
    queue = PriorityQueue()
    assert not queue
    with pytest.raises(IndexError):
        queue.pop()
    with pytest.raises(IndexError):
        queue.peek()


def test_policy_accepts_plain_strings() -> None:
    assert PriorityQueue("keep").duplicate_policy is DuplicatePolicy.KEEP
