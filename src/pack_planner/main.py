from __future__ import annotations

import logging

from pack_planner.errors import InvalidDimension, PackingError, Unplaceable
from pack_planner.metrics import format_report
from pack_planner.models import Container, Item
from pack_planner.planner import Planner

WAREHOUSE_CONTAINERS = [("A-small", 10.0), ("B-medium", 25.0), ("C-large", 50.0)]

WAREHOUSE_ITEMS = [
    ("TV", 20.0),
    ("Microwave", 8.0),
    ("Armchair", 22.0),
    ("Computer", 7.0),
    ("Printer", 6.0),
    ("Wardrobe", 45.0),
    ("Sofa", 30.0),
]


def run_demo() -> Planner:
    print("=== Warehouse packing demo ===")
    planner = Planner()

    for container_id, capacity in WAREHOUSE_CONTAINERS:
        planner.add_container(Container(id=container_id, capacity=capacity))

    print("\n--- Rejected input ---")
    try:
        planner.enqueue(Item(name="Defect", volume=-100.0))
    except InvalidDimension as e:
        print(f"[caught] {e}")

    try:
        planner.enqueue(Item(name="Elephant", volume=100.0))
    except Unplaceable as e:
        print(f"[caught] {e}")

    for name, volume in WAREHOUSE_ITEMS:
        planner.enqueue(Item(name=name, volume=volume))

    print("\nQueue before packing (priority order):")
    for item in planner.pending:
        print(f"- {item}")

    print("\n--- Greedy packing ---")
    result = planner.run_greedy_pass()
    for placement in result.placements:
        print(f"+ '{placement.item.name}' packed into '{placement.container_id}'")
    try:
        result.raise_for_status()
    except PackingError as e:
        print(f"\n[info] {e}")

    print("\n--- Packing report ---")
    print(format_report(planner.report()))
    return planner


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    run_demo()


if __name__ == "__main__":
    main()
