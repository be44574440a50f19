from __future__ import annotations

import pytest

from pack_planner.models import Container, Item
from pack_planner.planner import Planner

WAREHOUSE_ITEMS = [
    ("TV", 20.0),
    ("Microwave", 8.0),
    ("Armchair", 22.0),
    ("Computer", 7.0),
    ("Printer", 6.0),
    ("Wardrobe", 45.0),
    ("Sofa", 30.0),
]


@pytest.fixture
def warehouse() -> Planner:
    """Containers A:10, B:25, C:50 with the seven reference items queued."""
    planner = Planner()
    planner.add_container(Container(id="A", capacity=10))
    planner.add_container(Container(id="B", capacity=25))
    planner.add_container(Container(id="C", capacity=50))
    for name, volume in WAREHOUSE_ITEMS:
        planner.enqueue(Item(name=name, volume=volume))
    return planner
