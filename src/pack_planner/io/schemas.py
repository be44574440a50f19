"""Data schemas for input/output operations."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pack_planner.containers import container_from_preset, get_container_capacity
from pack_planner.metrics import PlanReport
from pack_planner.models import Container, Item
from pack_planner.packing.best_fit import PassStatus, Placement
from pack_planner.queue import DuplicatePolicy


class ContainerSpecSchema(BaseModel):
    """Schema for a container: explicit capacity or a named preset."""
    id: Optional[str] = Field(None, description="Container identifier (defaults to the preset name)")
    capacity: Optional[float] = Field(None, description="Capacity (volume units)")
    preset: Optional[str] = Field(None, description="Shipping container preset, e.g. 20, 40HC")

    @field_validator("preset")
    @classmethod
    def _known_preset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            get_container_capacity(value)
        return value

    @model_validator(mode="after")
    def _capacity_or_preset(self) -> "ContainerSpecSchema":
        if (self.capacity is None) == (self.preset is None):
            raise ValueError("container needs exactly one of 'capacity' or 'preset'")
        if self.preset is None and self.id is None:
            raise ValueError("container with explicit capacity needs an 'id'")
        return self

    def to_container(self) -> Container:
        if self.preset is not None:
            return container_from_preset(self.preset, self.id)
        return Container(id=self.id, capacity=self.capacity)


class ItemSpecSchema(BaseModel):
    """Schema for an item; quantity > 1 expands to numbered copies."""
    name: str = Field(description="Item name")
    volume: float = Field(description="Item volume")
    quantity: int = Field(1, ge=1, description="Number of copies")

    def to_items(self) -> List[Item]:
        if self.quantity == 1:
            return [Item(name=self.name, volume=self.volume)]
        return [Item(name=f"{self.name}_{i:04d}", volume=self.volume) for i in range(1, self.quantity + 1)]


class PlanRequestSchema(BaseModel):
    """Schema for a planning request (CLI input file or POST /plan body)."""
    containers: List[ContainerSpecSchema] = Field(default_factory=list)
    items: List[ItemSpecSchema] = Field(default_factory=list)
    duplicate_policy: Optional[DuplicatePolicy] = Field(None, description="Overrides the configured policy")


class RejectedItemSchema(BaseModel):
    """An item refused at enqueue time."""
    item: Item
    error: str
    detail: str


class PlanResponseSchema(BaseModel):
    """Schema for a planning result."""
    status: PassStatus
    placements: List[Placement] = Field(default_factory=list)
    unplaced: List[Item] = Field(default_factory=list)
    rejected: List[RejectedItemSchema] = Field(default_factory=list)
    collapsed: List[Item] = Field(default_factory=list)
    report: PlanReport
