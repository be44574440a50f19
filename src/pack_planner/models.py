from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from pack_planner.errors import InvalidDimension, InvalidName


def _check_dimension(value: float, what: str) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidDimension(f"{what} must be a positive number, got {value}.")


class Item(BaseModel):
    """
    Immutable unit of work waiting to be packed.

    Items order by volume descending, then name ascending (code-point
    order). The smallest item in that order is the next one dequeued.
    Two items with the same (volume, name) are equal.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Identifying name of the item")
    volume: float = Field(description="Volume the item occupies")

    @model_validator(mode="after")
    def _validate(self) -> "Item":
        # volume is checked before the name
        _check_dimension(self.volume, f"Volume of item '{self.name}'")
        if not self.name or not self.name.strip():
            raise InvalidName("Item name must not be blank.")
        return self

    @property
    def priority_key(self) -> tuple[float, str]:
        return (-self.volume, self.name)

    def compare(self, other: "Item") -> int:
        """Three-way comparison: negative when self is dequeued before other."""
        a, b = self.priority_key, other.priority_key
        return (a > b) - (a < b)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.priority_key < other.priority_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.priority_key <= other.priority_key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.priority_key > other.priority_key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.priority_key >= other.priority_key

    def __str__(self) -> str:
        return f"{self.name} ({self.volume:g})"


class Container(BaseModel):
    """
    Capacity-bounded holder of packed items.

    Capacity is fixed at construction. Items are only ever appended, and
    only through try_place(), which is the single place the capacity
    limit is enforced.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Container identifier (not required to be unique)")
    capacity: float = Field(description="Total volume the container can hold")

    _packed_items: list[Item] = PrivateAttr(default_factory=list)

    @model_validator(mode="after")
    def _validate(self) -> "Container":
        _check_dimension(self.capacity, f"Capacity of container '{self.id}'")
        if not self.id or not self.id.strip():
            raise InvalidName("Container id must not be blank.")
        return self

    @property
    def packed_items(self) -> tuple[Item, ...]:
        """Packed items in placement order (read-only)."""
        return tuple(self._packed_items)

    @property
    def current_volume(self) -> float:
        return math.fsum(item.volume for item in self._packed_items)

    @property
    def remaining_space(self) -> float:
        # always derived from the packed items, never stored
        return self.capacity - self.current_volume

    @property
    def fill_percentage(self) -> float:
        return self.current_volume / self.capacity * 100.0

    def can_fit(self, item: Item) -> bool:
        return item.volume <= self.remaining_space

    def try_place(self, item: Item) -> bool:
        """
        Place the item if it fits in the remaining space.

        Returns True if committed; False leaves the container untouched.
        """
        if self.can_fit(item):
            self._packed_items.append(item)
            return True
        return False

    def __str__(self) -> str:
        return (
            f"Container '{self.id}' ({self.current_volume:.2f} / {self.capacity:.2f})"
            f" - fill {self.fill_percentage:.1f}%"
        )
