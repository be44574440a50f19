"""Error taxonomy for the pack planner."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .models import Item


class ErrorCode(str, Enum):
    """Tag carried by every planner error."""

    INVALID_DIMENSION = "INVALID_DIMENSION"
    INVALID_NAME = "INVALID_NAME"
    UNPLACEABLE = "UNPLACEABLE"
    NO_CONTAINERS_AVAILABLE = "NO_CONTAINERS_AVAILABLE"
    PARTIAL_PACKING_FAILURE = "PARTIAL_PACKING_FAILURE"


class PackingError(Exception):
    """
    Base class for planner errors.

    Not a ValueError on purpose: pydantic wraps ValueError raised inside
    validators, these must reach the caller as-is.
    """

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidDimension(PackingError):
    """Volume or capacity is not a finite number greater than zero."""

    code = ErrorCode.INVALID_DIMENSION


class InvalidName(PackingError):
    """Item name or container id is blank."""

    code = ErrorCode.INVALID_NAME


class Unplaceable(PackingError):
    """Item is larger than every registered container."""

    code = ErrorCode.UNPLACEABLE

    def __init__(self, item: "Item", largest_capacity: float) -> None:
        super().__init__(
            f"Item '{item.name}' ({item.volume}) is too large for any container "
            f"(largest capacity {largest_capacity})."
        )
        self.item = item
        self.largest_capacity = largest_capacity


class NoContainersAvailable(PackingError):
    code = ErrorCode.NO_CONTAINERS_AVAILABLE

    def __init__(self, message: str = "No containers registered; nothing was packed.") -> None:
        super().__init__(message)


class PartialPackingFailure(PackingError):
    """Some items found no container during a pass and were returned to the queue."""

    code = ErrorCode.PARTIAL_PACKING_FAILURE

    def __init__(self, items: Iterable["Item"]) -> None:
        self.items: list["Item"] = list(items)
        names = ", ".join(item.name for item in self.items)
        super().__init__(
            f"Could not pack {len(self.items)} item(s); returned to queue: {names}"
        )
