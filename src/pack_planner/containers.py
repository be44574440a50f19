# src/pack_planner/containers.py
from __future__ import annotations

from pack_planner.models import Container

# Internal usable dims (meters) of standard shipping containers.
CONTAINER_PRESETS_M: dict[str, dict[str, float]] = {
    "20":   {"length": 5.900,  "width": 2.352, "height": 2.395},
    "20HC": {"length": 5.891,  "width": 2.330, "height": 2.700},
    "40":   {"length": 12.032, "width": 2.352, "height": 2.395},
    "40HC": {"length": 12.032, "width": 2.350, "height": 2.700},
    "48HC": {"length": 14.470, "width": 2.352, "height": 2.698},
    "53HC": {"length": 15.951, "width": 2.489, "height": 2.769},
    "52HC": {"length": 15.951, "width": 2.489, "height": 2.769},  # alias
}


def _volume_m3(dims: dict[str, float]) -> float:
    return round(dims["length"] * dims["width"] * dims["height"], 3)


CONTAINER_CAPACITIES_M3: dict[str, float] = {
    name: _volume_m3(dims) for name, dims in CONTAINER_PRESETS_M.items()
}


def get_container_capacity(preset: str) -> float:
    """Usable volume in m³ of a named preset (case-insensitive)."""
    key = preset.strip().upper()
    if key not in CONTAINER_CAPACITIES_M3:
        raise ValueError(f"Unknown container_preset '{preset}'. Valid: {sorted(CONTAINER_CAPACITIES_M3.keys())}")
    return CONTAINER_CAPACITIES_M3[key]


def container_from_preset(preset: str, container_id: str | None = None) -> Container:
    return Container(id=container_id or preset.strip().upper(), capacity=get_container_capacity(preset))
