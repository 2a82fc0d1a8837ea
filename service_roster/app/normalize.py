"""
Normalization of upstream creature records into `NormalizedItem`.
"""

from typing import Any, Dict, Mapping

from .models import NormalizedItem, StatBlock


# Upstream stat category -> StatBlock field alias
STAT_CATEGORIES: Dict[str, str] = {
    "hp": "hp",
    "attack": "atk",
    "defense": "def",
    "special-attack": "spa",
    "special-defense": "spd",
    "speed": "spe",
}


def normalize_stats(raw_stats: Any) -> StatBlock:
    """Map the upstream stat list onto the six canonical categories."""
    base_values = {
        entry["stat"]["name"]: entry["base_stat"]
        for entry in raw_stats
    }
    return StatBlock.model_validate({
        alias: base_values.get(category, 0)
        for category, alias in STAT_CATEGORIES.items()
    })


def normalize_item(raw: Mapping[str, Any]) -> NormalizedItem:
    """Convert one raw detail record.

    Raises KeyError, TypeError or ValueError when the record lacks the
    fields the shared schema needs.
    """
    return NormalizedItem(
        id=raw["id"],
        name=raw["name"],
        types=tuple(entry["type"]["name"] for entry in raw["types"]),
        abilities=tuple(entry["ability"]["name"] for entry in raw["abilities"]),
        stats=normalize_stats(raw["stats"]),
        locations=(),
        evolves_to=None,
        evo_method=None,
    )
