"""
Roster data models.

`GenerationResult` serializes (by alias) to the same JSON shape as the
pre-built aggregate files, so cache entries and static files decode through
the same model.
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class ItemReference(BaseModel):
    """Listing entry pointing at a detail resource."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Item name as listed upstream")
    url: str = Field(..., description="Detail location")


class StatBlock(BaseModel):
    """Six canonical base stats. Missing categories are 0, never absent."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hp: NonNegativeInt = 0
    atk: NonNegativeInt = 0
    def_: NonNegativeInt = Field(0, alias="def")
    spa: NonNegativeInt = 0
    spd: NonNegativeInt = 0
    spe: NonNegativeInt = 0


class NormalizedItem(BaseModel):
    """Creature record in the shared output schema."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    types: Tuple[str, ...] = Field(..., min_length=1)
    abilities: Tuple[str, ...] = ()
    stats: StatBlock = Field(default_factory=StatBlock)
    locations: Tuple[str, ...] = ()
    evolves_to: Optional[Any] = Field(None, alias="evolvesTo")
    evo_method: Optional[str] = Field(None, alias="evoMethod")


class GenerationResult(BaseModel):
    """Cached and returned aggregate for one generation."""

    model_config = ConfigDict(frozen=True)

    title: str
    items: Tuple[NormalizedItem, ...] = ()

    def to_json_bytes(self) -> bytes:
        """Serialize using the public (aliased) field names."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_json_bytes(cls, payload: bytes) -> "GenerationResult":
        """Decode a payload produced by `to_json_bytes` or a static aggregate file."""
        return cls.model_validate_json(payload)
