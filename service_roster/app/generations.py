"""
Generation configuration table and resolver.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

from shared.errors import InvalidGenerationKey


class GenerationConfig(BaseModel):
    """Fetch parameters for one supported generation."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Generation key, e.g. 'kanto'")
    title: str = Field(..., description="Title returned with the roster")
    endpoint: str = Field("pokemon", description="Listing resource path on the paginated API")
    item_count: PositiveInt = Field(..., description="Listing `limit`")
    item_offset: NonNegativeInt = Field(0, description="Listing `offset`")
    static_file: str = Field(..., description="Pre-built aggregate filename")


GENERATIONS: Dict[str, GenerationConfig] = {
    config.key: config
    for config in (
        GenerationConfig(
            key="kanto",
            title="Pokémon LeafGreen",
            item_count=151,
            item_offset=0,
            static_file="leafgreen-data.json",
        ),
        GenerationConfig(
            key="johto",
            title="Pokémon Crystal",
            item_count=100,
            item_offset=151,
            static_file="crystal-data.json",
        ),
        GenerationConfig(
            key="hoenn",
            title="Pokémon Emerald",
            item_count=135,
            item_offset=251,
            static_file="emerald-data.json",
        ),
    )
}


def resolve(key: str) -> GenerationConfig:
    """Look up the configuration for a generation key."""
    config = GENERATIONS.get(key)
    if config is None:
        raise InvalidGenerationKey(key, {"available": available_generations()})
    return config


def available_generations() -> List[str]:
    """Configured generation keys in table order."""
    return list(GENERATIONS)
