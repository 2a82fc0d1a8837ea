"""
Data sources for generation rosters.

Two variants share one capability:

- PaginatedApiSource: listing endpoint, then one detail fetch per item
- StaticAggregateSource: one pre-built file holding the whole roster

The fetcher dispatches on the variant instead of duplicating its pipeline.
"""

from typing import Optional, Union

from shared.config import BaseConfig

from ..adapters.transport import HttpTransport
from .paginated_api import PaginatedApiSource
from .static_aggregate import StaticAggregateSource

DataSource = Union[PaginatedApiSource, StaticAggregateSource]


def build_data_source(config: BaseConfig, transport: Optional[HttpTransport] = None) -> DataSource:
    """Build the source selected by `config.data_source`."""
    if transport is None:
        transport = HttpTransport(timeout=config.request_timeout)
    if config.data_source == "static":
        return StaticAggregateSource(config.static_data_root, transport)
    return PaginatedApiSource(transport, config.pokeapi_url)


__all__ = [
    "DataSource",
    "PaginatedApiSource",
    "StaticAggregateSource",
    "build_data_source",
]
