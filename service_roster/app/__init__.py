"""
Roster Service package for the Generation Roster project.

This package resolves a generation key to a normalized roster of
creature records. It provides:

- app.fetcher: Cache gate plus the fetch-and-normalize pipeline.
- app.generations: Supported generation keys and their fetch parameters.
- app.sources: Paginated API and pre-built aggregate data sources.
- app.normalize: Mapping of upstream records onto the shared schema.
- app.cache: Key-value backed cache of normalized results.
- app.main: HTTP surface for roster lookups and health.

Guidelines:
- A cached generation is valid for the lifetime of its store.
- A single failing item never fails its generation.
- Nothing is retried; callers re-invoke to retry.
"""
