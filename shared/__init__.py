"""
Shared utilities for the Generation Roster service.

This package aggregates common building blocks consumed by the roster
service and its scripts:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses
- base_service: FastAPI application scaffolding

Do not import from service_* packages into shared/.
"""
