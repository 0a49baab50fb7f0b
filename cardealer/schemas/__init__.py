"""Pydantic Schemas: request/response contracts for the REST API.

Invariants:
    - Schemas validate at the system boundary (request binding); services re-validate
    - Wire format is camelCase (dealerId, carIds, ...); snake_case input also accepted
    - Update schemas leave every field optional: "not provided" is exclude_unset,
      never a zero/empty sentinel

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
