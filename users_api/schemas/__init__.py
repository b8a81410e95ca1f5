"""Pydantic Schemas — wire representations of the user resource.

Invariants:
    - Schemas describe shape only; domain rules (login format) live in core/validation.py
    - Wire names are camelCase, Python attributes snake_case

Design Decisions:
    - Separate from core.user_record: schemas are API contracts, the record is storage
"""
