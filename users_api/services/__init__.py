"""Services Layer — orchestration between validation, mapping and storage.

Invariants:
    - Services never touch HTTP objects (Request/Response)
    - Expected failures come back as outcome values, not exceptions

Design Decisions:
    - Thin routes delegate here: the decision logic is testable without a client
"""
