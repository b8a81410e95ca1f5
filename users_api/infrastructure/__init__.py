"""Infrastructure Layer — storage implementation and cross-cutting concerns.

Invariants:
    - Infrastructure implements core protocols; core never imports infrastructure

Design Decisions:
    - Concrete adapters live here so handlers depend only on core.repository_protocols
"""
