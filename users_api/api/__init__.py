"""API Layer — FastAPI routes, dependencies, negotiation and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes translate HandlerOutcome into responses and nothing else

Design Decisions:
    - Thin routes delegate to services.user_handlers
"""
