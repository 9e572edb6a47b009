"""Core Layer - pure key validation logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - Filters and modifiers are pure functions of (context, keys)

Design Decisions:
    - Functional core separated from imperative shell: the pipeline never
      stores keys itself, services/ hands the result to persistence
"""
