"""
Cargo ERP Core Primitives — Reusable Building Blocks
======================================================

Primitives are the shared, engine-agnostic building blocks that
every rule set consumes. They are:

- Pure Python (no I/O)
- Immutable (frozen dataclasses)
- Deterministic (same input → same output)

Primitives:
    workflow — status transition tables and status-change records
    money    — Decimal amounts, validation and cent rounding
"""
