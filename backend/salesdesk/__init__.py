"""SalesDesk Application Package: sales page builder and checkout backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
