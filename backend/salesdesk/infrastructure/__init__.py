"""Infrastructure Layer: stores, payment gateway, database and logging.

Invariants:
    - Stores implement the protocols in core/repository_protocols.py
    - External calls (payment) are bounded by the caller's timeout
"""
