"""Services Layer: async orchestration of core operations over injected stores.

Invariants:
    - Services hold no global state; stores are passed to the constructor
    - Pure decisions are delegated to core/; services only load, call, save
"""
