"""
ToyKV Engine
============
Public API for the transactional core.

Usage:
    from engine import MutationEngine

    engine = MutationEngine(index_kind="names")
    engine.set("a", "1")
"""

from engine.mutation_engine import MutationEngine, EngineSnapshot

__all__ = ["MutationEngine", "EngineSnapshot"]
