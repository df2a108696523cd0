"""Transport-agnostic orchestration layer.

Provides stable entry points consumed by CLI and API adapters.
All functions accept plain Python primitives; no Pydantic, no HTTP
types leak in.
"""
from .workflow import AnnealingWorkflow

__all__ = ["AnnealingWorkflow"]
