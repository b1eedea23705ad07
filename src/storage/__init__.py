"""
Storage Package - Local JSON persistence.

    - CoordinateStore: last calculated waypoint list
    - ExplanationCache: generated explanations with a time to live
"""

from .coordinate_store import CoordinateStore
from .explanation_cache import ExplanationCache, build_cache_key, DEFAULT_TTL_SECONDS

__all__ = [
    "CoordinateStore",
    "ExplanationCache",
    "build_cache_key",
    "DEFAULT_TTL_SECONDS",
]
