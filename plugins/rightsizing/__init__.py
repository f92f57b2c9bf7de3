"""
plugins/rightsizing - Compute Right-Sizing

Recommend a cheaper same-family replacement (one instance or a set of
instances) that still covers the observed CPU/RAM workload at a target
utilization ceiling.

Usage:
    from plugins.rightsizing import RightSizingEngine

    engine = RightSizingEngine()
    outputs = engine.execute(rows)
"""

from .engine import (
    RECOMMENDATION_OPTIMAL,
    Placement,
    RightSizingEngine,
    RightSizingResult,
    format_price_change,
)
from .errors import CollectedError, ErrorCollector
from .search import BestSolution, SearchRequest, SearchState, find_optimal_combination
from .validation import RightSizingInput

__all__ = [
    # Engine
    "RightSizingEngine",
    "RightSizingResult",
    "Placement",
    "RECOMMENDATION_OPTIMAL",
    "format_price_change",
    # Search
    "SearchRequest",
    "SearchState",
    "BestSolution",
    "find_optimal_combination",
    # Input / errors
    "RightSizingInput",
    "ErrorCollector",
    "CollectedError",
]
