"""
Search modules.
"""
from .query_engine import QueryEngine, render_results

__all__ = ["QueryEngine", "render_results"]
