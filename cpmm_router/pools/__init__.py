"""Pool management package.

Provides PoolRegistry for ingesting and looking up constant product pools.
"""

from .registry import PoolRegistry

__all__ = ["PoolRegistry"]
