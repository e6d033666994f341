"""Pydantic models for already-materialized pool input."""

from cpmm_router.models.pool import PoolRecord
from cpmm_router.models.types import Amount, Token

__all__ = ["Amount", "PoolRecord", "Token"]
