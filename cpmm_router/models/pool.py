"""Pydantic model for a constant product pool record."""

from pydantic import BaseModel, ConfigDict, Field

from cpmm_router.models.types import Amount, Token


class PoolRecord(BaseModel):
    """One constant product pool as handed over by the loading layer.

    Semantic checks that depend on more than one field (self-paired tokens,
    empty reserves, duplicate addresses) are done by the PoolRegistry so they
    surface as InvalidPool rather than a pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: str | None = Field(
        default=None,
        description="Pool identifier. Assigned from the record index when missing.",
    )
    token0: Token
    token1: Token
    reserve0: Amount
    reserve1: Amount
    fee_bps: int | None = Field(
        default=None,
        alias="feeBps",
        ge=0,
        lt=10_000,
        description="Input fee in basis points. Router default when missing.",
    )
