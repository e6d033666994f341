"""Router error classes.

Ingestion and query errors are raised before any search begins. Traversal
conditions (EmptyReserves on a pool met during the search) are recovered by
pruning the edge and never abort a quote.
"""


class RouterError(Exception):
    """Base error for pool and routing operations."""

    pass


class InvalidToken(RouterError, ValueError):
    """Token is not one of the two tokens traded by the pool."""

    pass


class InvalidPool(RouterError, ValueError):
    """Pool was rejected at ingestion (self-paired, bad reserves, duplicate id)."""

    pass


class InvalidQuery(RouterError, ValueError):
    """Query was rejected before search (equal tokens, bad input amount)."""

    pass


class EmptyReserves(RouterError):
    """Pool has a zero reserve and cannot be traded through."""

    pass


class PoolInvariantError(RouterError, ArithmeticError):
    """Swap math produced a result that breaks the constant product invariant."""

    pass
