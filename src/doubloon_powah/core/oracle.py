"""Proportional claim of an LP position on one reserve asset of a pool."""


def share_of(holder_pool_balance: int, pool_reserve: int, pool_total_supply: int) -> int:
    """
    Compute a holder's share of a pool reserve.

    Parameters
    ----------
    holder_pool_balance : int
        LP tokens held (or staked) by the holder
    pool_reserve : int
        Pool's balance of the tracked asset
    pool_total_supply : int
        Total LP token supply of the pool

    Returns
    -------
    int
        ``floor(pool_reserve * holder_pool_balance / pool_total_supply)``, or 0
        for a pool with no LP supply

    Examples
    --------
    >>> share_of(25, 1000, 100)
    250
    >>> share_of(25, 1000, 0)
    0

    """
    if pool_total_supply == 0:
        return 0
    return pool_reserve * holder_pool_balance // pool_total_supply
