"""DBL voting power: wallet, farm, vesting and liquidity pool holdings summed per address."""

__version__ = "0.1.0"
