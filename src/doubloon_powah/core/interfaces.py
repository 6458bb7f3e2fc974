"""Capability interfaces for the upstream contracts read by the aggregator."""

from typing import Any, Protocol


class GovernanceTokenInterface(Protocol):
    """
    Read surface of the governance token (DBL).

    Methods
    -------
    balance_of(account)
        Token balance of an address (wallet, vesting grant or pool)
    total_supply()
        Total token supply

    """

    def balance_of(self, account: str) -> int:
        """
        Get token balance of an address.

        Parameters
        ----------
        account : str
            Holder address

        Returns
        -------
        int
            Raw balance

        """
        ...

    def total_supply(self) -> int:
        """Get total token supply."""
        ...


class FarmInterface(Protocol):
    """
    A staking farm accruing DBL rewards.

    Attributes
    ----------
    address : str
        Farm contract address

    """

    address: str

    def earned(self, account: str) -> int:
        """Unclaimed reward accrued to ``account``."""
        ...


class VestingGrantInterface(Protocol):
    """
    A single-recipient vesting contract custodying DBL.

    The locked balance is not read from the grant itself; the aggregator asks
    the governance token for the balance held at ``address``.

    Attributes
    ----------
    address : str
        Vesting contract address

    """

    address: str

    def recipient(self) -> str:
        """Current recipient of the grant."""
        ...


class PoolVenueInterface(Protocol):
    """
    A two-asset liquidity pool paired against DBL.

    Attributes
    ----------
    address : str
        Pair contract address (also the holder of the DBL reserve)

    """

    address: str

    def lp_balance_of(self, account: str) -> int:
        """LP tokens held directly by ``account``."""
        ...

    def total_supply(self) -> int:
        """Total LP token supply of the pool."""
        ...


class StakingProtocolInterface(Protocol):
    """
    External yield contract holding staked LP tokens (MasterChef-style).

    Attributes
    ----------
    address : str
        Staking contract address

    """

    address: str

    def user_info(self, pool_id: int, account: str) -> tuple[Any, ...]:
        """
        Look up a staked position.

        Parameters
        ----------
        pool_id : int
            Pool identifier inside the staking contract
        account : str
            Staker address

        Returns
        -------
        tuple
            ``(amount, ...)`` where ``amount`` is the staked LP balance

        """
        ...
