"""Voting power aggregator summing DBL held across wallets, farms, vesting grants and pools."""

import logging
from collections.abc import Callable
from typing import Any

from doubloon_powah.core.errors import UpstreamUnavailable
from doubloon_powah.core.interfaces import GovernanceTokenInterface, PoolVenueInterface
from doubloon_powah.core.models import TokenMetadata, VotingPowerBreakdown
from doubloon_powah.core.oracle import share_of
from doubloon_powah.core.registry import SourceRegistry

logger = logging.getLogger(__name__)


class VotingPowerAggregator:
    """
    Computes the DBL voting power ("powah") of an address.

    Voting power is the sum of:
    1. DBL held directly
    2. Unclaimed DBL in every registered farm
    3. DBL custodied by every registered vesting grant whose recipient is the account
    4. The account's share of the DBL reserve in venue A and venue B
    5. The share of venue B's DBL reserve backing LP staked in the external protocol

    Every read is unguarded: the first failing source aborts the whole query
    with ``UpstreamUnavailable``. Nothing is cached between queries.

    Parameters
    ----------
    token : GovernanceTokenInterface
        The DBL token
    registry : SourceRegistry
        Farms, vesting grants and the staking pointer
    venue_a : PoolVenueInterface
        First DBL pool (Uniswap pair)
    venue_b : PoolVenueInterface
        Second DBL pool (SushiSwap pair); also prices the staked LP

    """

    name_: str = "DBL Powah"
    symbol_: str = "DBLPOWAH"
    decimals_: int = 18

    def __init__(
        self,
        token: GovernanceTokenInterface,
        registry: SourceRegistry,
        venue_a: PoolVenueInterface,
        venue_b: PoolVenueInterface,
    ) -> None:
        self.token = token
        self.registry = registry
        self.venue_a = venue_a
        self.venue_b = venue_b

    def balance_of(self, account: str) -> int:
        """
        Get voting power of an account.

        Parameters
        ----------
        account : str
            Address to query (compared exactly against vesting recipients)

        Returns
        -------
        int
            Voting power in DBL base units

        Raises
        ------
        UpstreamUnavailable
            If any source fails or returns malformed data

        """
        return self.breakdown(account).total

    def breakdown(self, account: str) -> VotingPowerBreakdown:
        """
        Get voting power of an account split by source.

        Parameters
        ----------
        account : str
            Address to query

        Returns
        -------
        VotingPowerBreakdown
            Individual terms and their total

        """
        direct = self._amount("token", self.token.balance_of, account)
        farms = self._farm_votes(account)
        vesting = self._vesting_votes(account)

        venue_a = self._dex_votes("venue_a", self.venue_a, account)

        # Staked LP is priced against venue B, so its reserve and supply are read once for both terms
        reserve_b = self._amount("venue_b", self.token.balance_of, self.venue_b.address)
        supply_b = self._amount("venue_b", self.venue_b.total_supply)
        lp_b = self._amount("venue_b", self.venue_b.lp_balance_of, account)
        venue_b = share_of(lp_b, reserve_b, supply_b)
        staked = share_of(self._staked_lp(account), reserve_b, supply_b)

        total = direct + farms + vesting + venue_a + venue_b + staked
        logger.debug(
            "Powah for %s: direct=%d farms=%d vesting=%d venue_a=%d venue_b=%d staked=%d total=%d",
            account,
            direct,
            farms,
            vesting,
            venue_a,
            venue_b,
            staked,
            total,
        )

        return VotingPowerBreakdown(
            account=account,
            direct=direct,
            farms=farms,
            vesting=vesting,
            venue_a=venue_a,
            venue_b=venue_b,
            staked=staked,
            total=total,
        )

    def _farm_votes(self, account: str) -> int:
        total = 0
        for i, farm in enumerate(self.registry.farms):
            total += self._amount(f"farm[{i}]", farm.earned, account)
        return total

    def _vesting_votes(self, account: str) -> int:
        total = 0
        for i, grant in enumerate(self.registry.vesting):
            source = f"vesting[{i}]"
            recipient = self._read(source, grant.recipient)
            if not isinstance(recipient, str):
                raise UpstreamUnavailable(source, f"malformed recipient {recipient!r}")
            if recipient == account:
                total += self._amount(source, self.token.balance_of, grant.address)
        return total

    def _dex_votes(self, source: str, venue: PoolVenueInterface, account: str) -> int:
        lp_balance = self._amount(source, venue.lp_balance_of, account)
        reserve = self._amount(source, self.token.balance_of, venue.address)
        supply = self._amount(source, venue.total_supply)
        return share_of(lp_balance, reserve, supply)

    def _staked_lp(self, account: str) -> int:
        pointer = self.registry.staking
        if pointer is None:
            return 0

        info = self._read("staking", pointer.protocol.user_info, pointer.pool_id, account)
        if not isinstance(info, tuple | list) or not info:
            raise UpstreamUnavailable("staking", f"malformed user info {info!r}")
        return _check_amount("staking", info[0])

    def _read(self, source: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return func(*args)
        except UpstreamUnavailable:
            raise
        except Exception as e:
            raise UpstreamUnavailable(source, str(e)) from e

    def _amount(self, source: str, func: Callable[..., Any], *args: Any) -> int:
        return _check_amount(source, self._read(source, func, *args))

    # Read-only ERC-20 surface. Voting power cannot be moved, so mutators are inert.

    def name(self) -> str:
        """Token name."""
        return self.name_

    def symbol(self) -> str:
        """Token symbol."""
        return self.symbol_

    def decimals(self) -> int:
        """Token decimals, matching DBL."""
        return self.decimals_

    def total_supply(self) -> int:
        """Total supply mirrored from the DBL token."""
        return self._amount("token", self.token.total_supply)

    def metadata(self) -> TokenMetadata:
        """
        Get token metadata.

        Returns
        -------
        TokenMetadata
            Name, symbol, decimals and mirrored total supply

        """
        return TokenMetadata(
            name=self.name(),
            symbol=self.symbol(),
            decimals=self.decimals(),
            total_supply=self.total_supply(),
        )

    def allowance(self, owner: str, spender: str) -> int:
        """Always 0; voting power cannot be approved."""
        return 0

    def transfer(self, recipient: str, amount: int) -> bool:
        """Disabled; always returns False."""
        return False

    def approve(self, spender: str, amount: int) -> bool:
        """Disabled; always returns False."""
        return False

    def transfer_from(self, sender: str, recipient: str, amount: int) -> bool:
        """Disabled; always returns False."""
        return False


def _check_amount(source: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise UpstreamUnavailable(source, f"malformed amount {value!r}")
    return value
