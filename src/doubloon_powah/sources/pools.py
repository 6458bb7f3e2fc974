"""Liquidity pool venues and the external LP staking contract."""

from typing import Any

from doubloon_powah.core.errors import UpstreamUnavailable
from doubloon_powah.sources.abis import MASTERCHEF_ABI, PAIR_ABI
from doubloon_powah.sources.base import BaseChainSource


class UniswapV2Pair(BaseChainSource):
    """
    Uniswap V2 compatible pair (Uniswap, SushiSwap) holding a DBL reserve.

    The DBL reserve is read from the DBL token as the pair's balance, not from
    ``getReserves``, so it includes tokens not yet synced into the reserves.

    """

    kind = "pair"
    abi = PAIR_ABI

    def lp_balance_of(self, account: str) -> int:
        return self._call_amount("balanceOf", [account])

    def total_supply(self) -> int:
        return self._call_amount("totalSupply")


class MasterChefStaking(BaseChainSource):
    """SushiSwap MasterChef holding staked LP tokens per pool id."""

    kind = "staking"
    abi = MASTERCHEF_ABI

    def user_info(self, pool_id: int, account: str) -> tuple[Any, ...]:
        """
        Look up a staked position.

        Returns
        -------
        tuple
            ``(amount, reward_debt)`` as integers

        """
        result = self._make_contract_call("userInfo", [pool_id, account])
        try:
            return tuple(int(value) for value in result)
        except (TypeError, ValueError) as e:
            raise UpstreamUnavailable(f"{self.kind} {self.address}", f"userInfo returned {result!r}") from e
