"""Staking farms and vesting grants read through an RPC provider."""

from doubloon_powah.core.errors import UpstreamUnavailable
from doubloon_powah.sources.abis import STAKING_REWARDS_ABI, VESTING_ABI
from doubloon_powah.sources.base import BaseChainSource


class StakingRewardsFarm(BaseChainSource):
    """
    Synthetix-style StakingRewards farm paying DBL.

    Only the unclaimed reward counts toward voting power; the staked LP does not.

    """

    kind = "farm"
    abi = STAKING_REWARDS_ABI

    def earned(self, account: str) -> int:
        return self._call_amount("earned", [account])


class ChainVestingGrant(BaseChainSource):
    """Linear vesting contract holding DBL for one recipient."""

    kind = "vesting"
    abi = VESTING_ABI

    def recipient(self) -> str:
        result = self._make_contract_call("recipient")
        if not result:
            raise UpstreamUnavailable(f"{self.kind} {self.address}", "recipient returned no address")
        return str(result)
