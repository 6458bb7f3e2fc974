"""Chain-backed adapters for the contracts that hold voting power."""

from doubloon_powah.sources.base import BaseChainSource
from doubloon_powah.sources.deployment import apply_registry, build_aggregator, build_registry
from doubloon_powah.sources.farm import ChainVestingGrant, StakingRewardsFarm
from doubloon_powah.sources.pools import MasterChefStaking, UniswapV2Pair
from doubloon_powah.sources.token import ChainGovernanceToken

__all__ = [
    "BaseChainSource",
    "ChainGovernanceToken",
    "ChainVestingGrant",
    "MasterChefStaking",
    "StakingRewardsFarm",
    "UniswapV2Pair",
    "apply_registry",
    "build_aggregator",
    "build_registry",
]
