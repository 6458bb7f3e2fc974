"""Build a registry and aggregator from a deployment configuration."""

from typing import Any

from doubloon_powah.core.aggregator import VotingPowerAggregator
from doubloon_powah.core.registry import SourceRegistry
from doubloon_powah.data.config import DeploymentConfig
from doubloon_powah.sources.farm import ChainVestingGrant, StakingRewardsFarm
from doubloon_powah.sources.pools import MasterChefStaking, UniswapV2Pair
from doubloon_powah.sources.token import ChainGovernanceToken


def build_registry(
    config: DeploymentConfig,
    rpc_provider: Any | None = None,
    block_id: int | None = None,
) -> SourceRegistry:
    """
    Create a source registry holding chain adapters for every configured source.

    Parameters
    ----------
    config : DeploymentConfig
        Deployment addresses
    rpc_provider : Any | None
        Connected provider; may be None when only administering the registry
    block_id : int | None
        Block every adapter reads at

    Returns
    -------
    SourceRegistry
        Registry owned by ``config.owner``

    """
    staking = None
    if config.staking_protocol:
        staking = MasterChefStaking(config.staking_protocol, rpc_provider, block_id)

    return SourceRegistry(
        owner=config.owner,
        farms=[StakingRewardsFarm(address, rpc_provider, block_id) for address in config.farms],
        vesting=[ChainVestingGrant(address, rpc_provider, block_id) for address in config.vesting],
        staking_protocol=staking,
        staking_pool_id=config.staking_pool_id or 0,
    )


def build_aggregator(
    config: DeploymentConfig,
    rpc_provider: Any,
    block_id: int | None = None,
) -> VotingPowerAggregator:
    """
    Create an aggregator reading every source at one block.

    Parameters
    ----------
    config : DeploymentConfig
        Deployment addresses
    rpc_provider : Any
        Connected provider
    block_id : int | None
        Block to pin all reads to; latest if None

    Returns
    -------
    VotingPowerAggregator
        Aggregator over the configured token, pools and registry

    """
    return VotingPowerAggregator(
        token=ChainGovernanceToken(config.dbl_token, rpc_provider, block_id),
        registry=build_registry(config, rpc_provider, block_id),
        venue_a=UniswapV2Pair(config.uniswap_pair, rpc_provider, block_id),
        venue_b=UniswapV2Pair(config.sushiswap_pair, rpc_provider, block_id),
    )


def apply_registry(config: DeploymentConfig, registry: SourceRegistry) -> DeploymentConfig:
    """
    Copy a registry's current state back into a configuration.

    Returns
    -------
    DeploymentConfig
        ``config`` with owner, farms, vesting and staking pointer replaced

    """
    snapshot = registry.describe()
    return config.model_copy(
        update={
            "owner": snapshot.owner,
            "farms": snapshot.farms,
            "vesting": snapshot.vesting,
            "staking_protocol": snapshot.staking_protocol,
            "staking_pool_id": snapshot.staking_pool_id,
        }
    )
