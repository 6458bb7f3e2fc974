"""Tests for chain-backed source adapters using a fake RPC provider."""

import pytest
from fakes import ALICE, BOB, FakeContract, FakeRPCProvider, ether
from eth_utils import to_checksum_address

from doubloon_powah.core import UpstreamUnavailable
from doubloon_powah.data import DeploymentConfig
from doubloon_powah.sources import (
    BaseChainSource,
    ChainGovernanceToken,
    ChainVestingGrant,
    MasterChefStaking,
    StakingRewardsFarm,
    UniswapV2Pair,
    apply_registry,
    build_aggregator,
    build_registry,
)
from doubloon_powah.sources.abis import ERC20_ABI

TOKEN = to_checksum_address("0x" + "d8" * 20)
UNI = to_checksum_address("0x" + "a1" * 20)
SUSHI = to_checksum_address("0x" + "b2" * 20)
CHEF = to_checksum_address("0x" + "c3" * 20)
FARM = to_checksum_address("0x" + "f4" * 20)
GRANT = to_checksum_address("0x" + "e5" * 20)
OWNER = to_checksum_address("0x" + "0a" * 20)
HOLDER = to_checksum_address("0x" + "11" * 20)


def test_source_requires_kind():
    class Nameless(BaseChainSource):
        pass

    with pytest.raises(ValueError, match="kind"):
        Nameless(TOKEN)


def test_call_without_provider_fails():
    with pytest.raises(RuntimeError, match="RPC provider not configured"):
        ChainGovernanceToken(TOKEN).balance_of(ALICE)


def test_token_reads_with_abi():
    contract = FakeContract({"balanceOf": lambda account: 42 if account == ALICE else 0, "totalSupply": 1000})
    provider = FakeRPCProvider({TOKEN: contract})
    token = ChainGovernanceToken(TOKEN, provider)

    assert token.balance_of(ALICE) == 42
    assert token.balance_of(BOB) == 0
    assert token.total_supply() == 1000
    assert provider.requested == [(TOKEN, ERC20_ABI)]


def test_reads_are_pinned_to_block():
    contract = FakeContract({"earned": 5})
    farm = StakingRewardsFarm(FARM, FakeRPCProvider({FARM: contract}), block_id=19_000_000)

    farm.earned(ALICE)

    assert contract.calls == [("earned", (ALICE,), {"block_id": 19_000_000})]


def test_reads_at_latest_without_block():
    contract = FakeContract({"earned": 5})
    farm = StakingRewardsFarm(FARM, FakeRPCProvider({FARM: contract}))

    farm.earned(ALICE)

    assert contract.calls == [("earned", (ALICE,), {})]


def test_reverted_call_is_upstream_unavailable():
    contract = FakeContract({"earned": RuntimeError("execution reverted")})
    farm = StakingRewardsFarm(FARM, FakeRPCProvider({FARM: contract}))

    with pytest.raises(UpstreamUnavailable, match="execution reverted") as exc_info:
        farm.earned(ALICE)

    assert exc_info.value.source == f"farm {FARM}"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_malformed_amount_is_upstream_unavailable():
    contract = FakeContract({"totalSupply": None})
    pair = UniswapV2Pair(UNI, FakeRPCProvider({UNI: contract}))

    with pytest.raises(UpstreamUnavailable, match="totalSupply returned None"):
        pair.total_supply()


def test_vesting_recipient():
    contract = FakeContract({"recipient": HOLDER})
    grant = ChainVestingGrant(GRANT, FakeRPCProvider({GRANT: contract}))

    assert grant.recipient() == HOLDER


def test_vesting_without_recipient_is_upstream_unavailable():
    contract = FakeContract({"recipient": None})
    grant = ChainVestingGrant(GRANT, FakeRPCProvider({GRANT: contract}))

    with pytest.raises(UpstreamUnavailable, match="no address"):
        grant.recipient()


def test_masterchef_user_info():
    contract = FakeContract({"userInfo": lambda pid, user: (ether(3), 17) if pid == 2 else (0, 0)})
    chef = MasterChefStaking(CHEF, FakeRPCProvider({CHEF: contract}))

    assert chef.user_info(2, ALICE) == (ether(3), 17)
    assert chef.user_info(1, ALICE) == (0, 0)


def test_masterchef_malformed_user_info():
    contract = FakeContract({"userInfo": None})
    chef = MasterChefStaking(CHEF, FakeRPCProvider({CHEF: contract}))

    with pytest.raises(UpstreamUnavailable, match="userInfo returned None"):
        chef.user_info(2, ALICE)


@pytest.fixture
def config():
    return DeploymentConfig(
        dbl_token=TOKEN,
        uniswap_pair=UNI,
        sushiswap_pair=SUSHI,
        owner=OWNER,
        farms=[FARM],
        vesting=[GRANT],
        staking_protocol=CHEF,
        staking_pool_id=2,
    )


def test_build_aggregator_end_to_end(config):
    balances = {HOLDER: ether(10), GRANT: ether(20), UNI: ether(30), SUSHI: ether(40)}
    provider = FakeRPCProvider(
        {
            TOKEN: FakeContract({"balanceOf": lambda account: balances.get(account, 0)}),
            UNI: FakeContract({"balanceOf": lambda account: ether(10), "totalSupply": ether(100)}),
            SUSHI: FakeContract({"balanceOf": lambda account: 0, "totalSupply": ether(80)}),
            CHEF: FakeContract({"userInfo": lambda pid, user: (ether(8), 0)}),
            FARM: FakeContract({"earned": ether(5)}),
            GRANT: FakeContract({"recipient": HOLDER}),
        }
    )

    aggregator = build_aggregator(config, provider, block_id=123)
    breakdown = aggregator.breakdown(HOLDER)

    assert breakdown.direct == ether(10)
    assert breakdown.farms == ether(5)
    assert breakdown.vesting == ether(20)
    assert breakdown.venue_a == ether(3)
    assert breakdown.venue_b == 0
    assert breakdown.staked == ether(4)
    assert breakdown.total == ether(42)
    assert all(call[2] == {"block_id": 123} for call in provider.contracts[TOKEN].calls)


def test_build_registry_without_provider(config):
    registry = build_registry(config)

    assert registry.owner == OWNER
    assert [farm.address for farm in registry.farms] == [FARM]
    assert [grant.address for grant in registry.vesting] == [GRANT]
    assert registry.staking.protocol.address == CHEF
    assert registry.staking.pool_id == 2


def test_apply_registry_round_trips_mutations(config):
    registry = build_registry(config)
    registry.append_farms(OWNER, [StakingRewardsFarm(FARM)])
    registry.transfer_ownership(OWNER, HOLDER)

    updated = apply_registry(config, registry)

    assert updated.farms == [FARM, FARM]
    assert updated.owner == HOLDER
    assert updated.dbl_token == TOKEN
    assert config.farms == [FARM]
