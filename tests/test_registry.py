"""Tests for the source registry."""

import pytest
from fakes import ALICE, BOB, OWNER, POOL_ID, FakeFarm, FakeMasterChef, FakeVesting, address

from doubloon_powah.core import ZERO_ADDRESS, InvalidAddress, SourceRegistry, Unauthorized


def test_append_farms_keeps_order():
    registry = SourceRegistry(owner=OWNER)
    first, second, third = FakeFarm(address(1)), FakeFarm(address(2)), FakeFarm(address(3))

    registry.append_farms(OWNER, [first, second])
    registry.append_farms(OWNER, [third])

    assert registry.farms == (first, second, third)


def test_append_same_farm_twice_keeps_both():
    registry = SourceRegistry(owner=OWNER)
    farm = FakeFarm(address(1))

    registry.append_farms(OWNER, [farm])
    registry.append_farms(OWNER, [farm])

    assert registry.farms == (farm, farm)


def test_append_vesting_keeps_order():
    registry = SourceRegistry(owner=OWNER, vesting=[FakeVesting(address(1), ALICE)])
    grant = FakeVesting(address(2), BOB)

    registry.append_vesting(OWNER, [grant])

    assert [g.address for g in registry.vesting] == [address(1), address(2)]


def test_views_cannot_mutate_registry():
    registry = SourceRegistry(owner=OWNER, farms=[FakeFarm(address(1))])

    assert isinstance(registry.farms, tuple)
    assert isinstance(registry.vesting, tuple)
    assert not hasattr(registry, "remove_farm")


@pytest.mark.parametrize(
    "mutate",
    [
        lambda r: r.append_farms(ALICE, [FakeFarm(address(9))]),
        lambda r: r.append_vesting(ALICE, [FakeVesting(address(9), ALICE)]),
        lambda r: r.set_staking_protocol(ALICE, FakeMasterChef(address(9)), 1),
        lambda r: r.transfer_ownership(ALICE, ALICE),
    ],
)
def test_non_owner_is_rejected_without_state_change(mutate):
    masterchef = FakeMasterChef(address(5))
    registry = SourceRegistry(
        owner=OWNER,
        farms=[FakeFarm(address(1))],
        vesting=[FakeVesting(address(2), BOB)],
        staking_protocol=masterchef,
        staking_pool_id=POOL_ID,
    )
    before = registry.describe()

    with pytest.raises(Unauthorized) as exc_info:
        mutate(registry)

    assert exc_info.value.reason == "unauthorized"
    assert registry.describe() == before


def test_set_staking_protocol_replaces_pointer():
    old, new = FakeMasterChef(address(5)), FakeMasterChef(address(6))
    registry = SourceRegistry(owner=OWNER, staking_protocol=old, staking_pool_id=1)

    registry.set_staking_protocol(OWNER, new, 42)

    assert registry.staking.protocol is new
    assert registry.staking.pool_id == 42


def test_staking_pointer_defaults_to_none():
    assert SourceRegistry(owner=OWNER).staking is None


def test_transfer_ownership():
    registry = SourceRegistry(owner=OWNER)

    registry.transfer_ownership(OWNER, ALICE)

    assert registry.owner == ALICE
    with pytest.raises(Unauthorized):
        registry.append_farms(OWNER, [FakeFarm(address(1))])
    registry.append_farms(ALICE, [FakeFarm(address(1))])
    assert len(registry.farms) == 1


@pytest.mark.parametrize("new_owner", ["", ZERO_ADDRESS])
def test_transfer_ownership_rejects_invalid_owner(new_owner):
    registry = SourceRegistry(owner=OWNER)

    with pytest.raises(InvalidAddress):
        registry.transfer_ownership(OWNER, new_owner)

    assert registry.owner == OWNER


def test_describe():
    registry = SourceRegistry(
        owner=OWNER,
        farms=[FakeFarm(address(1)), FakeFarm(address(1))],
        vesting=[FakeVesting(address(2), BOB)],
        staking_protocol=FakeMasterChef(address(5)),
        staking_pool_id=POOL_ID,
    )

    snapshot = registry.describe()

    assert snapshot.owner == OWNER
    assert snapshot.farms == [address(1), address(1)]
    assert snapshot.vesting == [address(2)]
    assert snapshot.staking_protocol == address(5)
    assert snapshot.staking_pool_id == POOL_ID
