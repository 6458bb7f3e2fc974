"""Owner-gated, append-only registry of voting power sources."""

import logging
from collections.abc import Iterable
from typing import NamedTuple

from doubloon_powah.core.errors import InvalidAddress, Unauthorized
from doubloon_powah.core.interfaces import FarmInterface, StakingProtocolInterface, VestingGrantInterface
from doubloon_powah.core.models import RegistrySnapshot

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class StakingPointer(NamedTuple):
    """External staking contract plus the pool id that holds the DBL LP."""

    protocol: StakingProtocolInterface
    pool_id: int


class SourceRegistry:
    """
    Ordered lists of farms and vesting grants that count toward voting power.

    Lists only ever grow. Appending the same handle twice counts it twice;
    the owner is trusted not to do that by accident. The staking pointer is
    replaced as a whole, never edited field by field.

    Parameters
    ----------
    owner : str
        Administrative address allowed to mutate the registry
    farms : Iterable[FarmInterface]
        Initial farms
    vesting : Iterable[VestingGrantInterface]
        Initial vesting grants
    staking_protocol : StakingProtocolInterface | None
        External staking contract (e.g. SushiSwap MasterChef)
    staking_pool_id : int
        Pool identifier inside ``staking_protocol``

    """

    def __init__(
        self,
        owner: str,
        farms: Iterable[FarmInterface] = (),
        vesting: Iterable[VestingGrantInterface] = (),
        staking_protocol: StakingProtocolInterface | None = None,
        staking_pool_id: int = 0,
    ) -> None:
        _require_address(owner)
        self._owner = owner
        self._farms: list[FarmInterface] = list(farms)
        self._vesting: list[VestingGrantInterface] = list(vesting)
        self._staking: StakingPointer | None = None
        if staking_protocol is not None:
            self._staking = StakingPointer(staking_protocol, staking_pool_id)

    @property
    def owner(self) -> str:
        """Current administrative address."""
        return self._owner

    @property
    def farms(self) -> tuple[FarmInterface, ...]:
        """Registered farms in insertion order."""
        return tuple(self._farms)

    @property
    def vesting(self) -> tuple[VestingGrantInterface, ...]:
        """Registered vesting grants in insertion order."""
        return tuple(self._vesting)

    @property
    def staking(self) -> StakingPointer | None:
        """Current staking pointer, or None if never configured."""
        return self._staking

    def append_farms(self, caller: str, farms: Iterable[FarmInterface]) -> None:
        """
        Append farms to the registry.

        Parameters
        ----------
        caller : str
            Address making the call; must be the owner
        farms : Iterable[FarmInterface]
            Farms to append, in order

        Raises
        ------
        Unauthorized
            If ``caller`` is not the owner

        """
        self._only_owner(caller)
        new_farms = list(farms)
        self._farms.extend(new_farms)
        logger.info("Appended %d farm(s); %d registered", len(new_farms), len(self._farms))

    def append_vesting(self, caller: str, grants: Iterable[VestingGrantInterface]) -> None:
        """
        Append vesting grants to the registry.

        Parameters
        ----------
        caller : str
            Address making the call; must be the owner
        grants : Iterable[VestingGrantInterface]
            Grants to append, in order

        Raises
        ------
        Unauthorized
            If ``caller`` is not the owner

        """
        self._only_owner(caller)
        new_grants = list(grants)
        self._vesting.extend(new_grants)
        logger.info("Appended %d vesting grant(s); %d registered", len(new_grants), len(self._vesting))

    def set_staking_protocol(self, caller: str, protocol: StakingProtocolInterface, pool_id: int) -> None:
        """
        Replace the external staking contract and its pool id together.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the owner

        """
        self._only_owner(caller)
        self._staking = StakingPointer(protocol, pool_id)
        logger.info("Staking protocol set to %s (pool %d)", getattr(protocol, "address", protocol), pool_id)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """
        Hand the administrative role to another address.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the owner
        InvalidAddress
            If ``new_owner`` is empty or the zero address

        """
        self._only_owner(caller)
        _require_address(new_owner)
        previous, self._owner = self._owner, new_owner
        logger.info("Ownership transferred from %s to %s", previous, new_owner)

    def describe(self) -> RegistrySnapshot:
        """
        Snapshot the tracked addresses.

        Returns
        -------
        RegistrySnapshot
            Owner, farm and vesting addresses, and the staking pointer

        """
        return RegistrySnapshot(
            owner=self._owner,
            farms=[farm.address for farm in self._farms],
            vesting=[grant.address for grant in self._vesting],
            staking_protocol=self._staking.protocol.address if self._staking else None,
            staking_pool_id=self._staking.pool_id if self._staking else None,
        )

    def _only_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise Unauthorized(f"unauthorized: {caller} is not the registry owner")


def _require_address(address: str) -> None:
    if not address or address == ZERO_ADDRESS:
        raise InvalidAddress(f"invalid address: {address!r}")
