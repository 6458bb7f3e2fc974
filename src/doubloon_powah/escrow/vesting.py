"""Linear vesting grant with a cliff, releasing DBL to a single recipient."""

import logging

from doubloon_powah.core.errors import InvalidSchedule, Unauthorized, VestingNotStarted
from doubloon_powah.core.models import VestingSchedule
from doubloon_powah.escrow.ledger import Ledger

logger = logging.getLogger(__name__)


class VestingGrant:
    """
    Holds a fixed amount of a token and releases it linearly to one recipient.

    Nothing is claimable before the cliff. Between cliff and end the claimable
    amount grows linearly from ``vesting_begin``; at or after the end the whole
    remaining balance is released. Whatever the grant still holds counts
    toward the recipient's voting power.

    Parameters
    ----------
    ledger : Ledger
        Ledger holding the token
    address : str
        Address of this grant
    token : str
        Address of the vested token
    recipient : str
        Initial recipient
    vesting_amount : int
        Amount the schedule releases over ``vesting_begin``..``vesting_end``
    vesting_begin : int
        Start timestamp; must not be in the past
    vesting_cliff : int
        First timestamp at which claims succeed
    vesting_end : int
        Timestamp at which everything is claimable

    """

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        token: str,
        recipient: str,
        vesting_amount: int,
        vesting_begin: int,
        vesting_cliff: int,
        vesting_end: int,
    ) -> None:
        if vesting_begin < ledger.timestamp:
            raise InvalidSchedule("invalid vesting schedule: vesting begin too early")
        if vesting_cliff < vesting_begin:
            raise InvalidSchedule("invalid vesting schedule: cliff is too early")
        if vesting_end <= vesting_cliff:
            raise InvalidSchedule("invalid vesting schedule: end is too early")

        self.ledger = ledger
        self.address = address
        self.token = token
        self.schedule = VestingSchedule(
            vesting_amount=vesting_amount,
            vesting_begin=vesting_begin,
            vesting_cliff=vesting_cliff,
            vesting_end=vesting_end,
        )
        self.last_update = vesting_begin
        self._recipient = recipient

    def recipient(self) -> str:
        return self._recipient

    def balance_held(self) -> int:
        """Tokens still custodied by the grant."""
        return self.ledger.token(self.token).balance_of(self.address)

    def set_recipient(self, caller: str, new_recipient: str) -> None:
        """
        Redirect future claims.

        Raises
        ------
        Unauthorized
            If ``caller`` is not the current recipient

        """
        if caller != self._recipient:
            raise Unauthorized(f"unauthorized: {caller} is not the vesting recipient")
        self._recipient = new_recipient

    def claimable(self) -> int:
        """
        Amount ``claim()`` would release at the ledger's current timestamp.

        Returns
        -------
        int
            Releasable amount, 0 before the cliff

        """
        now = self.ledger.timestamp
        schedule = self.schedule
        if now < schedule.vesting_cliff:
            return 0
        if now >= schedule.vesting_end:
            return self.balance_held()
        elapsed = now - self.last_update
        return schedule.vesting_amount * elapsed // (schedule.vesting_end - schedule.vesting_begin)

    def claim(self) -> int:
        """
        Release vested tokens to the recipient.

        Returns
        -------
        int
            Amount transferred

        Raises
        ------
        VestingNotStarted
            If called before the cliff

        """
        now = self.ledger.timestamp
        if now < self.schedule.vesting_cliff:
            raise VestingNotStarted()

        amount = self.claimable()
        self.ledger.token(self.token).transfer(self.address, self._recipient, amount)
        if now < self.schedule.vesting_end:
            self.last_update = now

        logger.debug("Vesting %s released %d to %s", self.address, amount, self._recipient)
        return amount
