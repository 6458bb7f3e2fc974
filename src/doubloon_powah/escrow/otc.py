"""One-time OTC swap of USDC for DBL, paid out through a new vesting grant."""

import logging

from doubloon_powah.core.errors import AlreadyExecuted, InsufficientBalance, Unauthorized
from doubloon_powah.core.models import EscrowTerms
from doubloon_powah.escrow.ledger import Ledger
from doubloon_powah.escrow.vesting import VestingGrant

logger = logging.getLogger(__name__)


class OtcEscrow:
    """
    Escrow for a pre-negotiated sale of DBL to a single buyer.

    DBL governance deposits ``dbl_amount`` DBL into the escrow and the buyer
    approves ``usdc_amount`` USDC for it. ``swap`` then pulls the USDC, deploys
    a vesting grant for the buyer holding the DBL and pays the USDC to
    governance. Until a swap happens, governance can take its DBL back with
    ``revoke``; after it, ``revoke`` sweeps any surplus.

    Parameters
    ----------
    ledger : Ledger
        Ledger holding both tokens
    address : str
        Address of this escrow
    beneficiary : str
        Buyer
    dbl_gov : str
        Seller-side governance address
    vesting_start : int
        Begin timestamp of the grant created on swap
    vesting_cliff : int
        Cliff timestamp of the grant created on swap
    vesting_end : int
        End timestamp of the grant created on swap
    usdc_amount : int
        USDC paid by the buyer
    dbl_amount : int
        DBL sold to the buyer
    usdc : str
        USDC token address
    dbl : str
        DBL token address

    """

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        beneficiary: str,
        dbl_gov: str,
        vesting_start: int,
        vesting_cliff: int,
        vesting_end: int,
        usdc_amount: int,
        dbl_amount: int,
        usdc: str,
        dbl: str,
    ) -> None:
        self.ledger = ledger
        self.address = address
        self.terms = EscrowTerms(
            beneficiary=beneficiary,
            dbl_gov=dbl_gov,
            vesting_start=vesting_start,
            vesting_cliff=vesting_cliff,
            vesting_end=vesting_end,
            usdc_amount=usdc_amount,
            dbl_amount=dbl_amount,
            usdc=usdc,
            dbl=dbl,
        )
        self.vesting: VestingGrant | None = None
        self._has_swapped = False

    @property
    def has_swapped(self) -> bool:
        return self._has_swapped

    def swap(self, caller: str) -> VestingGrant:
        """
        Execute the sale.

        Parameters
        ----------
        caller : str
            Address executing the sale; anyone may call

        Returns
        -------
        VestingGrant
            Newly deployed grant holding ``dbl_amount`` for the beneficiary

        Raises
        ------
        AlreadyExecuted
            If the swap already ran
        InsufficientBalance
            If the escrow holds less than ``dbl_amount`` DBL, or the buyer
            holds less than ``usdc_amount`` USDC
        InsufficientAllowance
            If the buyer approved less than ``usdc_amount`` USDC

        """
        if self._has_swapped:
            raise AlreadyExecuted()

        terms = self.terms
        dbl = self.ledger.token(terms.dbl)
        usdc = self.ledger.token(terms.usdc)
        if dbl.balance_of(self.address) < terms.dbl_amount:
            raise InsufficientBalance("insufficient DBL")

        with self.ledger.atomic():
            usdc.transfer_from(self.address, terms.beneficiary, self.address, terms.usdc_amount)

            vesting = VestingGrant(
                self.ledger,
                self.ledger.derive_address(self.address),
                token=terms.dbl,
                recipient=terms.beneficiary,
                vesting_amount=terms.dbl_amount,
                vesting_begin=terms.vesting_start,
                vesting_cliff=terms.vesting_cliff,
                vesting_end=terms.vesting_end,
            )
            dbl.transfer(self.address, vesting.address, terms.dbl_amount)
            usdc.transfer(self.address, terms.dbl_gov, terms.usdc_amount)
            self.ledger.emit("VestingDeployed", vesting=vesting.address)

        self._has_swapped = True
        self.vesting = vesting
        logger.info("Escrow %s swapped by %s; vesting deployed at %s", self.address, caller, vesting.address)
        return vesting

    def revoke(self, caller: str) -> int:
        """
        Return all DBL held by the escrow to governance.

        Returns
        -------
        int
            Amount returned

        Raises
        ------
        Unauthorized
            If ``caller`` is not DBL governance

        """
        if caller != self.terms.dbl_gov:
            raise Unauthorized(f"unauthorized: {caller} is not DBL governance")

        dbl = self.ledger.token(self.terms.dbl)
        amount = dbl.balance_of(self.address)
        dbl.transfer(self.address, self.terms.dbl_gov, amount)
        logger.info("Escrow %s revoked; %d DBL returned", self.address, amount)
        return amount

    def recover_usdc(self, caller: str) -> int:
        """
        Send any USDC held by the escrow back to the beneficiary.

        Anyone may call this; funds can only go to the beneficiary.

        Returns
        -------
        int
            Amount recovered

        """
        usdc = self.ledger.token(self.terms.usdc)
        amount = usdc.balance_of(self.address)
        usdc.transfer(self.address, self.terms.beneficiary, amount)
        logger.info(
            "Escrow %s recovered %d USDC for %s (called by %s)",
            self.address,
            amount,
            self.terms.beneficiary,
            caller,
        )
        return amount
