"""OTC escrow and vesting lifecycle on an in-memory ledger."""

from doubloon_powah.escrow.ledger import Ledger, Token
from doubloon_powah.escrow.otc import OtcEscrow
from doubloon_powah.escrow.vesting import VestingGrant

__all__ = [
    "Ledger",
    "OtcEscrow",
    "Token",
    "VestingGrant",
]
