"""Data models for voting power breakdowns, token metadata and escrow terms."""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class VotingPowerBreakdown(BaseModel):
    """
    Per-source voting power of one account.

    Attributes
    ----------
    account : str
        Queried address
    direct : int
        DBL held in the wallet
    farms : int
        Unclaimed rewards summed over all registered farms
    vesting : int
        DBL custodied by vesting grants whose recipient is ``account``
    venue_a : int
        Share of the DBL reserve in the first pool venue (Uniswap)
    venue_b : int
        Share of the DBL reserve in the second pool venue (SushiSwap)
    staked : int
        Share of venue B's DBL reserve backing LP staked in the external protocol
    total : int
        Sum of all terms; equal to ``balance_of(account)``

    """

    account: str
    direct: int = Field(ge=0)
    farms: int = Field(default=0, ge=0)
    vesting: int = Field(default=0, ge=0)
    venue_a: int = Field(default=0, ge=0)
    venue_b: int = Field(default=0, ge=0)
    staked: int = Field(default=0, ge=0)
    total: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dex(self) -> int:
        """Combined liquidity-pool share."""
        return self.venue_a + self.venue_b + self.staked


class TokenMetadata(BaseModel):
    """Read-only ERC-20 metadata exposed by the voting power token."""

    name: str
    symbol: str
    decimals: int
    total_supply: int


class RegistrySnapshot(BaseModel):
    """
    Addresses currently tracked by a source registry.

    Attributes
    ----------
    owner : str
        Administrative address
    farms : list[str]
        Farm addresses in insertion order (duplicates kept)
    vesting : list[str]
        Vesting grant addresses in insertion order (duplicates kept)
    staking_protocol : str | None
        External staking contract address
    staking_pool_id : int | None
        Pool identifier inside the staking contract

    """

    owner: str
    farms: list[str] = Field(default_factory=list)
    vesting: list[str] = Field(default_factory=list)
    staking_protocol: str | None = None
    staking_pool_id: int | None = None


class VestingSchedule(BaseModel):
    """Timestamps and amount of a linear vesting grant."""

    model_config = ConfigDict(frozen=True)

    vesting_amount: int = Field(ge=0)
    vesting_begin: int
    vesting_cliff: int
    vesting_end: int


class EscrowTerms(BaseModel):
    """
    Immutable deal terms of an OTC escrow.

    Attributes
    ----------
    beneficiary : str
        Buyer paying USDC and receiving the vesting grant
    dbl_gov : str
        Seller-side governance address receiving USDC
    vesting_start : int
        Vesting begin timestamp for the created grant
    vesting_cliff : int
        Cliff timestamp for the created grant
    vesting_end : int
        End timestamp for the created grant
    usdc_amount : int
        Payment token amount pulled from the beneficiary
    dbl_amount : int
        DBL amount moved into the vesting grant
    usdc : str
        Payment token address
    dbl : str
        Sold token address

    """

    model_config = ConfigDict(frozen=True)

    beneficiary: str
    dbl_gov: str
    vesting_start: int
    vesting_cliff: int
    vesting_end: int
    usdc_amount: int = Field(ge=0)
    dbl_amount: int = Field(ge=0)
    usdc: str
    dbl: str
