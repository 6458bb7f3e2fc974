"""Deployment configuration model."""

from typing import Annotated

from eth_utils import is_address, to_checksum_address
from pydantic import AfterValidator, BaseModel, Field, model_validator


def _checksum(value: str) -> str:
    if not is_address(value):
        msg = f"not an address: {value!r}"
        raise ValueError(msg)
    return to_checksum_address(value)


ChecksumAddress = Annotated[str, AfterValidator(_checksum)]


class DeploymentConfig(BaseModel):
    """
    Contract addresses and network settings for one DBL deployment.

    Attributes
    ----------
    ecosystem : str
        Ape ecosystem (e.g., 'ethereum')
    network : str
        Ape network (e.g., 'mainnet')
    provider : str | None
        Ape provider plugin (e.g., 'alchemy'); Ape's default if None
    dbl_token : str
        DBL governance token
    uniswap_pair : str
        DBL pair on Uniswap (venue A)
    sushiswap_pair : str
        DBL pair on SushiSwap (venue B)
    owner : str
        Registry administrator
    farms : list[str]
        Registered farms, in order
    vesting : list[str]
        Registered vesting grants, in order
    staking_protocol : str | None
        MasterChef holding staked SushiSwap LP
    staking_pool_id : int | None
        Pool id of the DBL pair inside ``staking_protocol``; required whenever
        ``staking_protocol`` is set

    """

    ecosystem: str = "ethereum"
    network: str = "mainnet"
    provider: str | None = None
    dbl_token: ChecksumAddress
    uniswap_pair: ChecksumAddress
    sushiswap_pair: ChecksumAddress
    owner: ChecksumAddress
    farms: list[ChecksumAddress] = Field(default_factory=list)
    vesting: list[ChecksumAddress] = Field(default_factory=list)
    staking_protocol: ChecksumAddress | None = None
    staking_pool_id: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _require_pool_id(self) -> "DeploymentConfig":
        if self.staking_protocol is not None and self.staking_pool_id is None:
            msg = f"staking_pool_id is required with staking_protocol {self.staking_protocol}"
            raise ValueError(msg)
        return self
