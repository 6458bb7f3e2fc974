"""DBL governance token read through an RPC provider."""

from doubloon_powah.sources.abis import ERC20_ABI
from doubloon_powah.sources.base import BaseChainSource


class ChainGovernanceToken(BaseChainSource):
    """ERC-20 governance token (DBL)."""

    kind = "token"
    abi = ERC20_ABI

    def balance_of(self, account: str) -> int:
        return self._call_amount("balanceOf", [account])

    def total_supply(self) -> int:
        return self._call_amount("totalSupply")

    def name(self) -> str:
        return str(self._make_contract_call("name"))

    def symbol(self) -> str:
        return str(self._make_contract_call("symbol"))

    def decimals(self) -> int:
        return self._call_amount("decimals")
