"""Base class for chain-backed voting power sources."""

from typing import Any, ClassVar

from doubloon_powah.core.errors import UpstreamUnavailable


class BaseChainSource:
    """
    Thin adapter around one deployed contract.

    Subclasses declare the ABI they need and expose the capability methods the
    aggregator expects. Every failed or malformed read is raised as
    ``UpstreamUnavailable`` naming this source.

    Attributes
    ----------
    kind : str
        Short label for errors and logs (must be set in subclass)
    abi : list[dict]
        ABI fragments used by this source (must be set in subclass)

    Parameters
    ----------
    address : str
        Contract address
    rpc_provider : Any | None
        Connected RPC provider exposing ``get_contract``
    block_id : int | None
        Block to read at; None reads at the latest block

    """

    kind: ClassVar[str] = ""
    abi: ClassVar[list[dict[str, Any]]] = []

    def __init__(self, address: str, rpc_provider: Any | None = None, block_id: int | None = None) -> None:
        if not self.kind:
            msg = f"{self.__class__.__name__} must define 'kind' attribute"
            raise ValueError(msg)
        self.address = address
        self.rpc_provider = rpc_provider
        self.block_id = block_id
        self._contract: Any | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.address!r})"

    def _make_contract_call(self, method: str, params: list[Any] | None = None) -> Any:
        """
        Make a contract call using the RPC provider.

        Parameters
        ----------
        method : str
            Method name (e.g., 'balanceOf', 'totalSupply')
        params : list[Any] | None
            Method parameters (default: None)

        Returns
        -------
        Any
            Call result

        Raises
        ------
        RuntimeError
            If RPC provider is not configured
        UpstreamUnavailable
            If the call fails

        """
        if not self.rpc_provider:
            msg = "RPC provider not configured for this source"
            raise RuntimeError(msg)

        if params is None:
            params = []

        kwargs = {"block_id": self.block_id} if self.block_id is not None else {}
        try:
            if self._contract is None:
                self._contract = self.rpc_provider.get_contract(self.address, abi=self.abi)
            return getattr(self._contract, method)(*params, **kwargs)
        except Exception as e:
            raise UpstreamUnavailable(f"{self.kind} {self.address}", f"{method} failed: {e}") from e

    def _call_amount(self, method: str, params: list[Any] | None = None) -> int:
        """Call a method returning a uint256 and coerce it to ``int``."""
        result = self._make_contract_call(method, params)
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise UpstreamUnavailable(f"{self.kind} {self.address}", f"{method} returned {result!r}") from e
