"""RPC provider wrapper using Ape's network management."""

import logging
from typing import Any

from ape import Contract, chain, networks

logger = logging.getLogger(__name__)


class ApeRPCProvider:
    """
    RPC provider using Ape's network management system.

    Calls are not retried here: a failed read surfaces to the caller, which
    decides whether to try the whole query again.

    Parameters
    ----------
    ecosystem : str
        Ape ecosystem name (e.g., 'ethereum')
    network : str
        Network name (default: 'mainnet')
    provider : str | None
        Ape provider plugin to use (e.g., 'alchemy'); Ape's default if None

    """

    def __init__(self, ecosystem: str, network: str = "mainnet", provider: str | None = None) -> None:
        self.ecosystem = ecosystem
        self.network = network
        self.provider_name = provider
        self._network_context = None
        self._provider = None

    @property
    def network_choice(self) -> str:
        """Ape network choice string, e.g. ``ethereum:mainnet:alchemy``."""
        parts = [self.ecosystem, self.network]
        if self.provider_name:
            parts.append(self.provider_name)
        return ":".join(parts)

    @property
    def is_connected(self) -> bool:
        return self._provider is not None

    def connect(self) -> None:
        """Connect to the network using Ape's network management."""
        try:
            self._network_context = networks.parse_network_choice(self.network_choice)
            self._network_context.__enter__()
            self._provider = networks.provider
        except Exception as e:
            error_msg = f"Failed to connect to {self.network_choice}: {e}"
            raise RuntimeError(error_msg) from e
        logger.debug("Connected to %s", self.network_choice)

    def disconnect(self) -> None:
        """Disconnect from the network."""
        if self._network_context:
            try:
                self._network_context.__exit__(None, None, None)
            except Exception as e:
                logger.debug("Error during network context cleanup: %s", e)
            self._network_context = None
        self._provider = None

    def block_number(self) -> int:
        """
        Get the current head block number.

        Returns
        -------
        int
            Head block number, used to pin every read of one query to one block

        """
        self._require_connection()
        return chain.blocks.head.number

    def get_contract(self, address: str, abi: list[dict[str, Any]] | None = None) -> Any:
        """
        Get a contract instance.

        Parameters
        ----------
        address : str
            Contract address
        abi : list[dict[str, Any]] | None
            Contract ABI (if None, Ape fetches it from the explorer)

        Returns
        -------
        Contract
            Ape contract instance

        """
        self._require_connection()
        if abi:
            return Contract(address, abi=abi)
        return Contract(address)

    def _require_connection(self) -> None:
        if not self._provider:
            error_msg = "Provider not connected. Call connect() first."
            raise RuntimeError(error_msg)

    def __enter__(self) -> "ApeRPCProvider":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Context manager exit."""
        self.disconnect()
