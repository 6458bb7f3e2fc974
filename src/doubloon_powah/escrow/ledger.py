"""In-memory token ledger giving escrow and vesting calls atomic, ordered execution."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from eth_utils import keccak, to_checksum_address

from doubloon_powah.core.errors import InsufficientAllowance, InsufficientBalance

logger = logging.getLogger(__name__)


class Token:
    """
    ERC-20 style token held in a ledger.

    Parameters
    ----------
    address : str
        Token contract address
    name : str
        Token name
    symbol : str
        Token symbol
    decimals : int
        Number of decimal places

    """

    def __init__(self, address: str, name: str, symbol: str, decimals: int = 18) -> None:
        self.address = address
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def mint(self, to: str, amount: int) -> None:
        """Create ``amount`` new tokens for ``to``."""
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set the amount ``spender`` may pull from ``owner``."""
        self._allowances[(owner, spender)] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """
        Move tokens from ``sender`` to ``recipient``.

        Raises
        ------
        InsufficientBalance
            If ``sender`` holds less than ``amount``

        """
        balance = self.balance_of(sender)
        if balance < amount:
            msg = f"{self.symbol}: {sender} holds {balance}, needs {amount}"
            raise InsufficientBalance(msg)
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """
        Move tokens out of ``owner`` on behalf of ``spender``.

        Raises
        ------
        InsufficientAllowance
            If ``spender`` was approved for less than ``amount``
        InsufficientBalance
            If ``owner`` holds less than ``amount``

        """
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            msg = f"{self.symbol}: {spender} may pull {allowed} from {owner}, needs {amount}"
            raise InsufficientAllowance(msg)
        self.transfer(owner, recipient, amount)
        self._allowances[(owner, spender)] = allowed - amount

    def _snapshot(self) -> tuple[int, dict[str, int], dict[tuple[str, str], int]]:
        return self._total_supply, dict(self._balances), dict(self._allowances)

    def _restore(self, snapshot: tuple[int, dict[str, int], dict[tuple[str, str], int]]) -> None:
        self._total_supply, self._balances, self._allowances = snapshot


class Ledger:
    """
    Serialized state store for tokens and contracts deployed by the escrow.

    Each mutating escrow or vesting call runs inside ``atomic()``: either all
    of its token movements happen or none do.

    Parameters
    ----------
    timestamp : int
        Current block timestamp in seconds

    """

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp
        self.events: list[tuple[str, dict[str, Any]]] = []
        self._tokens: dict[str, Token] = {}
        self._nonces: dict[str, int] = {}

    def deploy_token(self, address: str, name: str, symbol: str, decimals: int = 18) -> Token:
        """
        Register a new token at ``address``.

        Raises
        ------
        ValueError
            If a token already exists at ``address``

        """
        if address in self._tokens:
            msg = f"Token already deployed at {address}"
            raise ValueError(msg)
        token = Token(address, name, symbol, decimals)
        self._tokens[address] = token
        return token

    def token(self, address: str) -> Token:
        """
        Look up a token by address.

        Raises
        ------
        KeyError
            If no token is deployed at ``address``

        """
        return self._tokens[address]

    def derive_address(self, deployer: str) -> str:
        """
        Derive the address of the next contract created by ``deployer``.

        Parameters
        ----------
        deployer : str
            Creating contract or account

        Returns
        -------
        str
            Checksummed address, unique per (deployer, nonce)

        """
        nonce = self._nonces.get(deployer, 0)
        self._nonces[deployer] = nonce + 1
        digest = keccak(text=f"{deployer}:{nonce}")
        return to_checksum_address(digest[-20:])

    def emit(self, name: str, **payload: Any) -> None:
        """Append an event to the log."""
        self.events.append((name, payload))
        logger.debug("Event %s %s", name, payload)

    def events_named(self, name: str) -> list[dict[str, Any]]:
        """Payloads of all events called ``name``, oldest first."""
        return [payload for event, payload in self.events if event == name]

    @contextmanager
    def atomic(self) -> Iterator["Ledger"]:
        """
        Run a block with all-or-nothing semantics.

        On any exception the token balances, allowances, nonces and event log
        are restored to their state on entry and the exception is re-raised.

        """
        tokens = {address: token._snapshot() for address, token in self._tokens.items()}
        nonces = dict(self._nonces)
        event_count = len(self.events)
        try:
            yield self
        except Exception:
            for address, snapshot in tokens.items():
                self._tokens[address]._restore(snapshot)
            self._nonces = nonces
            del self.events[event_count:]
            raise
