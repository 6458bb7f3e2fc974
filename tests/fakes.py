"""In-memory stand-ins for the contracts the aggregator reads."""

from typing import Any

ONE = 10**18


def ether(amount: int) -> int:
    """Whole tokens to 18-decimal base units."""
    return amount * ONE


def address(n: int) -> str:
    """Deterministic checksum-free test address."""
    return "0x" + f"{n:040x}"


OWNER = address(0xA11CE)
ALICE = address(0xA1)
BOB = address(0xB0B)

DBL = address(0xD81)
USDC = address(0x05DC)
UNI_PAIR = address(0x0171)
SUSHI_PAIR = address(0x5051)
MASTERCHEF = address(0xC4EF)
POOL_ID = 7


class FakeFarm:
    def __init__(self, addr: str, rewards: dict[str, int] | None = None) -> None:
        self.address = addr
        self.rewards = rewards or {}
        self.calls = 0

    def earned(self, account: str) -> int:
        self.calls += 1
        return self.rewards.get(account, 0)


class FakeVesting:
    def __init__(self, addr: str, recipient: str) -> None:
        self.address = addr
        self._recipient = recipient

    def recipient(self) -> str:
        return self._recipient


class FakePair:
    """LP token side of a pair; the DBL reserve lives in the ledger token."""

    def __init__(self, addr: str, lp_balances: dict[str, int] | None = None, supply: int = 0) -> None:
        self.address = addr
        self.lp_balances = lp_balances or {}
        self.supply = supply

    def lp_balance_of(self, account: str) -> int:
        return self.lp_balances.get(account, 0)

    def total_supply(self) -> int:
        return self.supply


class FakeMasterChef:
    def __init__(self, addr: str, positions: dict[tuple[int, str], int] | None = None) -> None:
        self.address = addr
        self.positions = positions or {}

    def user_info(self, pool_id: int, account: str) -> tuple[int, int]:
        return self.positions.get((pool_id, account), 0), 0


class Broken:
    """Every method call raises, like an unreachable or reverting contract."""

    def __init__(self, addr: str) -> None:
        self.address = addr

    def _fail(self, *args: Any) -> Any:
        raise RuntimeError("execution reverted")

    earned = recipient = lp_balance_of = total_supply = user_info = balance_of = _fail


class FakeContract:
    """Ape contract double returning canned values and recording call kwargs."""

    def __init__(self, results: dict[str, Any]) -> None:
        self.results = results
        self.calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, method: str) -> Any:
        if method not in self.results:
            raise AttributeError(method)

        def call(*args: Any, **kwargs: Any) -> Any:
            self.calls.append((method, args, kwargs))
            result = self.results[method]
            if isinstance(result, Exception):
                raise result
            return result(*args) if callable(result) else result

        return call


class FakeRPCProvider:
    """Provider double mapping addresses to FakeContract instances."""

    def __init__(self, contracts: dict[str, FakeContract]) -> None:
        self.contracts = contracts
        self.requested: list[tuple[str, Any]] = []

    def get_contract(self, addr: str, abi: list | None = None) -> FakeContract:
        self.requested.append((addr, abi))
        return self.contracts[addr]
