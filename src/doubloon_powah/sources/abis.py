"""Minimal contract ABIs for the reads the aggregator makes."""

from typing import Any


def _view(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]]) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"name": arg, "type": kind} for arg, kind in inputs],
        "outputs": [{"name": arg, "type": kind} for arg, kind in outputs],
    }


ERC20_ABI = [
    _view("name", [], [("", "string")]),
    _view("symbol", [], [("", "string")]),
    _view("decimals", [], [("", "uint8")]),
    _view("totalSupply", [], [("", "uint256")]),
    _view("balanceOf", [("account", "address")], [("", "uint256")]),
]

# Uniswap V2 / SushiSwap pairs are ERC-20 LP tokens
PAIR_ABI = [
    *ERC20_ABI,
    _view("token0", [], [("", "address")]),
    _view("token1", [], [("", "address")]),
]

STAKING_REWARDS_ABI = [
    _view("earned", [("account", "address")], [("", "uint256")]),
]

VESTING_ABI = [
    _view("recipient", [], [("", "address")]),
    _view("vestingAmount", [], [("", "uint256")]),
    _view("vestingBegin", [], [("", "uint256")]),
    _view("vestingCliff", [], [("", "uint256")]),
    _view("vestingEnd", [], [("", "uint256")]),
]

MASTERCHEF_ABI = [
    _view("userInfo", [("pid", "uint256"), ("user", "address")], [("amount", "uint256"), ("rewardDebt", "uint256")]),
]
