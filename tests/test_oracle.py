"""Tests for the pool share oracle."""

from fractions import Fraction
from math import floor

import pytest

from doubloon_powah.core import share_of

MAX_UINT256 = 2**256 - 1


@pytest.mark.parametrize("balance", [0, 1, 10**18, MAX_UINT256])
@pytest.mark.parametrize("reserve", [0, 1, 10**24, MAX_UINT256])
def test_zero_supply_is_zero(balance, reserve):
    """A pool with no LP supply contributes nothing and never divides by zero."""
    assert share_of(balance, reserve, 0) == 0


@pytest.mark.parametrize(
    ("balance", "reserve", "supply"),
    [
        (0, 1000, 100),
        (100, 1000, 100),
        (25, 1000, 100),
        (1, 10, 3),
        (2, 10, 3),
        (5, 0, 100),
        (MAX_UINT256, MAX_UINT256, MAX_UINT256),
        (MAX_UINT256 - 1, MAX_UINT256, MAX_UINT256),
        (10**30, MAX_UINT256, 10**30 + 7),
    ],
)
def test_matches_exact_floor(balance, reserve, supply):
    """Result equals floor(reserve * balance / supply) computed with exact rationals."""
    assert share_of(balance, reserve, supply) == floor(Fraction(reserve * balance, supply))


def test_full_supply_holder_gets_whole_reserve():
    assert share_of(500, 12345, 500) == 12345


def test_truncates_toward_zero():
    assert share_of(1, 2, 3) == 0
    assert share_of(2, 2, 3) == 1


def test_monotonic_in_balance_and_reserve():
    supply = 10**21
    shares = [share_of(balance, 10**22, supply) for balance in range(0, 10**21, 10**19)]
    assert shares == sorted(shares)

    shares = [share_of(10**20, reserve, supply) for reserve in range(0, 10**22, 10**20)]
    assert shares == sorted(shares)
