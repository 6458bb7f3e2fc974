"""Core functionality including models, the pool share oracle, registry and aggregator."""

from doubloon_powah.core.aggregator import VotingPowerAggregator
from doubloon_powah.core.errors import (
    AlreadyExecuted,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAddress,
    InvalidSchedule,
    PowahError,
    Unauthorized,
    UpstreamUnavailable,
    VestingNotStarted,
)
from doubloon_powah.core.models import (
    EscrowTerms,
    RegistrySnapshot,
    TokenMetadata,
    VestingSchedule,
    VotingPowerBreakdown,
)
from doubloon_powah.core.oracle import share_of
from doubloon_powah.core.registry import ZERO_ADDRESS, SourceRegistry, StakingPointer

__all__ = [
    "ZERO_ADDRESS",
    "AlreadyExecuted",
    "EscrowTerms",
    "InsufficientAllowance",
    "InsufficientBalance",
    "InvalidAddress",
    "InvalidSchedule",
    "PowahError",
    "RegistrySnapshot",
    "SourceRegistry",
    "StakingPointer",
    "TokenMetadata",
    "Unauthorized",
    "UpstreamUnavailable",
    "VestingNotStarted",
    "VestingSchedule",
    "VotingPowerAggregator",
    "share_of",
]
