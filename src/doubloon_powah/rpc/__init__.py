"""RPC layer with Ape provider management."""

from doubloon_powah.rpc.provider import ApeRPCProvider

__all__ = [
    "ApeRPCProvider",
]
