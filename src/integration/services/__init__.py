"""Integration services package."""

from .identity_resolvers import InMemoryIdentityResolver, MotorIdentityResolver

__all__ = [
    "MotorIdentityResolver",
    "InMemoryIdentityResolver",
]
