"""Stealth module - relay rotation and request identities."""

from .user_agents import UserAgentRotator
from .relay_pool import Relay, RelaySelector
from .identity import IdentityBuilder, RequestIdentity

__all__ = ["UserAgentRotator", "Relay", "RelaySelector", "IdentityBuilder", "RequestIdentity"]
