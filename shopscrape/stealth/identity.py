"""
Request Identity Module

Builds the synthetic browsing identity (relay, User-Agent, headers) that one
request presents to the storefront.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from shopscrape.stealth.relay_pool import Relay
from shopscrape.stealth.user_agents import UserAgentRotator


ACCEPT_LANGUAGE = "en-US,en;q=0.9"
ACCEPT = "application/json, text/plain, */*"


@dataclass(frozen=True)
class RequestIdentity:
    """Egress relay plus the headers one request presents."""

    relay: Relay
    user_agent: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


class IdentityBuilder:
    """Pairs a relay with a random User-Agent and the fixed header set."""

    def __init__(self, user_agent_rotator: UserAgentRotator | None = None):
        self._ua_rotator = user_agent_rotator or UserAgentRotator()

    def build(self, relay: Relay) -> RequestIdentity:
        headers = MappingProxyType({
            "Accept-Language": ACCEPT_LANGUAGE,
            "Accept": ACCEPT,
        })
        return RequestIdentity(
            relay=relay,
            user_agent=self._ua_rotator.get_user_agent(),
            headers=headers,
        )
