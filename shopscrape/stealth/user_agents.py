"""
User-Agent Generator Module

Draws plausible desktop and mobile User-Agent strings for synthetic identities.
Always use modern, real browser strings - never the automation engine default.
"""

import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AgentProfile:
    """A real browser User-Agent string and its form factor."""

    user_agent: str
    mobile: bool = False


# Curated list of modern browser agents
AGENT_PROFILES = [
    # Chrome on Windows
    AgentProfile("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"),
    AgentProfile("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"),
    # Chrome on macOS
    AgentProfile("Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"),
    # Chrome on Linux
    AgentProfile("Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"),
    # Firefox
    AgentProfile("Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0"),
    AgentProfile("Mozilla/5.0 (Macintosh; Intel Mac OS X 14.4; rv:125.0) Gecko/20100101 Firefox/125.0"),
    # Edge on Windows
    AgentProfile("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.0.0"),
    # Safari on macOS
    AgentProfile("Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15"),
    # Mobile
    AgentProfile("Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Mobile Safari/537.36", mobile=True),
    AgentProfile("Mozilla/5.0 (Linux; Android 13; SM-S918B) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Mobile Safari/537.36", mobile=True),
    AgentProfile("Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1", mobile=True),
]


class UserAgentRotator:
    """
    Random User-Agent source.

    Example:
        rotator = UserAgentRotator(include_mobile=False)
        ua = rotator.get_user_agent()
    """

    def __init__(
        self,
        profiles: list[AgentProfile] | None = None,
        include_mobile: bool = True,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the rotator.

        Args:
            profiles: Custom agent profiles (uses defaults if None)
            include_mobile: Whether to include mobile browsers
            rng: Randomness source
        """
        if profiles is not None:
            self._profiles = list(profiles)
        elif include_mobile:
            self._profiles = AGENT_PROFILES.copy()
        else:
            self._profiles = [p for p in AGENT_PROFILES if not p.mobile]

        self._rng = rng or random.Random()

    def get_user_agent(self) -> str:
        """Get a random User-Agent string ("" if there are no profiles)."""
        if not self._profiles:
            return ""
        return self._rng.choice(self._profiles).user_agent

    @property
    def profile_count(self) -> int:
        """Number of available profiles."""
        return len(self._profiles)
