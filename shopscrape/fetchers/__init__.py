"""Fetchers module - browser engine and per-request sessions."""

from .browser_session import BrowserEngine, SessionManager

__all__ = ["BrowserEngine", "SessionManager"]
