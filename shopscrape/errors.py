"""
Error Taxonomy Module

Every failure the scraping pipeline can produce is a ScrapeError tagged with
an ErrorKind, so callers branch on the kind instead of the message text.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of a pipeline failure."""
    VALIDATION = "validation"
    NAVIGATION = "navigation"
    EXTRACTION = "extraction"
    CONFIGURATION = "configuration"


class ScrapeError(Exception):
    """Base class for all pipeline errors."""

    kind: ErrorKind = ErrorKind.NAVIGATION
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def is_client_error(self) -> bool:
        """True when the caller, not the pipeline, is at fault."""
        return 400 <= self.status_code < 500


class ValidationError(ScrapeError):
    """A required query identifier is missing."""

    kind = ErrorKind.VALIDATION
    status_code = 400


class NavigationError(ScrapeError):
    """The target page could not be reached (timeout, network, relay)."""

    kind = ErrorKind.NAVIGATION


class ExtractionError(ScrapeError):
    """No embedded-data element could be parsed from the page."""

    kind = ErrorKind.EXTRACTION


class ConfigurationError(ScrapeError):
    """Fatal setup problem: empty relay pool or unusable browser engine."""

    kind = ErrorKind.CONFIGURATION
