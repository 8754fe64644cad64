"""
Main Orchestrator Module

Composes the pipeline for one query:
select relay -> build identity -> open session -> navigate -> extract -> close.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from shopscrape.config import config as default_config, ScraperConfig
from shopscrape.errors import ErrorKind, ScrapeError, ValidationError
from shopscrape.extractor import Extractor
from shopscrape.fetchers.browser_session import SessionManager
from shopscrape.stealth.identity import IdentityBuilder
from shopscrape.stealth.relay_pool import RelaySelector


logger = logging.getLogger(__name__)


class QueryKind(Enum):
    """The three query shapes, with their URL path and parameter name."""

    SHOP = ("shop", "shopId", "/view/shop/{id}", "products")
    CATEGORY = ("category", "categoryId", "/category/{id}", "products")
    PRODUCT = ("product", "productId", "/view/product/{id}", "product")

    def __init__(self, slug: str, param: str, path: str, result_key: str):
        self.slug = slug
        self.param = param
        self.path = path
        self.result_key = result_key


@dataclass(frozen=True)
class Query:
    """One inbound lookup."""

    kind: QueryKind
    identifier: Optional[str] = None

    def require_identifier(self) -> str:
        """
        Return the identifier as given.

        Raises:
            ValidationError: If it is missing or blank
        """
        identifier = self.identifier or ""
        if not identifier.strip():
            param = self.kind.param
            raise ValidationError(
                f"{param} is required - missing value for {param} on the Parameters."
            )
        return identifier

    def target_url(self, base_url: str) -> str:
        return base_url.rstrip("/") + self.kind.path.format(id=self.require_identifier())


@dataclass
class ScrapeOutcome:
    """Result of one query, shaped for the routing layer."""

    query: Query
    success: bool
    status_code: int
    message: str
    data: Any = None
    error_kind: Optional[ErrorKind] = None

    @property
    def error(self) -> Optional[str]:
        """Coarse error label ("Bad Request" / "Internal server error")."""
        if self.success:
            return None
        return "Bad Request" if 400 <= self.status_code < 500 else "Internal server error"

    def to_payload(self) -> Dict[str, Any]:
        """Convert to the JSON body returned to clients."""
        if self.success:
            return {
                "status_code": self.status_code,
                "message": self.message,
                self.query.kind.result_key: self.data,
            }
        return {
            "status_code": self.status_code,
            "error": self.error,
            "message": self.message,
        }


class Orchestrator:
    """
    Runs the scraping pipeline for shop, category and product queries.

    The orchestrator never retries; one failed navigation or extraction is
    one failed query.

    Example:
        orchestrator = Orchestrator(selector, IdentityBuilder(), sessions)
        outcome = await orchestrator.handle(Query(QueryKind.SHOP, "12345"))
    """

    def __init__(
        self,
        relay_selector: RelaySelector,
        identity_builder: IdentityBuilder,
        session_manager: SessionManager,
        extractor: Extractor | None = None,
        config: ScraperConfig | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            relay_selector: Shared relay rotation
            identity_builder: Per-request identity factory
            session_manager: Browser session factory
            extractor: Page callback (default Extractor)
            config: Custom configuration (uses global if None)
        """
        self._config = config or default_config
        self._relays = relay_selector
        self._identities = identity_builder
        self._sessions = session_manager
        self._extractor = extractor or Extractor()

    async def run(self, query: Query) -> Any:
        """
        Scrape the page for a query and return its embedded JSON.

        Raises:
            ValidationError: Missing identifier (no session is opened)
            ConfigurationError: Empty relay pool or unusable browser
            NavigationError: Timeout or network failure
            ExtractionError: No embedded data on the page
        """
        identifier = query.require_identifier()

        relay = self._relays.select()
        identity = self._identities.build(relay)
        url = query.target_url(self._config.base_url)

        try:
            data = await self._sessions.with_session(
                identity,
                url,
                self._extractor.extract,
            )
        except ScrapeError as e:
            logger.error(f"Failed to scrape {query.kind.param} {identifier}: {e}", exc_info=True)
            raise

        logger.info(f"Successfully scraped {query.kind.param}: {identifier}")
        return data

    async def handle(self, query: Query) -> ScrapeOutcome:
        """
        Run a query and convert any failure into an outcome.

        Stack traces of unexpected errors are logged, never returned.
        """
        try:
            data = await self.run(query)
        except ScrapeError as e:
            if e.is_client_error:
                logger.warning(e.message)
            elif e.kind is ErrorKind.CONFIGURATION:
                logger.error(e.message)
            return ScrapeOutcome(
                query=query,
                success=False,
                status_code=e.status_code,
                message=e.message,
                error_kind=e.kind,
            )
        except Exception:
            logger.exception(f"Unexpected error handling {query.kind.slug} query")
            return ScrapeOutcome(
                query=query,
                success=False,
                status_code=500,
                message="An unexpected error occurred",
            )

        message = f"Successfully retrieved data from {query.kind.param}: {query.require_identifier()}"
        logger.info(message)
        return ScrapeOutcome(
            query=query,
            success=True,
            status_code=200,
            message=message,
            data=data,
        )
