"""
HTTP API Module

FastAPI routes for the three storefront queries. The browser engine is
started in the application lifespan and shared by every request.
"""

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopscrape.config import config as default_config, ScraperConfig
from shopscrape.errors import ConfigurationError
from shopscrape.fetchers.browser_session import BrowserEngine, SessionManager
from shopscrape.orchestrator import Orchestrator, Query, QueryKind
from shopscrape.stealth.identity import IdentityBuilder
from shopscrape.stealth.relay_pool import RelaySelector
from shopscrape.stealth.user_agents import UserAgentRotator


logger = logging.getLogger(__name__)


def create_app(
    settings: ScraperConfig | None = None,
    engine: BrowserEngine | None = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Custom configuration (uses global if None)
        engine: Browser engine to use (a new BrowserEngine if None)
        rng: Randomness source for relay and User-Agent selection
    """
    settings = settings or default_config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        selector = RelaySelector(settings.relay_urls(), rng=rng)
        if selector.size == 0:
            logger.error("No relays configured")
            raise ConfigurationError("No relays configured")

        browser_engine = engine or BrowserEngine(
            headless=settings.browser.headless,
            launch_args=settings.browser.launch_args,
        )
        await browser_engine.start()

        rotator = UserAgentRotator(
            include_mobile=settings.browser.include_mobile_agents,
            rng=rng,
        )
        app.state.engine = browser_engine
        app.state.relays = selector
        app.state.orchestrator = Orchestrator(
            relay_selector=selector,
            identity_builder=IdentityBuilder(rotator),
            session_manager=SessionManager(browser_engine, timeout=settings.browser.timeout),
            config=settings,
        )
        try:
            yield
        finally:
            await browser_engine.close()
            logger.info("Browser closed")

    app = FastAPI(title="Storefront Scraper API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    async def respond(request: Request, query: Query) -> JSONResponse:
        outcome = await request.app.state.orchestrator.handle(query)
        return JSONResponse(status_code=outcome.status_code, content=outcome.to_payload())

    @app.get("/health")
    async def health(request: Request) -> dict:
        return {
            "status": "ok",
            "browser": request.app.state.engine.is_running,
            "relays": request.app.state.relays.size,
        }

    @app.get("/tiktok/search-by-shop")
    async def search_by_shop(request: Request, shopId: Optional[str] = None) -> JSONResponse:
        return await respond(request, Query(QueryKind.SHOP, shopId))

    @app.get("/tiktok/search-by-category")
    async def search_by_category(request: Request, categoryId: Optional[str] = None) -> JSONResponse:
        return await respond(request, Query(QueryKind.CATEGORY, categoryId))

    @app.get("/tiktok/product-detail")
    async def product_detail(request: Request, productId: Optional[str] = None) -> JSONResponse:
        return await respond(request, Query(QueryKind.PRODUCT, productId))

    return app


app = create_app()
