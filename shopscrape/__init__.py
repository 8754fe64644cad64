"""
Storefront Scraper - embedded product data through rotating relays.

This package provides:
- Relay (proxy) rotation
- Per-request browsing identities
- Isolated headless browser sessions
- Embedded JSON extraction
- An HTTP API for shop, category and product lookups
"""

__version__ = "1.0.0"
__author__ = "Scrape_U"
