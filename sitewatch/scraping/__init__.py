"""
Scraper backends and the registry that selects them.
"""

from sitewatch.scraping.base import ScraperBase
from sitewatch.scraping.registry import ScraperRegistry
from sitewatch.scraping.scrapers import HTMLScraper, JSONScraper

__all__ = ["HTMLScraper", "JSONScraper", "ScraperBase", "ScraperRegistry"]
