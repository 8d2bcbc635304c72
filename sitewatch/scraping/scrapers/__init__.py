"""
Scraper backend exports.
"""

from sitewatch.scraping.scrapers.html_scraper import HTMLScraper
from sitewatch.scraping.scrapers.json_scraper import JSONScraper

__all__ = ["HTMLScraper", "JSONScraper"]
