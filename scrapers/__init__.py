"""
Scrapers Module
"""
from .base import BaseScraper
from .dog_api_scraper import DogApiScraper

__all__ = [
    "BaseScraper",
    "DogApiScraper",
]
