"""
Etsmart Data Module
===================

Runtime configuration and the Etsy search signal source.

This module provides:
    - Settings / get_settings: environment-driven configuration
    - EtsySearchClient: fetches Etsy result counts per search query

Quick Start:
    from src.data import EtsySearchClient

    client = EtsySearchClient()
    count = client.fetch_result_count("bracelet personalized", market="EN")

Configuration:
    Set environment variables or create a .env file.
    See src/data/config.py for all available options.
"""

from .config import get_settings, Settings, EtsySearchConfig
from .etsy_search_client import EtsySearchClient, parse_results_count

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "get_settings",
    "Settings",
    "EtsySearchConfig",
    # Signal source
    "EtsySearchClient",
    "parse_results_count",
]
