"""
Services Module - application services for the WOTC engine.

- WOTCEngine: eligibility, credit, normalization and catalog lookup
- Logging configuration for the API process
"""

from .wotc_engine import WOTCEngine, get_wotc_engine

__all__ = [
    "WOTCEngine",
    "get_wotc_engine",
]
