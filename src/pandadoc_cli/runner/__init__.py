"""
CLI runner module.

Provides commands:
- list / templates / folders: Listings with filters
- get / details / fields / audit: Single document lookups
- download: Save a document PDF
- send: Send a document for signing
- me: Current member info
"""

from .args import ParsedCommand, parse_args
from .main import dispatch, main

__all__ = [
    "ParsedCommand",
    "parse_args",
    "dispatch",
    "main",
]
