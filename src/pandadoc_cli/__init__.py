"""
PandaDoc CLI

Maps shell commands onto the PandaDoc public REST API and prints either the
raw JSON response or a human-readable summary. Credentials are attached by an
injected fetcher and never reach command code.
"""

__version__ = "0.1.0"
