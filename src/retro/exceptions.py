"""Retro exception hierarchy.

All Retro-specific exceptions inherit from RetroError.
"""


class RetroError(Exception):
    """Base exception for all Retro errors."""
