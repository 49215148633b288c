"""
EmbedPrep exception hierarchy.
"""

from .custom_exceptions import ConfigurationError, EmbedPrepError

__all__ = [
    "EmbedPrepError",
    "ConfigurationError",
]
