"""
CLI commands module for EmbedPrep
"""

from . import preview

__all__ = ["preview"]
