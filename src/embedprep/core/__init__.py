"""
Core configuration, logging and exception infrastructure for EmbedPrep.
"""
