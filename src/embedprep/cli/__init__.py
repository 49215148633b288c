"""
EmbedPrep command-line interface.
"""
