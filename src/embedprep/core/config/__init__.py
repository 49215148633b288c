"""
Configuration: application settings and preprocessing config validation.
"""
