"""
Formatting, configuration, error handling and plan export utilities.
"""
