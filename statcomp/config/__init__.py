"""
Configuration loading for statcomp.
"""

from statcomp.config.loader import load_constants, get_section, clear_cache

__all__ = [
    'load_constants',
    'get_section',
    'clear_cache',
]
