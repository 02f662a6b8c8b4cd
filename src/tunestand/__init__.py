"""
Tunestand - single-artist music storefront and player.
"""

__version__ = "1.0.0"
