"""
Client modules for external APIs.
"""

from .catalog import CatalogClient

__all__ = [
    'CatalogClient',
]
