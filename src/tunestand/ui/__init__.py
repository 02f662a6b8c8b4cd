"""
User interface components for Tunestand.
"""

from .cli import TunestandCLI
from .display import DisplayManager

__all__ = [
    'TunestandCLI',
    'DisplayManager'
]
