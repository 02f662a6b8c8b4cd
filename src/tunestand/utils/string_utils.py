"""
String utility functions for normalization, matching and display.
"""

import unicodedata
from typing import Optional


def normalize_string(s: Optional[str]) -> str:
    """
    Normalize a string for comparison (lowercase, strip whitespace, normalize special characters).
    
    Args:
        s: String to normalize
        
    Returns:
        Normalized string
    """
    if not s:
        return ""
    # NFKD splits accented letters so "Gocer" matches "Göçer"
    normalized = unicodedata.normalize('NFKD', s)
    normalized = "".join(c for c in normalized if not unicodedata.combining(c))
    # casefold handles the dotted/dotless i pair that lower() leaves alone
    normalized = normalized.casefold().strip()
    normalized = normalized.replace("ı", "i")
    normalized = normalized.replace(" & ", " and ")
    for char in ["‘", "’", "‚", "‛", "′", "‵", "ʼ", "ʻ"]:
        normalized = normalized.replace(char, "'")
    normalized = normalized.replace("–", "-").replace("—", "-")
    normalized = " ".join(normalized.split())
    return normalized


def contains_normalized(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Return True if needle occurs in haystack after normalization."""
    needle = normalize_string(needle)
    if not needle:
        return False
    return needle in normalize_string(haystack)


def format_duration(seconds: Optional[float]) -> Optional[str]:
    """Format a duration in seconds as M:SS (H:MM:SS past an hour)."""
    if seconds is None or seconds < 0:
        return None
    total_seconds = int(seconds)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
