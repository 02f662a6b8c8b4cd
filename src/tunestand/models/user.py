"""
Signed-in user session.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class UserSession:
    """Credentials returned by a password sign-in."""
    user_id: str
    access_token: str
    email: Optional[str] = None
    refresh_token: Optional[str] = None
