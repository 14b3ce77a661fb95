"""
Session - Game lifecycle management.

A session owns one RoundState from game start until the player
returns to the title.
"""

from .manager import Session, SessionManager, SessionState

__all__ = ["Session", "SessionManager", "SessionState"]
