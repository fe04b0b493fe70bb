"""Database models and session handling."""

from .session import SessionManager, commit_or_raise, flush_or_raise

__all__ = ['SessionManager', 'commit_or_raise', 'flush_or_raise']
