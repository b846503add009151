"""Blueprint exports."""

from . import auth, dashboard, habits, journal

__all__ = ["auth", "dashboard", "habits", "journal"]
