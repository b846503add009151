"""Service module exports."""

from . import activity, auth, export_csv, habits, journal

__all__ = ["activity", "auth", "export_csv", "habits", "journal"]
