"""
places_applet package.

Entry point and logging for the panel places applet.
"""

__all__ = ["main", "logger"]
