"""Autostart entry and application records."""
