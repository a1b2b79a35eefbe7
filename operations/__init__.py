"""Autostart entry operations: create, edit, toggle, delete."""
