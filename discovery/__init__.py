"""Directory scanners for autostart entries and applications."""
