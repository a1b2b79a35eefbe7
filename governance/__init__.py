"""Operation journal."""
