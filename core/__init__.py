"""Configuration, runtime wiring and host inspection."""
