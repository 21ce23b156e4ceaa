"""Configuration, logging, date and draft helpers for asanacli."""
