"""Configuration, logging, errors and application lifecycle."""
