"""Configuration package: settings, database, logging and metrics."""
