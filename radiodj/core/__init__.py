"""Shared infrastructure: settings, logging, database, errors and metrics."""
