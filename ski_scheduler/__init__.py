"""Ski lesson scheduler backend."""
