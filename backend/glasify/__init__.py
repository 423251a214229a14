"""Glasify catalog seeding pipeline."""
__version__ = "1.0.0"
