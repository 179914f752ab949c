"""Shared helpers: errors, logging and constants."""
