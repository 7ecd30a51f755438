"""Shared helpers: tracing and logging setup."""
