"""Adapters for external corpus sources."""
