"""Unit tests (no external services)."""
