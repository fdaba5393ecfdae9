"""Structured JSON log line rendering."""
