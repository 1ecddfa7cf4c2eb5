"""Parsing, identifier, URL and logging helpers."""
