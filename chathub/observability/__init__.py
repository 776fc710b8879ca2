"""Logging, correlation IDs and request middleware."""
